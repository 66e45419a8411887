from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    department_id: int
    company_id: int
    name: str
    manager_id: Optional[int] = None
