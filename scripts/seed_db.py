from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.paytracker.paytracker.database.bootstrap import apply_seed_sql, ensure_demo_company
from src.paytracker.paytracker.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_company(db_config)

    print(f"OK: demo data loaded -> {DBConfig.from_dict(db_config).describe()}")
    print("  company EPT-0001 | admin / admin123 | adjoint / adjoint123")
    print("  manager PIN 770000001 (Production)")


if __name__ == "__main__":
    main()
