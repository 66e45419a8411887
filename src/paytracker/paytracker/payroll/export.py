from __future__ import annotations

import csv
import io
from typing import Dict, List, Sequence

import pandas as pd

from .model import ArchivedPayroll, PayrollRecap, PayStub

RECAP_FIELDS = [
    "Employé",
    "Département",
    "Poste",
    "Jours présents",
    "Salaire journalier",
    "Salaire de base",
    "Ajustements",
    "Remboursement avance",
    "Total à payer",
]


def recap_rows(recap: PayrollRecap) -> List[Dict[str, object]]:
    return [
        {
            "Employé": line.employee.full_name,
            "Département": line.department_name,
            "Poste": line.employee.position,
            "Jours présents": line.days_present,
            "Salaire journalier": float(line.wage),
            "Salaire de base": float(line.base_pay),
            "Ajustements": float(line.total_adjustments),
            "Remboursement avance": float(line.loan_repayment),
            "Total à payer": float(line.total_pay),
        }
        for line in recap.lines
    ]


def stub_rows(stubs: Sequence[PayStub]) -> List[Dict[str, object]]:
    return [
        {
            "Employé": s.employee_name,
            "Département": "",
            "Poste": "",
            "Jours présents": s.days_present,
            "Salaire journalier": float(s.daily_wage_at_time),
            "Salaire de base": float(s.base_pay),
            "Ajustements": float(s.total_adjustments),
            "Remboursement avance": float(s.loan_repayment),
            "Total à payer": float(s.total_pay),
        }
        for s in stubs
    ]


def to_csv_bytes(rows: Sequence[Dict[str, object]]) -> bytes:
    """CSV with a UTF-8 BOM so Excel opens accents correctly."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=RECAP_FIELDS, delimiter=";")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def _department_frame(departments) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Département": d.name, "Employés": d.employee_count, "Total": float(d.total)} for d in departments],
        columns=["Département", "Employés", "Total"],
    )


def recap_to_excel(recap: PayrollRecap) -> io.BytesIO:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(recap_rows(recap), columns=RECAP_FIELDS).to_excel(writer, index=False, sheet_name="Paie")
        _department_frame(recap.departments).to_excel(writer, index=False, sheet_name="Départements")
    output.seek(0)
    return output


def archive_to_excel(archive: ArchivedPayroll, stubs: Sequence[PayStub]) -> io.BytesIO:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(stub_rows(stubs), columns=RECAP_FIELDS).to_excel(writer, index=False, sheet_name="Paie")
        _department_frame(archive.departments).to_excel(writer, index=False, sheet_name="Départements")
    output.seek(0)
    return output
