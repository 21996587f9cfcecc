#!/usr/bin/env python3
"""
Generate sample reservation workbooks for local testing.

Usage (from backend/):
    python -m scripts.generate_sample valid
    python -m scripts.generate_sample errors --out /tmp/with-errors.xlsx
    python -m scripts.generate_sample large --rows 100000
"""

import argparse
from datetime import date, timedelta
from pathlib import Path

from openpyxl import Workbook

from reservation_import.core.config import settings
from reservation_import.core.constants import RESERVATION_COLUMNS

HEADER = sorted(RESERVATION_COLUMNS, key=RESERVATION_COLUMNS.get)

FIRST_NAMES = ["Jan", "Anna", "Adam", "Maria", "Piotr", "Katarzyna"]
LAST_NAMES = ["Nowak", "Kowalski", "Wiśniewski", "Wójcik", "Kaczmarek"]
STATUSES = [
    settings.RESERVATION_STATUS_PENDING,
    settings.RESERVATION_STATUS_COMPLETED,
    settings.RESERVATION_STATUS_CANCELLED,
]


def valid_rows() -> list[list]:
    return [
        ["12345", "Jan Nowak", settings.RESERVATION_STATUS_PENDING, "2024-05-01", "2024-05-07"],
        ["12346", "Anna Kowal", settings.RESERVATION_STATUS_CANCELLED, "2024-06-10", "2024-06-15"],
        ["12347", "Adam Wiśniewski", settings.RESERVATION_STATUS_COMPLETED, date(2024, 4, 20), date(2024, 4, 25)],
        # Dates stored as spreadsheet serial numbers (45474 = 2024-07-01).
        [12348, "Maria Kowalska", settings.RESERVATION_STATUS_PENDING, 45474, 45483],
    ]


def error_rows() -> list[list]:
    return [
        ["12345", "Jan Nowak", settings.RESERVATION_STATUS_PENDING, None, "2024-05-07"],
        ["12346", "Anna Kowal", settings.RESERVATION_STATUS_CANCELLED, "2024-06-10", "2024-06-15"],
        ["12347", "Adam Wiśniewski", settings.RESERVATION_STATUS_COMPLETED, "2024-04-20", "Not a date"],
        ["12348", "Maria Kowalska", 1337, "2024-07-01", "2024-07-10"],
        ["12349", "Piotr Wójcik", settings.RESERVATION_STATUS_PENDING, "2024-08-10", "2024-08-01"],
        ["12346", "Anna Kowal", settings.RESERVATION_STATUS_PENDING, "2024-06-10", "2024-06-15"],
        [None, "Katarzyna Nowak", settings.RESERVATION_STATUS_PENDING, "2024-09-01", "2024-09-03"],
    ]


def large_rows(count: int):
    base = date(2024, 1, 1)
    for i in range(1, count + 1):
        check_in = base + timedelta(days=i % 365)
        check_out = check_in + timedelta(days=2 + i % 10)
        yield [
            str(100000 + i),
            f"{FIRST_NAMES[i % len(FIRST_NAMES)]} {LAST_NAMES[i % len(LAST_NAMES)]}",
            STATUSES[i % len(STATUSES)],
            check_in.isoformat(),
            check_out.isoformat(),
        ]


def write_workbook(path: Path, rows) -> int:
    workbook = Workbook(write_only=True)
    sheet = workbook.create_sheet("Reservations")
    sheet.append(HEADER)
    count = 0
    for row in rows:
        sheet.append(row)
        count += 1
        if count % 10_000 == 0:
            print(f"  Generated {count} rows")
    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    return count


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample reservations workbook")
    parser.add_argument("kind", choices=["valid", "errors", "large"], nargs="?", default="valid")
    parser.add_argument("--rows", type=int, default=100_000, help="row count for the large sample")
    parser.add_argument("--out", type=Path, default=None, help="output .xlsx path")
    args = parser.parse_args()

    if args.kind == "valid":
        rows = valid_rows()
    elif args.kind == "errors":
        rows = error_rows()
    else:
        rows = large_rows(args.rows)

    out = args.out or Path(f"sample-reservations-{args.kind}.xlsx")
    count = write_workbook(out, rows)
    print(f"Created {out} ({count} rows)")


if __name__ == "__main__":
    main()
