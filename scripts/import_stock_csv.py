#!/usr/bin/env python3
"""
Import material stock rows from CSV, checking each row for duplicates.

Expected columns (header row is skipped):
    name,category,subcategory,origin,quantity,unit,cost_per_unit

Usage:
    python scripts/import_stock_csv.py --csv stock.csv --company acme --on-duplicate merge
"""

import argparse
import csv
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stockmatch.app import intake_material
from stockmatch.database import init_database, get_session
from stockmatch.env import load_env, db_path, default_company
from stockmatch.logger import get_logger

COLUMNS = ["name", "category", "subcategory", "origin", "quantity", "unit", "cost_per_unit"]
NUMERIC_COLUMNS = {"quantity", "cost_per_unit"}


def parse_number(value: str):
    """Parse a numeric cell. Blank gives None, garbage is returned as-is for validation to reject."""
    value = value.strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return value


def read_rows(csv_path: Path):
    """
    Yield (line_number, material dict) for each non-blank data row.

    Args:
        csv_path: Path to the CSV file
    """
    with open(csv_path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)
        for line_no, row in enumerate(reader, start=2):
            if not any(cell.strip() for cell in row):
                continue
            cells = [cell.strip() for cell in row] + [""] * (len(COLUMNS) - len(row))
            material = {}
            for column, cell in zip(COLUMNS, cells):
                if column in NUMERIC_COLUMNS:
                    value = parse_number(cell)
                else:
                    value = cell or None
                if value is not None:
                    material[column] = value
            yield line_no, material


def import_csv(csv_path: Path, db: Path, company_id: str, on_duplicate: str = "skip", dry_run: bool = False) -> dict:
    """
    Run every CSV row through the intake workflow.

    Args:
        csv_path: CSV file to read
        db: Path to SQLite database file
        company_id: Company the stock belongs to
        on_duplicate: merge, create or skip
        dry_run: If True, only parse and report

    Returns:
        Counts keyed by intake status
    """
    counts = {"created": 0, "merged": 0, "duplicates": 0, "validation_error": 0}
    rows = list(read_rows(csv_path))
    print(f"Found {len(rows)} rows in {csv_path}")

    if dry_run:
        print("\n[DRY RUN] Would import the following rows:")
        for line_no, material in rows[:5]:
            print(f"  line {line_no}: {material.get('name')} ({material.get('category')}) qty={material.get('quantity')}")
        if len(rows) > 5:
            print(f"  ... and {len(rows) - 5} more")
        return counts

    policy = "ask" if on_duplicate == "skip" else on_duplicate
    init_database(db)
    session = get_session(db)
    try:
        for line_no, material in rows:
            outcome = intake_material(material, session, company_id, on_duplicate=policy)
            status = outcome["status"]
            counts[status] += 1
            if status == "validation_error":
                print(f"⚠️  line {line_no}: {'; '.join(outcome['errors'])}")
            elif status == "duplicates":
                best = outcome["matches"][0]
                print(f"⚠️  line {line_no}: skipped, looks like {best['name']} ({best['similarity']}%)")
    finally:
        session.close()

    print("\n✅ Import complete!")
    for status, n in counts.items():
        print(f"   {status}: {n}")
    get_logger().log_metrics_summary()
    return counts


def main():
    load_env()
    parser = argparse.ArgumentParser(description="Import material stock from CSV")
    parser.add_argument("--csv", type=Path, required=True, help="Path to CSV file")
    parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database file")
    parser.add_argument("--company", default=default_company(), help="Company id (default: STOCKMATCH_COMPANY)")
    parser.add_argument("--on-duplicate", choices=["merge", "create", "skip"], default="skip",
                        help="What to do with rows that match existing stock")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be imported without writing")

    args = parser.parse_args()

    if not args.csv.exists():
        print(f"❌ CSV file not found: {args.csv}")
        sys.exit(1)
    if not args.company:
        print("❌ No company given. Pass --company or set STOCKMATCH_COMPANY.")
        sys.exit(1)

    import_csv(args.csv, args.db or db_path(), args.company, on_duplicate=args.on_duplicate, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
