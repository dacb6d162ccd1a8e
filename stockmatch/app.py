import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pipelines.entity_resolution import MatchResult, find_matches
from storage.repositories.materials import (
    MaterialNotFound,
    UnitMismatch,
    create_material,
    list_materials,
    merge_quantity,
)

from . import __version__
from .database import init_database, get_session
from .env import load_env, db_path, default_company, log_level
from .logger import get_logger
from .schema import validate_material, sanitize_material, sanitize_candidate

ON_DUPLICATE_CHOICES = ("ask", "merge", "create")
EXIT_DUPLICATES = 3


def _match_summary(match: MatchResult) -> Dict[str, Any]:
    record = match.record
    return {
        "id": record.get("id"),
        "name": record.get("name"),
        "category": record.get("category"),
        "quantity": record.get("quantity"),
        "unit": record.get("unit"),
        "similarity": match.similarity,
    }


def check_duplicates(data: Dict[str, Any], session, company_id: str) -> List[MatchResult]:
    records = [m.to_record() for m in list_materials(session, company_id)]
    matches = find_matches(data, records)
    get_logger().record_check(data.get("category"), len(matches))
    return matches


def intake_material(
    data: Dict[str, Any],
    session,
    company_id: str,
    on_duplicate: str = "ask",
    merge_into: Optional[str] = None,
) -> dict:
    """
    Validate a material, check it against the company's stock, then merge or create.

    Args:
        data: Raw material input
        session: Open database session
        company_id: Tenant the material belongs to
        on_duplicate: ask (report matches, write nothing), merge (into the
            top match with the same unit, else report matches) or create
            (insert anyway)
        merge_into: Explicit id to merge into; overrides on_duplicate

    Returns:
        Dict with status (validation_error, duplicates, merged, created),
        material_id and the ranked matches

    Raises:
        MaterialNotFound: If merge_into is not a material of the company
        UnitMismatch: If merge_into is stored in a different unit
    """
    if on_duplicate not in ON_DUPLICATE_CHOICES:
        raise ValueError(f"on_duplicate must be one of {ON_DUPLICATE_CHOICES}, got {on_duplicate!r}")

    logger = get_logger()
    errors = validate_material(data)
    if errors:
        logger.record_validation_error()
        logger.warning("Material failed validation", errors=errors)
        return {"material_id": None, "status": "validation_error", "errors": errors, "matches": []}

    clean = sanitize_material(data)
    matches = check_duplicates(clean, session, company_id)
    summaries = [_match_summary(m) for m in matches]

    target = merge_into
    if target is None and matches and on_duplicate == "merge":
        same_unit = [m for m in matches if m.record.get("unit") == clean["unit"]]
        if same_unit:
            target = same_unit[0].record["id"]
        else:
            logger.warning(
                "No duplicate shares the incoming unit, not merging",
                company_id=company_id,
                name=clean["name"],
                unit=clean["unit"],
            )
            return {"material_id": None, "status": "duplicates", "matches": summaries}

    if target is not None:
        material = merge_quantity(session, company_id, target, clean["quantity"], unit=clean["unit"])
        logger.record_merged()
        logger.info(
            "Merged material into existing stock",
            company_id=company_id,
            material_id=material.id,
            added=clean["quantity"],
            quantity=material.quantity,
        )
        return {"material_id": material.id, "status": "merged", "matches": summaries}

    if matches and on_duplicate == "ask":
        logger.info(
            "Possible duplicates found",
            company_id=company_id,
            name=clean["name"],
            matches=len(matches),
        )
        return {"material_id": None, "status": "duplicates", "matches": summaries}

    material = create_material(session, company_id, clean)
    logger.record_created()
    logger.info("Created material", company_id=company_id, material_id=material.id, name=material.name)
    return {"material_id": material.id, "status": "created", "matches": summaries}


def _read_json(path_str: str) -> Dict[str, Any]:
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise SystemExit(f"Input must be a JSON object: {input_path}")
    return data


def _company(args: argparse.Namespace) -> str:
    company = args.company or default_company()
    if not company:
        raise SystemExit("No company given. Pass --company or set STOCKMATCH_COMPANY.")
    return company


def _open_session(args: argparse.Namespace):
    path = Path(args.db) if args.db else db_path()
    init_database(path)
    return get_session(path)


def _print_matches(matches: List[Dict[str, Any]]) -> None:
    for m in matches:
        print(f" - [{m['similarity']}%] {m['id']}  {m['name']} ({m['category']}) qty={m['quantity']} {m['unit']}")


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    errors = validate_material(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_check(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    company = _company(args)
    session = _open_session(args)
    try:
        matches = check_duplicates(sanitize_candidate(data), session, company)
    finally:
        session.close()
    if not matches:
        print("No duplicates found.")
        return
    print(f"Possible duplicates ({len(matches)}):")
    _print_matches([_match_summary(m) for m in matches])


def cmd_add(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    company = _company(args)
    on_duplicate = "create" if args.create_new else "ask"
    session = _open_session(args)
    try:
        outcome = intake_material(data, session, company, on_duplicate=on_duplicate, merge_into=args.merge_into)
    except (MaterialNotFound, UnitMismatch) as e:
        raise SystemExit(str(e))
    finally:
        session.close()

    status = outcome["status"]
    if status == "validation_error":
        print("Invalid:")
        for e in outcome["errors"]:
            print(f" - {e}")
        raise SystemExit(2)
    if status == "duplicates":
        print("Possible duplicates found:")
        _print_matches(outcome["matches"])
        print("Re-run with --merge-into <id> to add the quantity, or --create-new to store separately.")
        raise SystemExit(EXIT_DUPLICATES)
    print(f"Material: {outcome['material_id']}")
    print(f"Status: {status}")


def cmd_list(args: argparse.Namespace) -> None:
    company = _company(args)
    session = _open_session(args)
    try:
        materials = list_materials(session, company)
        if not materials:
            print("No materials stored.")
            return
        for m in materials:
            cost = f" @ {m.cost_per_unit:.2f}" if m.cost_per_unit is not None else ""
            print(f"{m.id}  {m.name} ({m.category}) qty={m.quantity:g} {m.unit}{cost}")
    finally:
        session.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stockmatch", description="Material stock intake with duplicate detection")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument("--db", help="Path to SQLite database (default: STOCKMATCH_DB or data/stock.db)")
    subparsers = parser.add_subparsers(dest="command")

    val = subparsers.add_parser("validate", help="Validate a material JSON input")
    val.add_argument("--input", required=True, help="Path to material JSON input")
    val.set_defaults(func=cmd_validate)

    chk = subparsers.add_parser("check", help="List stored materials that look like the input")
    chk.add_argument("--input", required=True, help="Path to material JSON input")
    chk.add_argument("--company", help="Company id (default: STOCKMATCH_COMPANY)")
    chk.set_defaults(func=cmd_check)

    add = subparsers.add_parser("add", help="Add a material, stopping if duplicates are found")
    add.add_argument("--input", required=True, help="Path to material JSON input")
    add.add_argument("--company", help="Company id (default: STOCKMATCH_COMPANY)")
    choice = add.add_mutually_exclusive_group()
    choice.add_argument("--merge-into", help="Add the quantity to this existing material id")
    choice.add_argument("--create-new", action="store_true", help="Store as a separate material even if duplicates exist")
    add.set_defaults(func=cmd_add)

    lst = subparsers.add_parser("list", help="List stored materials for a company")
    lst.add_argument("--company", help="Company id (default: STOCKMATCH_COMPANY)")
    lst.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_env()
    get_logger(level=log_level())
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
