"""
Materials Repository.

Responsibilities:
- CRUD operations for the materials table, always scoped to a company.
- Quantity-additive merge of incoming stock into an existing row.

Non-Responsibilities:
- No business logic.
- No duplicate detection.
- No scoring.

Invariant:
Repositories must not encode domain decisions.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from stockmatch.database import Material


class MaterialNotFound(LookupError):
    """Raised when a material id does not exist for the given company."""
    pass


class UnitMismatch(ValueError):
    """Raised when merging a quantity whose unit differs from the stored row."""
    pass


def list_materials(session, company_id: str) -> List[Material]:
    return (
        session.query(Material)
        .filter_by(company_id=company_id)
        .order_by(Material.created_at, Material.id)
        .all()
    )


def get_material(session, company_id: str, material_id: str) -> Material:
    material = (
        session.query(Material)
        .filter_by(company_id=company_id, id=material_id)
        .first()
    )
    if material is None:
        raise MaterialNotFound(f"No material {material_id} for company {company_id}")
    return material


def create_material(session, company_id: str, data: Dict[str, Any]) -> Material:
    material = Material(
        company_id=company_id,
        name=data["name"],
        category=data["category"],
        subcategory=data.get("subcategory"),
        origin=data.get("origin"),
        quantity=data.get("quantity", 0.0),
        unit=data["unit"],
        cost_per_unit=data.get("cost_per_unit"),
        description=data.get("description"),
    )
    session.add(material)
    session.commit()
    return material


def merge_quantity(
    session,
    company_id: str,
    material_id: str,
    quantity: float,
    unit: Optional[str] = None,
) -> Material:
    """
    Add quantity to an existing row.

    Args:
        session: Open database session
        company_id: Tenant that owns the row
        material_id: Row to add to
        quantity: Amount to add
        unit: Unit of the incoming quantity; must equal the stored unit when given

    Raises:
        MaterialNotFound: If the id does not exist for the company
        UnitMismatch: If unit differs from the stored unit
    """
    material = get_material(session, company_id, material_id)
    if unit is not None and unit != material.unit:
        raise UnitMismatch(
            f"Cannot add {quantity:g} {unit} to material {material_id} stored in {material.unit}"
        )
    material.quantity = (material.quantity or 0.0) + quantity
    material.updated_at = datetime.now()
    session.commit()
    return material
