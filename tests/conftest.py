"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, Any, List

from stockmatch.database import init_database, get_session
from stockmatch.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh global logger per test, no console or file output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_file=False, enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def reclaimed_oak() -> Dict[str, Any]:
    """Candidate material with every scored field set."""
    return {
        "name": "Reclaimed Oak",
        "category": "wood",
        "subcategory": "oak",
        "origin": "UK",
    }


@pytest.fixture
def existing_stock() -> List[Dict[str, Any]]:
    """Stored materials for one company."""
    return [
        {
            "id": "m-1",
            "name": "Aluminum Rod",
            "category": "metal",
            "quantity": 12,
            "unit": "pieces",
        },
        {
            "id": "m-2",
            "name": "reclaimed oak",
            "category": "wood",
            "subcategory": "Oak",
            "origin": "uk",
            "quantity": 3.5,
            "unit": "m³",
            "cost_per_unit": 420.0,
        },
        {
            "id": "m-3",
            "name": "Reclaimed Oak Board Set",
            "category": "wood",
            "quantity": 40,
            "unit": "sheets",
        },
    ]


@pytest.fixture
def valid_material() -> Dict[str, Any]:
    """Valid material intake payload."""
    return {
        "name": "Reclaimed Oak",
        "category": "wood",
        "subcategory": "oak",
        "origin": "UK",
        "quantity": 2,
        "unit": "m³",
        "cost_per_unit": 410.0,
    }


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "stock.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on an empty temporary database."""
    session = get_session(db_path)
    yield session
    session.close()
