"""
Pytest configuration and fixtures for genogram tests.

This module provides:
- Sample raw documents (small family, three generations, malformed records)
- Laid-out results built from them
- An initialized document store in a temporary directory
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from genogram.config import AppConfig
from genogram.database import DocumentStore
from genogram.layout import layout_document


# ============================================================
# DOCUMENT FIXTURES
# ============================================================


@pytest.fixture
def small_family():
    """Self, spouse and one child."""
    return {
        "members": [
            {"id": "self", "name": "Taro", "gender": "M", "generation": 0, "isSelf": True},
            {"id": "spouse", "name": "Hanako", "gender": "F", "generation": 0},
            {"id": "child1", "name": "Ichiro", "gender": "M", "generation": 1},
        ],
        "marriages": [
            {"husband": "self", "wife": "spouse", "status": "married", "children": ["child1"]},
        ],
    }


@pytest.fixture
def three_generations():
    """Grandparents, parents with an uncle, self with a divorced partner and children."""
    return {
        "members": [
            {"id": "son", "name": "Son", "gender": "M", "generation": 1, "birthYear": 1990},
            {"id": "self", "name": "Self", "gender": "F", "generation": 0, "isSelf": True, "birthYear": 1962},
            {"id": "father", "name": "Father", "gender": "M", "generation": -1, "isDeceased": True, "birthYear": 1930},
            {"id": "mother", "name": "Mother", "gender": "F", "generation": -1, "birthYear": 1934},
            {"id": "uncle", "name": "Uncle", "gender": "M", "generation": -1},
            {"id": "ex", "name": "Ex", "gender": "M", "generation": 0},
            {"id": "brother", "name": "Brother", "gender": "M", "generation": 0, "birthYear": 1960},
            {"id": "daughter", "name": "Daughter", "gender": "F", "generation": 1, "birthYear": 1993},
            {"id": "grandpa", "name": "Grandpa", "gender": "M", "generation": -2},
            {"id": "grandma", "name": "Grandma", "gender": "F", "generation": -2},
        ],
        "marriages": [
            {"husband": "grandpa", "wife": "grandma", "status": "married", "children": ["father", "uncle"]},
            {"husband": "father", "wife": "mother", "status": "married", "children": ["brother", "self"]},
            {"husband": "ex", "wife": "self", "status": "divorced", "children": ["son", "daughter"]},
        ],
    }


@pytest.fixture
def small_layout(small_family):
    return layout_document(small_family)


@pytest.fixture
def family_layout(three_generations):
    return layout_document(three_generations)


# ============================================================
# STORE FIXTURES
# ============================================================


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(data_dir=tmp_path, db_path=tmp_path / "genogram.db", gemini_api_key="test-key")


@pytest.fixture
def store(app_config):
    """Initialized document store backed by a temporary SQLite file."""
    s = DocumentStore(app_config.db_path)
    s.initialize()
    return s
