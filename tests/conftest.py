"""
Root test configuration and fixtures for the reconcile project.

Provides small registration and check-in tables shaped like the real
exports, plus a mock PocketBase client.

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from reconcile.core.models import FieldMap, Table  # noqa: E402
from reconcile.settings import get_settings  # noqa: E402

REGISTRATION_HEADER = [
    "Timestamp",
    "First Name",
    "Last Name (Surname)",
    "Email",
    "What city/state do you stay in?",
    "Are you camping?",
]
CHECKIN_HEADER = ["camper_firstName", "camper_lastName", "camper_email", "location"]


@pytest.fixture
def reference_fields():
    return FieldMap(first_name="First Name", last_name="Last Name (Surname)", email="Email")


@pytest.fixture
def input_fields():
    return FieldMap(first_name="camper_firstName", last_name="camper_lastName", email="camper_email")


@pytest.fixture
def registration_table():
    """Registration export with a mix of locations and camping answers."""
    rows = [
        ["11/1", "Ann", "Lee", "a@x.com", "Outside Benin", "Yes"],
        ["11/1", "John", "Doe", "john@x.com", "Benin", "No"],
        ["11/2", "Maria", "Garcia", "", "Outside Benin", "Yes"],
        ["11/2", "Chidi", "Isaac Okafor", "chidi@x.com", "Delta", "yes"],
        ["11/3", "", "Nameless", "ghost@x.com", "Benin", "Yes"],
    ]
    return Table.from_rows([dict(zip(REGISTRATION_HEADER, row)) for row in rows], header=REGISTRATION_HEADER)


@pytest.fixture
def checkin_table():
    rows = [
        ["ann", "lee", "A@X.COM", "gate"],
        ["Doe", "John", "", "gate"],
        ["Maria", "Garcia", "maria@elsewhere.com", "hall"],
        ["Isaac", "Chidi", "", "hall"],
        ["Peter", "Pan", "peter@x.com", "gate"],
    ]
    return Table.from_rows([dict(zip(CHECKIN_HEADER, row)) for row in rows], header=CHECKIN_HEADER)


def create_mock_pocketbase():
    """Create a mock PocketBase instance."""
    mock_pb = Mock()
    mock_collection = Mock()
    mock_collection.auth_with_password = Mock(return_value=True)
    mock_collection.get_full_list = Mock(return_value=[])
    mock_pb.collection = Mock(return_value=mock_collection)
    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Fresh settings read from a clean environment."""
    for name in list(os.environ):
        if name.startswith("RECONCILE_") or name == "LOG_LEVEL":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
