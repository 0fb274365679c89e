"""Shared fixtures for the Solve360 record layer tests.

Provides:
- Settings pointing at a fake API root, with a default ownership
- A FieldMappingRegistry with a small Contact table
- An AsyncMock Transport (no network)
- A RecordController wiring the three together
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from src.solve360.config import Settings
from src.solve360.controller import RecordController
from src.solve360.field_mapping import FieldMappingRegistry
from src.solve360.transport import Transport

CONTACT_TEST_FIELDS = {
    "First Name": "firstname",
    "Last Name": "lastname",
    "Email": "businessemail",
    "Description": "custom12345",
}


@pytest.fixture
def settings() -> Settings:
    """Settings for a fake Solve360 account."""
    return Settings(
        _env_file=None,
        SOLVE360_URL="https://crm.test/",
        SOLVE360_USERNAME="user@example.com",
        SOLVE360_TOKEN="secret-token",
        SOLVE360_DEFAULT_OWNERSHIP="owner-42",
    )


@pytest.fixture
def registry() -> FieldMappingRegistry:
    """Registry with a Contact table."""
    registry = FieldMappingRegistry()
    registry.define("Contact", CONTACT_TEST_FIELDS)
    return registry


@pytest.fixture
def mock_transport():
    """Transport double; tests set execute.return_value / side_effect."""
    return AsyncMock(spec=Transport)


@pytest.fixture
def controller(registry, mock_transport, settings) -> RecordController:
    """Contact controller backed by the mock transport."""
    return RecordController("Contact", registry, mock_transport, settings)
