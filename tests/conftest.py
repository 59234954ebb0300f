"""pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from name_values import NameValues


@pytest.fixture
def form_fields():
    """Raw form fields as a web framework would hand them over."""
    return {
        "Name": "Zaldy",
        "AGE": "48",
        "Tags": "a,b,c",
        "Subscribed": "on",
        "Balance": "10,281,028.4321",
        "Notes": "not a number",
    }


@pytest.fixture
def typed_row():
    """A query-result row with native values."""
    return {
        "Id": 1028,
        "Ratio": 0.25,
        "Active": True,
        "Amount": Decimal("12.50"),
        "Created": datetime(2021, 10, 17, 8, 30, tzinfo=timezone.utc),
        "Missing": None,
    }


@pytest.fixture
def form(form_fields):
    return NameValues(form_fields)


@pytest.fixture
def row(typed_row):
    return NameValues(typed_row)
