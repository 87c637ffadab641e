"""Tests for the fixed-shape user, property and reservation queries."""

from __future__ import annotations

import pytest

from lightbnb.backend.error_handling import UnknownColumnError
from lightbnb.config.settings import Settings
from lightbnb.data.queries import (
    build_add_property_query,
    build_add_user_query,
    build_reservations_query,
    build_user_by_email_query,
    build_user_by_id_query,
)


def test_user_by_email_query():
    query, params = build_user_by_email_query("a@b.com")
    assert query == "SELECT users.*\nFROM users\nWHERE users.email = $1"
    assert params == ["a@b.com"]


def test_user_by_id_query_coerces_id_to_int():
    query, params = build_user_by_id_query("42")
    assert "WHERE users.id = $1" in query
    assert params == [42]


def test_add_user_query_uses_fixed_column_order():
    query, params = build_add_user_query({"password": "pw", "email": "e@x.com", "name": "Eve"})
    assert "INSERT INTO users (name, email, password)" in query
    assert params == ["Eve", "e@x.com", "pw"]


def test_add_user_query_requires_all_fields():
    with pytest.raises(KeyError):
        build_add_user_query({"name": "Eve", "email": "e@x.com"})


def test_add_property_query_follows_mapping_order():
    record = {"title": "Loft", "owner_id": 1, "cost_per_night": 12000, "city": "Vancouver"}
    query, params = build_add_property_query(record)

    assert "INSERT INTO properties (title, owner_id, cost_per_night, city)" in query
    assert "VALUES ($1, $2, $3, $4)" in query
    assert params == ["Loft", 1, 12000, "Vancouver"]


def test_add_property_query_rejects_unknown_columns():
    """Keys outside the properties whitelist never reach the SQL text."""
    with pytest.raises(UnknownColumnError) as exc_info:
        build_add_property_query({"title": "Loft", "id": 5, "owner_id) VALUES (1); --": 1})

    assert exc_info.value.table_name == "properties"
    assert exc_info.value.columns == ["id", "owner_id) VALUES (1); --"]
    assert isinstance(exc_info.value, ValueError)


def test_add_property_query_rejects_empty_record():
    with pytest.raises(ValueError, match="at least one column"):
        build_add_property_query({})


def test_reservations_query_keeps_legacy_guest_pin():
    """By default the listing ignores the guest id and shows guest 1."""
    query, params = build_reservations_query(guest_id=7, limit=3)

    assert "WHERE reservations.guest_id = 1" in query
    assert params == [3]
    assert query.rstrip().endswith("LIMIT $1")
    assert "ORDER BY reservations.start_date" in query


def test_reservations_query_can_filter_by_guest():
    query, params = build_reservations_query(guest_id="7", limit=3, filter_by_guest=True)

    assert "WHERE reservations.guest_id = $1" in query
    assert "LIMIT $2" in query
    assert params == [7, 3]


def test_reservations_query_reads_setting(monkeypatch):
    monkeypatch.setattr(Settings, "RESERVATIONS_FILTER_BY_GUEST", True)
    _, params = build_reservations_query(guest_id=2)
    assert params == [2, 10]


def test_reservations_query_none_limit_falls_back_to_default():
    query, params = build_reservations_query(guest_id=1, limit=None)
    assert query.endswith("LIMIT $1")
    assert params == [Settings.DEFAULT_RESULT_LIMIT]
