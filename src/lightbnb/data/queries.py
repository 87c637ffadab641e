"""
SQL builders for the LightBnB data access layer.

Every builder returns a ``(sql, params)`` tuple ready for execution with
``$1, $2, ...`` placeholders. The builders are pure: they never touch the
store and hold no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List, Mapping, Optional, Tuple

from lightbnb.backend.error_handling import UnknownColumnError
from lightbnb.config.database import DatabaseConfig
from lightbnb.config.settings import Settings
from lightbnb.utils.query_builder import FilterOperator, PositionalQueryBuilder

BuiltQuery = Tuple[str, List[Any]]

# Reservation listing has always been pinned to this guest
LEGACY_RESERVATION_GUEST_ID = 1

AVERAGE_RATING_EXPR = "avg(property_reviews.rating)"


@dataclass
class PropertySearchFilters:
    """Optional search criteria for property listings.

    A criterion that is present but falsy (``0``, ``""``) is treated as
    absent, matching the behaviour of the web application's search form.
    """

    city: Optional[str] = None
    owner_id: Optional[Any] = None
    minimum_price_per_night: Optional[Any] = None
    maximum_price_per_night: Optional[Any] = None
    minimum_rating: Optional[Any] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "PropertySearchFilters":
        """Build filters from a request-style mapping, ignoring unknown keys."""
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in options.items() if key in known})


def to_minor_units(amount: Any) -> Any:
    """
    Convert a price in major currency units to minor units (cents).

    Values that are not numeric are passed through untouched so the store
    reports the problem.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return amount
    if not value.is_finite():
        return amount
    return int((value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def _to_number(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    return value


def _property_group_by() -> str:
    return ", ".join(f"properties.{column}" for column in DatabaseConfig.get_property_table_columns())


def build_property_search_query(
    filters: Optional[PropertySearchFilters] = None,
    limit: Optional[int] = None,
) -> BuiltQuery:
    """
    Build the filtered property search.

    Returns properties with their average review rating, cheapest first.
    WHERE predicates are added in the fixed order city, owner, minimum price,
    maximum price; the rating bound goes into HAVING; LIMIT is always the
    last placeholder.

    Args:
        filters: Search criteria; None means no filtering
        limit: Maximum number of rows to return; None means the default limit

    Returns:
        Tuple of (SQL string, positional parameters)
    """
    filters = filters or PropertySearchFilters()
    if limit is None:
        limit = Settings.DEFAULT_RESULT_LIMIT
    builder = PositionalQueryBuilder()

    where_conditions = []
    if filters.city:
        where_conditions.append(
            builder.build_filter_condition("properties.city", FilterOperator.LIKE, f"%{filters.city}%")
        )
    if filters.owner_id:
        where_conditions.append(
            builder.build_filter_condition("properties.owner_id", FilterOperator.EQUALS, filters.owner_id)
        )
    if filters.minimum_price_per_night:
        where_conditions.append(
            builder.build_filter_condition(
                "properties.cost_per_night",
                FilterOperator.GREATER_EQUAL,
                to_minor_units(filters.minimum_price_per_night),
            )
        )
    if filters.maximum_price_per_night:
        where_conditions.append(
            builder.build_filter_condition(
                "properties.cost_per_night",
                FilterOperator.LESS_EQUAL,
                to_minor_units(filters.maximum_price_per_night),
            )
        )

    having_conditions = []
    if filters.minimum_rating:
        having_conditions.append(
            builder.build_filter_condition(
                AVERAGE_RATING_EXPR, FilterOperator.GREATER_EQUAL, _to_number(filters.minimum_rating)
            )
        )

    query = builder.build_query(
        select_clause=f"properties.*, {AVERAGE_RATING_EXPR} AS average_rating",
        from_clause="properties\nJOIN property_reviews ON properties.id = property_reviews.property_id",
        where_conditions=where_conditions,
        group_by=_property_group_by(),
        having_conditions=having_conditions,
        order_by="properties.cost_per_night",
        limit=limit,
    )
    return query, builder.get_parameters()


def build_user_by_email_query(email: str) -> BuiltQuery:
    builder = PositionalQueryBuilder()
    query = builder.build_query(
        select_clause="users.*",
        from_clause="users",
        where_conditions=[builder.build_filter_condition("users.email", FilterOperator.EQUALS, email)],
    )
    return query, builder.get_parameters()


def build_user_by_id_query(user_id: Any) -> BuiltQuery:
    builder = PositionalQueryBuilder()
    query = builder.build_query(
        select_clause="users.*",
        from_clause="users",
        where_conditions=[builder.build_filter_condition("users.id", FilterOperator.EQUALS, int(user_id))],
    )
    return query, builder.get_parameters()


def build_add_user_query(user: Mapping[str, Any]) -> BuiltQuery:
    """Insert a user from its name, email and password."""
    builder = PositionalQueryBuilder()
    record = {
        "name": user["name"],
        "email": user["email"],
        "password": user["password"],
    }
    query = builder.build_insert(DatabaseConfig.USERS_TABLE, record)
    return query, builder.get_parameters()


def build_add_property_query(property_record: Mapping[str, Any]) -> BuiltQuery:
    """
    Insert a property from a column/value mapping.

    Raises:
        UnknownColumnError: If any key is not a writable properties column
    """
    unknown = [key for key in property_record if not DatabaseConfig.is_property_column(key)]
    if unknown:
        raise UnknownColumnError(DatabaseConfig.PROPERTIES_TABLE, unknown)
    if not property_record:
        raise ValueError("Property record must contain at least one column")

    builder = PositionalQueryBuilder()
    query = builder.build_insert(DatabaseConfig.PROPERTIES_TABLE, dict(property_record))
    return query, builder.get_parameters()


def build_reservations_query(
    guest_id: Any,
    limit: Optional[int] = None,
    filter_by_guest: Optional[bool] = None,
) -> BuiltQuery:
    """
    Build the reservation listing with each property's average rating.

    Unless ``filter_by_guest`` (or Settings.RESERVATIONS_FILTER_BY_GUEST) is
    enabled the listing keeps its historical behaviour of showing guest 1's
    reservations whatever ``guest_id`` is passed.
    """
    if filter_by_guest is None:
        filter_by_guest = Settings.RESERVATIONS_FILTER_BY_GUEST
    if limit is None:
        limit = Settings.DEFAULT_RESULT_LIMIT

    builder = PositionalQueryBuilder()
    if filter_by_guest:
        guest_condition = builder.build_filter_condition(
            "reservations.guest_id", FilterOperator.EQUALS, int(guest_id)
        )
    else:
        guest_condition = f"reservations.guest_id = {LEGACY_RESERVATION_GUEST_ID}"

    query = builder.build_query(
        select_clause=(
            "reservations.id AS reservation_id, reservations.start_date, reservations.end_date, "
            f"reservations.guest_id, properties.*, {AVERAGE_RATING_EXPR} AS average_rating"
        ),
        from_clause=(
            "properties\n"
            "JOIN reservations ON properties.id = reservations.property_id\n"
            "JOIN property_reviews ON properties.id = property_reviews.property_id"
        ),
        where_conditions=[guest_condition],
        group_by=(
            "reservations.id, reservations.start_date, reservations.end_date, "
            f"reservations.guest_id, {_property_group_by()}"
        ),
        order_by="reservations.start_date",
        limit=limit,
    )
    return query, builder.get_parameters()
