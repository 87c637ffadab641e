import duckdb
import pytest

from lightbnb.config.database import DatabaseConfig
from lightbnb.data.queries import PropertySearchFilters, build_property_search_query
from lightbnb.data.repositories.database_repository import DatabaseRepository


def test_create_schema_is_idempotent(temp_db_path):
    repo = DatabaseRepository(temp_db_path)

    repo.create_schema()
    repo.create_schema()

    for table in DatabaseConfig.TABLES:
        assert repo.table_exists(table)
        assert repo.get_table_count(table) == 0


def test_get_table_count_rejects_unknown_table(seeded_db_path):
    repo = DatabaseRepository(seeded_db_path)
    with pytest.raises(ValueError, match="Invalid table name"):
        repo.get_table_count('users"; DROP TABLE users; --')


def test_fetch_one_returns_none_when_empty(seeded_db_path):
    repo = DatabaseRepository(seeded_db_path)
    assert repo.fetch_one("SELECT * FROM users WHERE email = $1", ["nobody@example.com"]) is None


def test_fetch_all_returns_plain_dicts(seeded_db_path):
    repo = DatabaseRepository(seeded_db_path)
    rows = repo.fetch_all("SELECT id, name, email FROM users ORDER BY id")

    assert [row["id"] for row in rows] == [1, 2, 3]
    assert rows[0] == {"id": 1, "name": "Devin Sanders", "email": "tristanjacobs@gmail.com"}


def test_fetch_all_maps_nulls_to_none(seeded_db_path):
    repo = DatabaseRepository(seeded_db_path)
    rows = repo.fetch_all("SELECT description FROM properties WHERE id = $1", [1])
    assert rows == [{"description": None}]


def test_property_search_runs_against_store(seeded_db_path):
    """The generated search executes and returns rows sorted by nightly cost."""
    repo = DatabaseRepository(seeded_db_path)
    query, params = build_property_search_query()
    rows = repo.fetch_all(query, params)

    # The unreviewed property is dropped by the review join
    assert [row["title"] for row in rows] == ["Habit mix", "Headed know", "Blank corner", "Speed lamp"]
    assert [row["average_rating"] for row in rows] == [5.0, 4.0, 4.0, 4.0]


@pytest.mark.parametrize(
    "filters, limit, expected_titles",
    [
        (PropertySearchFilters(city="ancouv"), 10, ["Habit mix", "Speed lamp"]),
        (PropertySearchFilters(owner_id=1), 10, ["Blank corner", "Speed lamp"]),
        (PropertySearchFilters(maximum_price_per_night=850), 10, ["Habit mix", "Headed know"]),
        (
            PropertySearchFilters(minimum_price_per_night=850, maximum_price_per_night=900),
            10,
            ["Blank corner"],
        ),
        (PropertySearchFilters(minimum_rating=4.5), 10, ["Habit mix"]),
        (PropertySearchFilters(city="Vancouver", minimum_rating=4), 1, ["Habit mix"]),
        (PropertySearchFilters(), 2, ["Habit mix", "Headed know"]),
        (PropertySearchFilters(city="Toronto"), 10, []),
    ],
)
def test_property_search_filters(seeded_db_path, filters, limit, expected_titles):
    repo = DatabaseRepository(seeded_db_path)
    query, params = build_property_search_query(filters, limit)
    rows = repo.fetch_all(query, params)
    assert [row["title"] for row in rows] == expected_titles


def test_store_errors_propagate(seeded_db_path):
    repo = DatabaseRepository(seeded_db_path)
    with pytest.raises(duckdb.Error):
        repo.execute_query("SELECT * FROM missing_table")
