# tests/conftest.py
import os
import sys
from datetime import date
from pathlib import Path

import duckdb
import pytest

# Make sure `src/` is on the import path when the package is not installed
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
sys.path.insert(0, os.path.join(ROOT, "src"))

from lightbnb.config.database import DatabaseConfig  # noqa: E402


SAMPLE_USERS = [
    ("Devin Sanders", "tristanjacobs@gmail.com", "password"),
    ("Iva Harrison", "allisonjackson@mail.com", "password"),
    ("Lloyd Jefferson", "asherpoole@gmx.com", "password"),
]

# (owner_id, title, cost_per_night in cents, city)
SAMPLE_PROPERTIES = [
    (1, "Speed lamp", 93061, "Vancouver"),
    (1, "Blank corner", 85234, "Namsub"),
    (2, "Habit mix", 46058, "Vancouver"),
    (3, "Headed know", 82640, "Calgary"),
    (2, "Unreviewed loft", 10000, "Vancouver"),
]

# (start_date, end_date, property_id, guest_id)
SAMPLE_RESERVATIONS = [
    (date(2018, 9, 11), date(2018, 9, 26), 1, 1),
    (date(2019, 1, 4), date(2019, 2, 1), 2, 1),
    (date(2021, 10, 1), date(2021, 10, 14), 3, 2),
    (date(2014, 10, 21), date(2014, 10, 21), 4, 3),
]

# (guest_id, property_id, reservation_id, rating)
SAMPLE_REVIEWS = [
    (1, 1, 1, 3),
    (2, 1, 1, 5),
    (1, 2, 2, 4),
    (2, 3, 3, 5),
    (3, 4, 4, 4),
]


def seed_database(db_path: Path) -> None:
    """Create the schema and load the sample rows; ids follow insertion order."""
    con = duckdb.connect(str(db_path))
    try:
        for statement in DatabaseConfig.SCHEMA_DDL:
            con.execute(statement)
        con.executemany(
            "INSERT INTO users (name, email, password) VALUES ($1, $2, $3)",
            SAMPLE_USERS,
        )
        con.executemany(
            """
            INSERT INTO properties (
                owner_id, title, thumbnail_photo_url, cover_photo_url, cost_per_night,
                country, street, city, province, post_code
            )
            VALUES ($1, $2, 'https://images.example/thumb.jpg', 'https://images.example/cover.jpg',
                    $3, 'Canada', '1 Main Street', $4, 'BC', 'V5K 0A1')
            """,
            SAMPLE_PROPERTIES,
        )
        con.executemany(
            "INSERT INTO reservations (start_date, end_date, property_id, guest_id) VALUES ($1, $2, $3, $4)",
            SAMPLE_RESERVATIONS,
        )
        con.executemany(
            "INSERT INTO property_reviews (guest_id, property_id, reservation_id, rating) VALUES ($1, $2, $3, $4)",
            SAMPLE_REVIEWS,
        )
    finally:
        con.close()


@pytest.fixture
def temp_db_path(tmp_path):
    """Provide a path for a database that does not exist yet."""
    return tmp_path / "lightbnb.duckdb"


@pytest.fixture
def seeded_db_path(tmp_path):
    """Provide a database file holding the LightBnB schema and sample rows."""
    db_path = tmp_path / "seeded.duckdb"
    seed_database(db_path)
    return db_path
