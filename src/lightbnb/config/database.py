"""Database configuration and schema definitions."""

from typing import List


class DatabaseConfig:
    """Database-specific configuration."""

    USERS_TABLE = "users"
    PROPERTIES_TABLE = "properties"
    RESERVATIONS_TABLE = "reservations"
    PROPERTY_REVIEWS_TABLE = "property_reviews"

    TABLES = [
        USERS_TABLE,
        PROPERTIES_TABLE,
        RESERVATIONS_TABLE,
        PROPERTY_REVIEWS_TABLE,
    ]

    # Columns accepted by property inserts; "id" is assigned by the store
    PROPERTY_COLUMNS: List[str] = [
        "owner_id",
        "title",
        "description",
        "thumbnail_photo_url",
        "cover_photo_url",
        "cost_per_night",
        "parking_spaces",
        "number_of_bathrooms",
        "number_of_bedrooms",
        "country",
        "street",
        "city",
        "province",
        "post_code",
        "active",
    ]

    SCHEMA_DDL: List[str] = [
        "CREATE SEQUENCE IF NOT EXISTS users_id_seq START 1",
        "CREATE SEQUENCE IF NOT EXISTS properties_id_seq START 1",
        "CREATE SEQUENCE IF NOT EXISTS reservations_id_seq START 1",
        "CREATE SEQUENCE IF NOT EXISTS property_reviews_id_seq START 1",
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY DEFAULT nextval('users_id_seq'),
            name VARCHAR NOT NULL,
            email VARCHAR NOT NULL,
            password VARCHAR NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS properties (
            id INTEGER PRIMARY KEY DEFAULT nextval('properties_id_seq'),
            owner_id INTEGER NOT NULL REFERENCES users (id),
            title VARCHAR NOT NULL,
            description VARCHAR,
            thumbnail_photo_url VARCHAR NOT NULL,
            cover_photo_url VARCHAR NOT NULL,
            cost_per_night INTEGER NOT NULL DEFAULT 0,
            parking_spaces INTEGER NOT NULL DEFAULT 0,
            number_of_bathrooms INTEGER NOT NULL DEFAULT 0,
            number_of_bedrooms INTEGER NOT NULL DEFAULT 0,
            country VARCHAR NOT NULL,
            street VARCHAR NOT NULL,
            city VARCHAR NOT NULL,
            province VARCHAR NOT NULL,
            post_code VARCHAR NOT NULL,
            active BOOLEAN NOT NULL DEFAULT TRUE
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS reservations (
            id INTEGER PRIMARY KEY DEFAULT nextval('reservations_id_seq'),
            start_date DATE NOT NULL,
            end_date DATE NOT NULL,
            property_id INTEGER NOT NULL REFERENCES properties (id),
            guest_id INTEGER NOT NULL REFERENCES users (id)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS property_reviews (
            id INTEGER PRIMARY KEY DEFAULT nextval('property_reviews_id_seq'),
            guest_id INTEGER NOT NULL REFERENCES users (id),
            property_id INTEGER NOT NULL REFERENCES properties (id),
            reservation_id INTEGER NOT NULL REFERENCES reservations (id),
            rating SMALLINT NOT NULL DEFAULT 0,
            message VARCHAR
        )
        """,
    ]

    @classmethod
    def get_property_table_columns(cls) -> List[str]:
        """All columns of the properties table, identity first."""
        return ["id"] + cls.PROPERTY_COLUMNS

    @classmethod
    def is_property_column(cls, column_name: str) -> bool:
        """Check if a column may be written by a property insert."""
        return column_name in cls.PROPERTY_COLUMNS
