"""Data layer modules: query builders, repositories and services."""

from .queries import PropertySearchFilters, build_property_search_query
from .repositories.database_repository import DatabaseRepository
from .services.rental_data_service import RentalDataService

__all__ = [
    "PropertySearchFilters",
    "build_property_search_query",
    "DatabaseRepository",
    "RentalDataService",
]
