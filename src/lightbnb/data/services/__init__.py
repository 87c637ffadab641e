"""Service layer for the asynchronous data access operations."""

from .rental_data_service import RentalDataService

__all__ = ["RentalDataService"]
