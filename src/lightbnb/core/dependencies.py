"""Dependency injection container for the application."""

from pathlib import Path
from typing import Optional
import logging

from lightbnb.config.settings import Settings
from lightbnb.data.repositories.database_repository import DatabaseRepository
from lightbnb.data.services.rental_data_service import RentalDataService
from lightbnb.utils.logger_setup import setup_logging


class DependencyContainer:
    """Container for managing application dependencies."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        logger_name: str = "lightbnb",
        log_level: int = logging.INFO,
    ):
        Settings.ensure_directories()
        self.db_path = Settings.get_db_path(db_path)
        self.logger = setup_logging(logger_name, log_level=log_level)

        self._repository: Optional[DatabaseRepository] = None
        self._rental_data_service: Optional[RentalDataService] = None

    @property
    def repository(self) -> DatabaseRepository:
        """Get or create the database repository."""
        if self._repository is None:
            self._repository = DatabaseRepository(self.db_path, self.logger)
        return self._repository

    @property
    def rental_data_service(self) -> RentalDataService:
        """Get or create the rental data service."""
        if self._rental_data_service is None:
            self._rental_data_service = RentalDataService(
                self.db_path, self.logger, repository=self.repository
            )
        return self._rental_data_service
