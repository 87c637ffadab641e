"""Asynchronous data access operations for the LightBnB web application."""

import asyncio
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import logging

from lightbnb.config.settings import Settings
from lightbnb.data.queries import (
    BuiltQuery,
    PropertySearchFilters,
    build_add_property_query,
    build_add_user_query,
    build_property_search_query,
    build_reservations_query,
    build_user_by_email_query,
    build_user_by_id_query,
)
from lightbnb.data.repositories.database_repository import DatabaseRepository


class RentalDataService:
    """Service exposing users, reservations and properties as async operations.

    Each call builds its query, then runs it on a worker thread. A
    ``threading.BoundedSemaphore`` sized by ``Settings.CONNECTION_POOL_SIZE``
    and acquired on that thread bounds how many calls hold a store connection
    at once, so one service can be driven from several event loops. Store
    errors propagate to the caller unchanged.
    """

    def __init__(
        self,
        db_path: Optional[Path] = None,
        logger_obj: Optional[logging.Logger] = None,
        repository: Optional[DatabaseRepository] = None,
        pool_size: Optional[int] = None,
    ):
        self.db_path = db_path or Settings.get_db_path()
        self.logger = logger_obj or logging.getLogger(__name__)
        self.repository = repository or DatabaseRepository(self.db_path, self.logger)
        self.pool_size = pool_size or Settings.CONNECTION_POOL_SIZE
        self._slots = threading.BoundedSemaphore(self.pool_size)

    def _bounded(self, fn: Callable[..., Any], *args: Any) -> Any:
        with self._slots:
            return fn(*args)

    async def _run(self, fetch: Callable[[str, List[Any]], Any], built: BuiltQuery) -> Any:
        query, params = built
        return await asyncio.to_thread(self._bounded, fetch, query, params)

    # --------------------------- Users ---------------------------
    async def get_user_with_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get a single user by email, or None if there is no such user."""
        return await self._run(self.repository.fetch_one, build_user_by_email_query(email))

    async def get_user_with_id(self, user_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        """Get a single user by id, or None if there is no such user."""
        return await self._run(self.repository.fetch_one, build_user_by_id_query(user_id))

    async def add_user(self, user: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Add a new user from its name, email and password and return the stored row."""
        record = await self._run(self.repository.fetch_one, build_add_user_query(user))
        if record:
            self.logger.info(f"Added user {record.get('id')}")
        return record

    # ------------------------ Reservations ------------------------
    async def get_all_reservations(
        self, guest_id: Union[int, str], limit: int = Settings.DEFAULT_RESULT_LIMIT
    ) -> Optional[List[Dict[str, Any]]]:
        """Get reservations with property details; None when there are none."""
        rows = await self._run(self.repository.fetch_all, build_reservations_query(guest_id, limit))
        return rows or None

    # ------------------------- Properties -------------------------
    async def get_all_properties(
        self,
        options: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
        limit: int = Settings.DEFAULT_RESULT_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Search properties, cheapest first, each with its average rating."""
        if not isinstance(options, PropertySearchFilters):
            options = PropertySearchFilters.from_mapping(options)
        rows = await self._run(self.repository.fetch_all, build_property_search_query(options, limit))
        self.logger.debug(f"Property search returned {len(rows)} rows for {options}")
        return rows

    async def add_property(self, property_record: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Add a property from a column/value mapping and return the stored row."""
        record = await self._run(self.repository.fetch_one, build_add_property_query(property_record))
        if record:
            self.logger.info(f"Added property {record.get('id')}")
        return record

    # --------------------------- Schema ---------------------------
    async def create_schema(self) -> None:
        await asyncio.to_thread(self._bounded, self.repository.create_schema)
