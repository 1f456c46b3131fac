"""SQLAlchemy implementation of local storage."""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from mymoney.storage.base import LocalStorage
from mymoney.storage.models import StoredItem, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyLocalStorage(LocalStorage):
    """SQLAlchemy-based implementation of LocalStorage."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get_item(self, key: str) -> Optional[str]:
        session = self._get_session()
        item = session.get(StoredItem, key)
        return item.value if item is not None else None

    def set_item(self, key: str, value: str) -> None:
        session = self._get_session()
        item = session.get(StoredItem, key)
        if item is None:
            session.add(StoredItem(key=key, value=value))
        else:
            item.value = value
        session.commit()
        logger.debug("Stored item '%s'", key)

    def remove_item(self, key: str) -> None:
        session = self._get_session()
        item = session.get(StoredItem, key)
        if item is None:
            return
        session.delete(item)
        session.commit()
        logger.debug("Removed item '%s'", key)
