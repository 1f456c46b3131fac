"""Storage factory functions."""

import os
from pathlib import Path
from typing import Optional

from mymoney.storage.sqlalchemy_storage import SQLAlchemyLocalStorage


def create_sqlite_storage(store_path: Optional[str] = None) -> SQLAlchemyLocalStorage:
    """Create a SQLite-backed local storage instance.

    Args:
        store_path: Path to SQLite file. If None, checks MYMONEY_STORE_PATH
            environment variable, then defaults to ~/.mymoney/mymoney.db

    Returns:
        SQLAlchemyLocalStorage instance configured for SQLite
    """
    if store_path is None:
        store_path = os.environ.get("MYMONEY_STORE_PATH")

    if store_path is None:
        store_dir = Path.home() / ".mymoney"
        store_dir.mkdir(exist_ok=True)
        store_path = str(store_dir / "mymoney.db")

    return SQLAlchemyLocalStorage(f"sqlite:///{store_path}")
