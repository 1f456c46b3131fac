"""Local storage layer for mymoney."""

from mymoney.storage.base import LocalStorage
from mymoney.storage.credentials import CredentialStore
from mymoney.storage.factories import create_sqlite_storage

__all__ = ["LocalStorage", "CredentialStore", "create_sqlite_storage"]
