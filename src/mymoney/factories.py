"""Factory functions wiring the client together."""

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from mymoney.api.endpoints import DEFAULT_BASE_URL, DEFAULT_UPLOAD_PRESET, DEFAULT_UPLOAD_URL
from mymoney.api.http_client import DEFAULT_TIMEOUT, HttpClient
from mymoney.api.upload import ImageUploader
from mymoney.domain.auth import AuthService
from mymoney.domain.category import CategoryService
from mymoney.domain.dashboard import DashboardService
from mymoney.domain.entities import TransactionType
from mymoney.domain.transaction import TransactionService
from mymoney.session.controller import SessionController
from mymoney.storage.base import LocalStorage
from mymoney.storage.credentials import CredentialStore
from mymoney.storage.factories import create_sqlite_storage


@dataclass
class MyMoneyApp:
    """Process-wide client state and the services built on it."""

    storage: LocalStorage
    credentials: CredentialStore
    client: HttpClient
    session: SessionController
    auth: AuthService
    categories: CategoryService
    incomes: TransactionService
    expenses: TransactionService
    dashboard: DashboardService

    def transactions(self, transaction_type: TransactionType) -> TransactionService:
        if TransactionType(transaction_type) is TransactionType.INCOME:
            return self.incomes
        return self.expenses

    def close(self) -> None:
        self.storage.disconnect()


def create_app(
    api_url: str = DEFAULT_BASE_URL,
    storage: Optional[LocalStorage] = None,
    store_path: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    upload_url: str = DEFAULT_UPLOAD_URL,
    upload_preset: str = DEFAULT_UPLOAD_PRESET,
    http_session: Optional[requests.Session] = None,
    on_login_required: Optional[Callable[[], None]] = None,
) -> MyMoneyApp:
    """Create a fully wired client.

    Args:
        api_url: API root URL
        storage: Local storage to use; a SQLite store is created if None
        store_path: SQLite file path when storage is None (see
            create_sqlite_storage for defaults)
        timeout: Request timeout in seconds
        upload_url: Image upload endpoint
        upload_preset: Unsigned upload preset name
        http_session: requests session shared by the API client and uploader
        on_login_required: Called whenever the user must log in again

    Returns:
        MyMoneyApp instance
    """
    if storage is None:
        storage = create_sqlite_storage(store_path=store_path)
        storage.connect()
        storage.initialize_schema()

    credentials = CredentialStore(storage)
    client = HttpClient(api_url, credentials, timeout=timeout, session=http_session)
    session = SessionController(client, credentials, on_login_required=on_login_required)
    uploader = ImageUploader(
        upload_url=upload_url, preset=upload_preset, session=http_session
    )

    incomes = TransactionService(client, TransactionType.INCOME)
    expenses = TransactionService(client, TransactionType.EXPENSE)
    return MyMoneyApp(
        storage=storage,
        credentials=credentials,
        client=client,
        session=session,
        auth=AuthService(client, session, uploader=uploader),
        categories=CategoryService(client),
        incomes=incomes,
        expenses=expenses,
        dashboard=DashboardService(incomes, expenses),
    )
