"""Remote API paths, relative to the configured base URL."""

from mymoney.domain.entities import EntityId, TransactionType

DEFAULT_BASE_URL = "http://localhost:8080/api/v1.0"
DEFAULT_UPLOAD_URL = "https://api.cloudinary.com/v1_1/deppls3fc/image/upload"
DEFAULT_UPLOAD_PRESET = "mymoney"

LOGIN = "/login"
REGISTER = "/register"
ACTIVATE = "/activate"
STATUS = "/status"
PROFILE = "/profile"
CATEGORIES = "/categories"
FILTER = "/filter"

# Path fragments that never receive a credential
NO_AUTH_ENDPOINTS = ("/login", "/register", "/status", "/activate", "/about")

_COLLECTIONS = {
    TransactionType.INCOME: "/incomes",
    TransactionType.EXPENSE: "/expenses",
}

_EMAIL_EXPORTS = {
    TransactionType.INCOME: "/email/income-excel",
    TransactionType.EXPENSE: "/email/expense-excel",
}


def requires_auth(path: str) -> bool:
    """Return False when any no-auth fragment occurs in path."""
    return not any(fragment in path for fragment in NO_AUTH_ENDPOINTS)


def category(category_id: EntityId) -> str:
    return f"{CATEGORIES}/{category_id}"


def categories_by_type(transaction_type: TransactionType) -> str:
    return f"{CATEGORIES}/{TransactionType(transaction_type).value}"


def transactions(transaction_type: TransactionType) -> str:
    return _COLLECTIONS[TransactionType(transaction_type)]


def transaction(transaction_type: TransactionType, transaction_id: EntityId) -> str:
    return f"{transactions(transaction_type)}/{transaction_id}"


def excel_download(transaction_type: TransactionType) -> str:
    return f"/excel/download{transactions(transaction_type)}"


def email_export(transaction_type: TransactionType) -> str:
    return _EMAIL_EXPORTS[TransactionType(transaction_type)]
