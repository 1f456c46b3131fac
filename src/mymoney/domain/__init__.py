"""Domain layer for mymoney application."""

# Services are imported lazily: the API layer imports domain entities and
# errors, and the services import the API layer.
_SERVICES = {
    "TransactionService": "mymoney.domain.transaction",
    "CategoryService": "mymoney.domain.category",
    "AuthService": "mymoney.domain.auth",
    "DashboardService": "mymoney.domain.dashboard",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
