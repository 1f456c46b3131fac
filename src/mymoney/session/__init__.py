"""Session lifecycle for mymoney."""

from mymoney.session.cancellation import ActionLatch, CancellationToken
from mymoney.session.controller import SessionController, SessionState

__all__ = ["ActionLatch", "CancellationToken", "SessionController", "SessionState"]
