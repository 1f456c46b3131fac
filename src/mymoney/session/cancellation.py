"""Cooperative cancellation and per-action latching."""

from contextlib import contextmanager
from typing import Iterator

from mymoney.domain.errors import ActionInProgressError, action_in_progress


class CancellationToken:
    """Flag a consumer flips when it no longer wants a result.

    The underlying request is not aborted; operations check the token before
    committing anything to shared state.
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ActionLatch:
    """Mutual exclusion per named action, without queuing.

    While an action is held, a second attempt fails immediately instead of
    waiting, like a submit control that stays disabled until its request
    settles.
    """

    def __init__(self) -> None:
        self._held: set[str] = set()

    def is_held(self, action: str) -> bool:
        return action in self._held

    @contextmanager
    def hold(self, action: str) -> Iterator[None]:
        """Hold action for the duration of the block.

        Raises:
            ActionInProgressError: If action is already held
        """
        if action in self._held:
            raise ActionInProgressError(action_in_progress(action))
        self._held.add(action)
        try:
            yield
        finally:
            self._held.discard(action)
