import logging
from typing import Awaitable, Callable

from app.core.exceptions import Conflict

logger = logging.getLogger(__name__)


class OptimisticToggle:
    """
    Two-phase on/off state: the flipped value is applied locally first and
    then confirmed by ``commit``. If the commit fails the previous value and
    count are restored and the error is re-raised. Nothing is retried.

    A ``Conflict`` while switching on means the row already exists, so the
    new local state is kept.
    """

    def __init__(self, *, active: bool, count: int = 0) -> None:
        self.active = active
        self.count = count

    def _apply(self, active: bool) -> None:
        if active == self.active:
            return
        self.active = active
        self.count = self.count + 1 if active else max(self.count - 1, 0)

    async def toggle(self, commit: Callable[[bool], Awaitable[None]]) -> bool:
        previous_active, previous_count = self.active, self.count
        self._apply(not previous_active)

        try:
            await commit(self.active)
        except Conflict:
            if not self.active:
                self.active, self.count = previous_active, previous_count
                raise
            logger.info("Toggle target already active, keeping local state")
        except Exception:
            self.active, self.count = previous_active, previous_count
            raise

        return self.active
