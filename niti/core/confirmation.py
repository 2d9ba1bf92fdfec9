from __future__ import annotations

from niti.domain.models import ConfirmAction, ConfirmationState, Idle, PendingConfirmation


class ConfirmationFlow:
    """
    Idle -> PendingConfirmation(action) -> Idle.

    ``confirm`` and ``cancel`` are the only ways out of a pending state. A new
    request while one is pending is ignored.
    """

    def __init__(self) -> None:
        self._state: ConfirmationState = Idle()

    @property
    def state(self) -> ConfirmationState:
        return self._state

    @property
    def pending(self) -> PendingConfirmation | None:
        return self._state if isinstance(self._state, PendingConfirmation) else None

    def request(self, action: ConfirmAction, detail: str = "") -> bool:
        if self.pending is not None:
            return False
        self._state = PendingConfirmation(action, detail)
        return True

    def confirm(self) -> ConfirmAction | None:
        pending = self.pending
        self._state = Idle()
        return pending.action if pending else None

    def cancel(self) -> None:
        self._state = Idle()
