"""Permission gate in front of the contact store."""

import logging
import threading
from collections.abc import Callable

from contactdesk.application.dto import GateDecision
from contactdesk.application.ports import ContactStore, StateMachine
from contactdesk.domain import AuthorizationState

logger = logging.getLogger(__name__)

_STATUS_EVENTS = {
    AuthorizationState.NOT_DETERMINED: "STATUS_NOT_DETERMINED",
    AuthorizationState.GRANTED: "STATUS_GRANTED",
    AuthorizationState.DENIED: "STATUS_DENIED",
}


class AuthorizationGate:
    """
    Tracks one authorization lifecycle: unknown -> not_determined | granted | denied,
    and not_determined -> granted | denied once the request completes.
    Each check_access() re-queries the store and starts a fresh lifecycle.
    """

    def __init__(self, store: ContactStore, machine: StateMachine) -> None:
        self._store = store
        self._machine = machine
        self._state = AuthorizationState(machine.initial)
        self._lock = threading.Lock()
        self._request_in_flight = False

    @property
    def state(self) -> AuthorizationState:
        return self._state

    @property
    def is_granted(self) -> bool:
        return self._state is AuthorizationState.GRANTED

    @property
    def decision(self) -> GateDecision | None:
        """PROCEED, PROMPT or BLOCK for the current state; None before the first check."""
        return {
            AuthorizationState.GRANTED: GateDecision.PROCEED,
            AuthorizationState.NOT_DETERMINED: GateDecision.PROMPT,
            AuthorizationState.DENIED: GateDecision.BLOCK,
        }.get(self._state)

    def _apply(self, event: str) -> bool:
        next_value = self._machine.transition(self._state.value, event)
        if next_value is None:
            logger.warning(
                "Authorization event %s ignored in state %s", event, self._state.value
            )
            return False
        self._state = AuthorizationState(next_value)
        return True

    def check_access(self) -> AuthorizationState:
        """Query the store's current status and return the mapped state."""
        status = self._store.authorization_status()
        reported = status.to_state()
        with self._lock:
            self._state = AuthorizationState(self._machine.initial)
            self._request_in_flight = False
            self._apply(_STATUS_EVENTS[reported])
        logger.info("Contacts authorization status: %s", status.value)
        return self._state

    def request_access(self, on_complete: Callable[[bool], None]) -> None:
        """
        Ask the store for access. Only valid after check_access() returned NOT_DETERMINED.
        on_complete(granted) runs at most once, on whatever thread the store calls back on.
        """
        with self._lock:
            if self._state is not AuthorizationState.NOT_DETERMINED:
                raise RuntimeError(
                    f"request_access requires not_determined, state is {self._state.value}"
                )
            if self._request_in_flight:
                raise RuntimeError("An access request is already in flight")
            self._request_in_flight = True

        def completion(granted: bool, error: Exception | None = None) -> None:
            with self._lock:
                if not self._request_in_flight:
                    logger.warning("Duplicate access request completion ignored")
                    return
                self._request_in_flight = False
                if error is not None:
                    logger.info("Access request failed: %s", error)
                granted = bool(granted) and error is None
                if not self._apply("ACCESS_GRANTED" if granted else "ACCESS_DENIED"):
                    return
            logger.info("Contacts access %s", "granted" if granted else "denied")
            on_complete(granted)

        self._store.request_access(completion)
