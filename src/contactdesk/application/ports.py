"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Callable, Sequence
from typing import Protocol

from contactdesk.domain import (
    Contact,
    ContactProperty,
    Notification,
    PlatformAuthorizationStatus,
    RenderedRow,
)

AccessCompletion = Callable[[bool, Exception | None], None]


class ContactStore(Protocol):
    """The platform contact store. Opaque; only its authorization and lookup surface is used."""

    def authorization_status(self) -> PlatformAuthorizationStatus:
        """Return the current authorization status without prompting."""
        ...

    def request_access(self, completion: AccessCompletion) -> None:
        """Prompt the user once. completion(granted, error) may run on any thread, or never."""
        ...

    def find_contacts(self, name: str) -> list[Contact]:
        """Return contacts whose name matches, in store order."""
        ...


class PickerObserver(Protocol):
    """Receives the single terminal event of a picker presentation."""

    def on_property_selected(self, prop: ContactProperty) -> None: ...

    def on_cancelled(self) -> None: ...


class DetailObserver(Protocol):
    """Receives events from a contact detail / edit view."""

    def on_completed(self, contact: Contact | None) -> None: ...

    def should_perform_default_action(self, prop: ContactProperty) -> bool: ...


class ContactPicker(Protocol):
    """External contact picker UI."""

    def present(
        self, displayed_property_keys: Sequence[str], observer: PickerObserver
    ) -> None:
        """Show the picker limited to the given property keys."""
        ...

    def dismiss(self) -> None: ...


class ContactViewer(Protocol):
    """External contact detail / edit UI."""

    def present_contact(self, contact: Contact, observer: DetailObserver) -> None: ...

    def present_new_contact(self, observer: DetailObserver) -> None: ...

    def present_unknown_contact(
        self, contact: Contact, observer: DetailObserver
    ) -> None: ...

    def dismiss(self) -> None: ...


class UiSurface(Protocol):
    """The list view and its modal notification primitive."""

    def reload(self, rows: list[RenderedRow]) -> None: ...

    def show_notification(self, notification: Notification) -> None: ...


class Scheduler(Protocol):
    """The UI scheduling context. Callbacks from other contexts must pass through it."""

    def run_on_ui_context(self, fn: Callable[[], None]) -> None: ...


class StateMachine(Protocol):
    """A finite state machine evaluated by event name."""

    @property
    def initial(self) -> str: ...

    def transition(self, state_value: str, event: str) -> str | None:
        """Return the next state value, or None if the event is not accepted."""
        ...
