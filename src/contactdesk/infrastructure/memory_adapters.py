"""In-memory contact store, picker, viewer and list surface (no platform UI)."""

import threading
from collections.abc import Sequence

from contactdesk.application.ports import AccessCompletion, DetailObserver, PickerObserver
from contactdesk.domain import (
    Contact,
    ContactProperty,
    Notification,
    PlatformAuthorizationStatus,
    RenderedRow,
)


class InMemoryContactStore:
    """Stores contacts in memory. Order preserved by insertion.
    Access requests stay pending until respond() is called, unless auto_response is set.
    """

    def __init__(
        self,
        status: PlatformAuthorizationStatus = PlatformAuthorizationStatus.NOT_DETERMINED,
        contacts: Sequence[Contact] = (),
        *,
        auto_response: tuple[bool, Exception | None] | None = None,
        respond_on_thread: bool = False,
    ) -> None:
        self._status = status
        self._contacts: list[Contact] = list(contacts)
        self._auto_response = auto_response
        self._respond_on_thread = respond_on_thread
        self._pending: AccessCompletion | None = None
        self.request_count = 0
        self.status_queries = 0

    def authorization_status(self) -> PlatformAuthorizationStatus:
        self.status_queries += 1
        return self._status

    def set_status(self, status: PlatformAuthorizationStatus) -> None:
        """Change the status out-of-band, as a user would in system settings."""
        self._status = status

    def request_access(self, completion: AccessCompletion) -> None:
        self.request_count += 1
        self._pending = completion
        if self._auto_response is not None:
            granted, error = self._auto_response
            if self._respond_on_thread:
                worker = threading.Thread(target=self.respond, args=(granted, error))
                worker.start()
                worker.join()
            else:
                self.respond(granted, error)

    @property
    def has_pending_request(self) -> bool:
        return self._pending is not None

    def respond(self, granted: bool, error: Exception | None = None) -> None:
        """Answer the pending access prompt. No-op when nothing is pending."""
        completion = self._pending
        if completion is None:
            return
        self._pending = None
        self._status = (
            PlatformAuthorizationStatus.AUTHORIZED
            if granted and error is None
            else PlatformAuthorizationStatus.DENIED
        )
        completion(granted, error)

    def add(self, contact: Contact) -> None:
        self._contacts.append(contact)

    def find_contacts(self, name: str) -> list[Contact]:
        needle = (name or "").strip().lower()
        if not needle:
            return []
        return [
            c
            for c in self._contacts
            if needle
            in (c.given_name.lower(), c.family_name.lower(), c.full_name.lower())
        ]


class RecordingPicker:
    """Picker that records presentations; tests drive select() and cancel()."""

    def __init__(self) -> None:
        self.presented: list[tuple[str, ...]] = []
        self.dismiss_count = 0
        self._observer: PickerObserver | None = None

    @property
    def is_active(self) -> bool:
        return self._observer is not None

    def present(
        self, displayed_property_keys: Sequence[str], observer: PickerObserver
    ) -> None:
        if self._observer is not None:
            raise RuntimeError("A picker is already presented")
        self.presented.append(tuple(displayed_property_keys))
        self._observer = observer

    def dismiss(self) -> None:
        self.dismiss_count += 1
        self._observer = None

    def select(self, contact: Contact, key: str, value: str | None = None) -> None:
        """Simulate the user choosing one property. The picker dismisses itself."""
        observer = self._require_observer()
        if key not in self.presented[-1]:
            raise ValueError(f"Property {key!r} is not displayed by this picker")
        if value is None:
            values = contact.values_for(key)
            if not values:
                raise ValueError(f"Contact has no {key!r} value")
            value = values[0]
        self._observer = None
        observer.on_property_selected(ContactProperty(contact=contact, key=key, value=value))

    def cancel(self) -> None:
        self._require_observer().on_cancelled()

    def _require_observer(self) -> PickerObserver:
        if self._observer is None:
            raise RuntimeError("No picker is presented")
        return self._observer


class RecordingViewer:
    """Detail / edit view that records what it was asked to show."""

    def __init__(self) -> None:
        self.presented: list[tuple[str, Contact | None]] = []
        self.dismiss_count = 0
        self._observer: DetailObserver | None = None

    def present_contact(self, contact: Contact, observer: DetailObserver) -> None:
        self._present("contact", contact, observer)

    def present_new_contact(self, observer: DetailObserver) -> None:
        self._present("new", None, observer)

    def present_unknown_contact(self, contact: Contact, observer: DetailObserver) -> None:
        self._present("unknown", contact, observer)

    def _present(self, mode: str, contact: Contact | None, observer: DetailObserver) -> None:
        if self._observer is not None:
            raise RuntimeError("A contact view is already presented")
        self.presented.append((mode, contact))
        self._observer = observer

    def dismiss(self) -> None:
        self.dismiss_count += 1
        self._observer = None

    def tap(self, prop: ContactProperty) -> bool:
        """Simulate tapping a property; returns whether the default action runs."""
        if self._observer is None:
            raise RuntimeError("No contact view is presented")
        return self._observer.should_perform_default_action(prop)

    def complete(self, contact: Contact | None = None) -> None:
        if self._observer is None:
            raise RuntimeError("No contact view is presented")
        self._observer.on_completed(contact)


class RecordingSurface:
    """List surface that keeps the last rendered rows and every notification shown."""

    def __init__(self) -> None:
        self.rows: list[RenderedRow] = []
        self.reload_count = 0
        self.notifications: list[Notification] = []

    def reload(self, rows: list[RenderedRow]) -> None:
        self.reload_count += 1
        self.rows = list(rows)

    def show_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)
