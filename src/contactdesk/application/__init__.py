"""Application layer: gate, dispatcher, browser, ports, DTOs and errors. Depends only on domain."""

from contactdesk.application.authorization_gate import AuthorizationGate
from contactdesk.application.contact_browser import ContactBrowser
from contactdesk.application.dto import DEFAULT_MESSAGES, GateDecision, MenuConfig
from contactdesk.application.errors import ConfigMissing, PermissionDenied
from contactdesk.application.menu_dispatcher import (
    PICKER_PROPERTY_KEYS,
    MenuDispatcher,
    render_entry,
)
from contactdesk.application.ports import (
    ContactPicker,
    ContactStore,
    ContactViewer,
    DetailObserver,
    PickerObserver,
    Scheduler,
    StateMachine,
    UiSurface,
)

__all__ = [
    "DEFAULT_MESSAGES",
    "PICKER_PROPERTY_KEYS",
    "AuthorizationGate",
    "ConfigMissing",
    "ContactBrowser",
    "ContactPicker",
    "ContactStore",
    "ContactViewer",
    "DetailObserver",
    "GateDecision",
    "MenuConfig",
    "MenuDispatcher",
    "PermissionDenied",
    "PickerObserver",
    "Scheduler",
    "StateMachine",
    "UiSurface",
    "render_entry",
]
