"""
Contact Desk core: clean-architecture layout.

- domain: entities (AuthorizationState, ActionKind, MenuEntry, Contact, PickResult). No outer dependencies.
- application: AuthorizationGate, MenuDispatcher, ContactBrowser, ports, DTOs, errors.
- infrastructure: adapters (menu YAML loader, XState machines, schedulers, in-memory and Telegram adapters).
"""

from contactdesk.application import (
    AuthorizationGate,
    ConfigMissing,
    ContactBrowser,
    MenuConfig,
    MenuDispatcher,
    PermissionDenied,
)
from contactdesk.bootstrap import build_browser
from contactdesk.domain import (
    ActionKind,
    AuthorizationState,
    Contact,
    MenuEntry,
    PickResult,
    PlatformAuthorizationStatus,
)

__all__ = [
    "ActionKind",
    "AuthorizationGate",
    "AuthorizationState",
    "ConfigMissing",
    "Contact",
    "ContactBrowser",
    "MenuConfig",
    "MenuDispatcher",
    "MenuEntry",
    "PermissionDenied",
    "PickResult",
    "PlatformAuthorizationStatus",
    "build_browser",
]
