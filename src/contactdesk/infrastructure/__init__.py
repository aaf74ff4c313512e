"""Infrastructure layer: concrete implementations of application ports."""

from contactdesk.infrastructure.memory_adapters import (
    InMemoryContactStore,
    RecordingPicker,
    RecordingSurface,
    RecordingViewer,
)
from contactdesk.infrastructure.menu_loader import get_menu, get_menu_path, load_menu
from contactdesk.infrastructure.phone import display_phone, normalize_phone
from contactdesk.infrastructure.scheduling import ImmediateScheduler, QueueScheduler
from contactdesk.infrastructure.state_machine import (
    AUTHORIZATION_MACHINE,
    MENU_DISPATCHER_MACHINE,
    XStateMachine,
    get_machine,
)

__all__ = [
    "AUTHORIZATION_MACHINE",
    "MENU_DISPATCHER_MACHINE",
    "ImmediateScheduler",
    "InMemoryContactStore",
    "QueueScheduler",
    "RecordingPicker",
    "RecordingSurface",
    "RecordingViewer",
    "XStateMachine",
    "display_phone",
    "get_machine",
    "get_menu",
    "get_menu_path",
    "load_menu",
    "normalize_phone",
]
