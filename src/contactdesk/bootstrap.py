"""Wire a ContactBrowser from adapters. Machines and the menu come from the bundled files."""

from collections.abc import Callable

from contactdesk.application import (
    AuthorizationGate,
    ContactBrowser,
    ContactPicker,
    ContactStore,
    ContactViewer,
    MenuConfig,
    MenuDispatcher,
    Scheduler,
    UiSurface,
)
from contactdesk.infrastructure.menu_loader import get_menu
from contactdesk.infrastructure.state_machine import (
    AUTHORIZATION_MACHINE,
    MENU_DISPATCHER_MACHINE,
    get_machine,
)


def build_browser(
    *,
    store: ContactStore,
    picker: ContactPicker,
    viewer: ContactViewer,
    surface: UiSurface,
    scheduler: Scheduler,
    menu_source: Callable[[], MenuConfig] | None = None,
) -> ContactBrowser:
    gate = AuthorizationGate(store, get_machine(AUTHORIZATION_MACHINE))
    dispatcher = MenuDispatcher(
        gate,
        menu_source or get_menu,
        store=store,
        picker=picker,
        viewer=viewer,
        surface=surface,
        scheduler=scheduler,
        machine=get_machine(MENU_DISPATCHER_MACHINE),
    )
    return ContactBrowser(gate, dispatcher, surface, scheduler)
