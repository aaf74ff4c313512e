"""Menu table, row rendering and action dispatch to the picker and detail collaborators."""

import logging
from collections.abc import Callable

from contactdesk.application.authorization_gate import AuthorizationGate
from contactdesk.application.dto import MenuConfig
from contactdesk.application.errors import ConfigMissing, PermissionDenied
from contactdesk.application.ports import (
    ContactPicker,
    ContactStore,
    ContactViewer,
    Scheduler,
    StateMachine,
    UiSurface,
)
from contactdesk.domain import (
    BIRTHDAY_KEY,
    EMAIL_ADDRESSES_KEY,
    PHONE_NUMBERS_KEY,
    ActionKind,
    Contact,
    ContactProperty,
    LabeledValue,
    MenuEntry,
    Notification,
    PickCancelled,
    PickResult,
    RenderedRow,
)

logger = logging.getLogger(__name__)

# Only a person's phone, email and birthday are shown in the picker.
PICKER_PROPERTY_KEYS = (PHONE_NUMBERS_KEY, EMAIL_ADDRESSES_KEY, BIRTHDAY_KEY)

UNINITIALIZED = "uninitialized"
LOADED = "loaded"
PICKER_ACTIVE = "picker_active"
DETAIL_ACTIVE = "detail_active"


def render_entry(section: int, entry: MenuEntry) -> RenderedRow:
    """Button-style centered rows for the first two actions, navigation rows after."""
    if section < ActionKind.DISPLAY_CONTACT:
        return RenderedRow(
            section=section,
            text=entry.title,
            centered=True,
            height=entry.row_height,
        )
    return RenderedRow(
        section=section,
        text=entry.title,
        detail_text=entry.description,
        disclosure=True,
        height=entry.row_height,
    )


class MenuDispatcher:
    """
    Owns the four-entry menu and maps a selected section to its action.
    Also observes the picker and the detail view it presents.
    """

    def __init__(
        self,
        gate: AuthorizationGate,
        menu_source: Callable[[], MenuConfig],
        *,
        store: ContactStore,
        picker: ContactPicker,
        viewer: ContactViewer,
        surface: UiSurface,
        scheduler: Scheduler,
        machine: StateMachine,
    ) -> None:
        self._gate = gate
        self._menu_source = menu_source
        self._store = store
        self._picker = picker
        self._viewer = viewer
        self._surface = surface
        self._scheduler = scheduler
        self._machine = machine
        self._state = machine.initial
        self._config: MenuConfig | None = None
        self.last_pick: PickResult | PickCancelled | None = None
        self._handlers = {
            ActionKind.PICK_CONTACT: self._pick_contact,
            ActionKind.CREATE_NEW_CONTACT: self._create_new_contact,
            ActionKind.DISPLAY_CONTACT: self._display_contact,
            ActionKind.EDIT_UNKNOWN_CONTACT: self._edit_unknown_contact,
        }

    @property
    def state(self) -> str:
        return self._state

    @property
    def entries(self) -> list[MenuEntry]:
        return list(self._config.entries) if self._config else []

    def _require_granted(self) -> None:
        if not self._gate.is_granted:
            raise PermissionDenied(
                f"Contacts access is {self._gate.state.value}; the menu is unavailable."
            )

    def _apply(self, event: str) -> bool:
        next_value = self._machine.transition(self._state, event)
        if next_value is None:
            return False
        self._state = next_value
        return True

    # --- table ---

    def load_menu(self) -> list[MenuEntry]:
        """Load the menu table once. Raises ConfigMissing; never keeps a partial menu."""
        self._require_granted()
        if self._config is not None:
            return self.entries
        config = self._menu_source()
        if len(config.entries) != len(ActionKind):
            raise ConfigMissing(
                f"Menu must have exactly {len(ActionKind)} entries, got {len(config.entries)}"
            )
        self._config = config
        self._apply("LOAD")
        return self.entries

    def section_count(self) -> int:
        return len(self._config.entries) if self._config else 0

    def row_count(self, section: int) -> int:
        return 1

    def _entry(self, section: int) -> MenuEntry:
        self._require_granted()
        if self._config is None:
            raise RuntimeError("Menu is not loaded")
        return self._config.entries[section]

    def render_row(self, section: int) -> RenderedRow:
        return render_entry(section, self._entry(section))

    def render_menu(self) -> list[RenderedRow]:
        return [self.render_row(section) for section in range(self.section_count())]

    def row_height(self, section: int) -> float:
        return self._entry(section).row_height

    # --- selection ---

    def on_select(self, section: int) -> None:
        self._require_granted()
        try:
            action = ActionKind(section)
        except ValueError:
            logger.warning("Ignoring selection of unknown section %s", section)
            return
        if self._state != LOADED:
            logger.warning(
                "Ignoring selection of %s while dispatcher is %s", action.name, self._state
            )
            return
        self._handlers[action]()

    def _pick_contact(self) -> None:
        self.invoke_picker()

    def _create_new_contact(self) -> None:
        self._present_detail(lambda: self._viewer.present_new_contact(self))

    def _display_contact(self) -> None:
        name = self._config.display_contact_name
        matches = self._store.find_contacts(name)
        if not matches:
            self._surface.show_notification(
                Notification(
                    title=self._config.message("contact_not_found_title"),
                    message=self._config.message("contact_not_found", name=name),
                )
            )
            return
        contact = matches[0]
        self._present_detail(lambda: self._viewer.present_contact(contact, self))

    def _edit_unknown_contact(self) -> None:
        contact = Contact(
            email_addresses=(
                LabeledValue(self._config.unknown_contact_email, label="work"),
            ),
        )
        self._present_detail(lambda: self._viewer.present_unknown_contact(contact, self))

    def _present_detail(self, present: Callable[[], None]) -> None:
        if not self._apply("PRESENT_DETAIL"):
            logger.warning("Cannot present detail view while %s", self._state)
            return
        present()

    def invoke_picker(self) -> None:
        """Present the picker limited to phone, email and birthday. One picker at a time."""
        self._require_granted()
        if not self._apply("PRESENT_PICKER"):
            logger.warning("Cannot present picker while %s", self._state)
            return
        self._picker.present(PICKER_PROPERTY_KEYS, self)

    # --- picker observer ---

    def on_property_selected(self, prop: ContactProperty) -> None:
        result = PickResult.from_property(prop)
        self._scheduler.run_on_ui_context(lambda: self._show_pick_result(result))

    def _show_pick_result(self, result: PickResult) -> None:
        self._apply("PICKER_FINISHED")
        self.last_pick = result
        config = self._config
        if config is None:
            return
        message = config.message(
            "picker_result",
            property=result.property_localized_name,
            name=result.contact_display_name,
            value=result.property_value,
        )
        self._surface.show_notification(
            Notification(title=config.message("picker_result_title"), message=message)
        )

    def on_cancelled(self) -> None:
        self._scheduler.run_on_ui_context(self._dismiss_picker)

    def _dismiss_picker(self) -> None:
        self._picker.dismiss()
        self._apply("PICKER_FINISHED")
        self.last_pick = PickCancelled()

    # --- detail observer ---

    def on_completed(self, contact: Contact | None) -> None:
        self._scheduler.run_on_ui_context(self._dismiss_detail)

    def _dismiss_detail(self) -> None:
        self._viewer.dismiss()
        self._apply("DETAIL_FINISHED")

    def should_perform_default_action(self, prop: ContactProperty) -> bool:
        return True

    def teardown(self) -> None:
        self._apply("TEARDOWN")
        self._config = None
