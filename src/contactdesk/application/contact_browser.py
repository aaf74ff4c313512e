"""The browser view: gate first, then the menu. Single UI context; callbacks are redispatched."""

import logging

from contactdesk.application.authorization_gate import AuthorizationGate
from contactdesk.application.dto import DEFAULT_MESSAGES, GateDecision
from contactdesk.application.errors import ConfigMissing
from contactdesk.application.menu_dispatcher import MenuDispatcher
from contactdesk.application.ports import Scheduler, UiSurface
from contactdesk.domain import Notification

logger = logging.getLogger(__name__)


class ContactBrowser:
    """Composes AuthorizationGate and MenuDispatcher behind view lifecycle events."""

    def __init__(
        self,
        gate: AuthorizationGate,
        dispatcher: MenuDispatcher,
        surface: UiSurface,
        scheduler: Scheduler,
    ) -> None:
        self.gate = gate
        self.dispatcher = dispatcher
        self._surface = surface
        self._scheduler = scheduler
        self.config_error: ConfigMissing | None = None

    def view_did_appear(self) -> None:
        """Re-check access on every presentation; the platform may have reset it."""
        self.gate.check_access()
        decision = self.gate.decision
        if decision is GateDecision.PROCEED:
            self._access_granted()
            return
        self._hide_menu()
        if decision is GateDecision.PROMPT:
            self.gate.request_access(self._on_access_response)
        else:
            self._show_privacy_warning()

    def _hide_menu(self) -> None:
        """Access is no longer granted: drop a menu shown by an earlier presentation."""
        if self.dispatcher.section_count() == 0:
            return
        self.dispatcher.teardown()
        self._surface.reload([])

    def _on_access_response(self, granted: bool) -> None:
        if granted:
            self._scheduler.run_on_ui_context(self._access_granted)
        else:
            self._scheduler.run_on_ui_context(self._show_privacy_warning)

    def _access_granted(self) -> None:
        try:
            self.dispatcher.load_menu()
        except ConfigMissing as e:
            logger.error("Menu configuration unavailable: %s", e)
            self.config_error = e
            self._surface.reload([])
            return
        self.config_error = None
        self._surface.reload(self.dispatcher.render_menu())

    def _show_privacy_warning(self) -> None:
        logger.info("Contacts access denied; menu will not be shown")
        self._surface.show_notification(
            Notification(
                title=DEFAULT_MESSAGES["privacy_warning_title"],
                message=DEFAULT_MESSAGES["privacy_warning"],
            )
        )

    def select(self, section: int) -> None:
        if not self.gate.is_granted or self.dispatcher.section_count() == 0:
            logger.warning("Ignoring selection of section %s: menu not shown", section)
            return
        self.dispatcher.on_select(section)

    def view_did_disappear(self) -> None:
        self.dispatcher.teardown()
