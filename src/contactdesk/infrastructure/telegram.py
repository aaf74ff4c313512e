"""
Telegram adapters: the menu as an inline keyboard, notifications as messages,
the access prompt as Allow / Don't Allow buttons, the picker as Telegram's own
contact sharing, and the detail view as a contact card with property buttons.

Adapters only queue actions (SendMessage, SendContact); the webhook or the
polling bot executes them after each update, one chat session at a time.
"""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from telegram import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
    Update,
)

from contactdesk.application import ContactBrowser
from contactdesk.application.ports import AccessCompletion, DetailObserver, PickerObserver
from contactdesk.bootstrap import build_browser
from contactdesk.domain import (
    BIRTHDAY_KEY,
    EMAIL_ADDRESSES_KEY,
    PHONE_NUMBERS_KEY,
    Contact,
    ContactProperty,
    LabeledValue,
    Notification,
    PlatformAuthorizationStatus,
    RenderedRow,
    localized_property_name,
)
from contactdesk.infrastructure.phone import display_phone
from contactdesk.infrastructure.scheduling import QueueScheduler

logger = logging.getLogger(__name__)

CANCEL_TEXT = "Cancel"
DISCLOSURE = " ›"


@dataclass
class SendMessage:
    text: str
    reply_markup: object | None = None


@dataclass
class SendContact:
    phone_number: str
    first_name: str
    last_name: str | None = None


@dataclass
class Outbox:
    """Actions queued for one chat during one update."""

    actions: list = field(default_factory=list)

    def send(self, text: str, reply_markup: object | None = None) -> None:
        self.actions.append(SendMessage(text=text, reply_markup=reply_markup))

    def drain(self) -> list:
        out, self.actions = self.actions, []
        return out


def _parse_vcard_date(value: str) -> date | None:
    value = value.strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def contact_from_card(
    first_name: str | None,
    last_name: str | None = None,
    phone_number: str | None = None,
    vcard: str | None = None,
    *,
    default_region: str | None = None,
) -> Contact:
    """Build a Contact from a shared Telegram contact. Email and birthday come from the vCard."""
    emails: list[LabeledValue] = []
    birthday = None
    for line in (vcard or "").splitlines():
        name, _, value = line.partition(":")
        tag = name.split(";", 1)[0].strip().upper()
        if tag == "EMAIL" and value.strip():
            emails.append(LabeledValue(value.strip()))
        elif tag == "BDAY" and birthday is None:
            birthday = _parse_vcard_date(value)
    phones = ()
    if phone_number and phone_number.strip():
        phones = (LabeledValue(display_phone(phone_number, default_region), label="mobile"),)
    return Contact(
        given_name=(first_name or "").strip(),
        family_name=(last_name or "").strip(),
        phone_numbers=phones,
        email_addresses=tuple(emails),
        birthday=birthday,
    )


def _format_contact_card(contact: Contact) -> str:
    """Format one contact as name followed by one line per property."""
    lines = [contact.full_name or "No Name"]
    for key in (PHONE_NUMBERS_KEY, EMAIL_ADDRESSES_KEY, BIRTHDAY_KEY):
        for value in contact.values_for(key):
            lines.append(f"{localized_property_name(key)}: {value}")
    return "\n".join(lines)


def _contact_properties(contact: Contact) -> list[ContactProperty]:
    return [
        ContactProperty(contact=contact, key=key, value=value)
        for key in (PHONE_NUMBERS_KEY, EMAIL_ADDRESSES_KEY, BIRTHDAY_KEY)
        for value in contact.values_for(key)
    ]


class TelegramContactStore:
    """Authorization is the chat user's consent; contacts are the cards they saved this session."""

    def __init__(
        self,
        outbox: Outbox,
        status: PlatformAuthorizationStatus = PlatformAuthorizationStatus.NOT_DETERMINED,
    ) -> None:
        self._outbox = outbox
        self._status = status
        self._pending: AccessCompletion | None = None
        self._contacts: list[Contact] = []

    def authorization_status(self) -> PlatformAuthorizationStatus:
        return self._status

    def request_access(self, completion: AccessCompletion) -> None:
        self._pending = completion
        self._outbox.send(
            '"Contact Desk" would like to access your contacts.',
            InlineKeyboardMarkup(
                [
                    [
                        InlineKeyboardButton("Don't Allow", callback_data="access:deny"),
                        InlineKeyboardButton("OK", callback_data="access:grant"),
                    ]
                ]
            ),
        )

    def answer(self, granted: bool) -> None:
        completion = self._pending
        if completion is None:
            logger.info("Access answer with no pending prompt ignored")
            return
        self._pending = None
        self._status = (
            PlatformAuthorizationStatus.AUTHORIZED
            if granted
            else PlatformAuthorizationStatus.DENIED
        )
        completion(granted, None)

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


class TelegramContactPicker:
    """The user's Telegram contact list acts as the picker; a Cancel key backs out."""

    def __init__(
        self,
        outbox: Outbox,
        store: TelegramContactStore,
        default_region: str | None = None,
    ) -> None:
        self._outbox = outbox
        self._store = store
        self._default_region = default_region
        self._keys: tuple[str, ...] = ()
        self._observer: PickerObserver | None = None

    @property
    def is_active(self) -> bool:
        return self._observer is not None

    def present(
        self, displayed_property_keys: Sequence[str], observer: PickerObserver
    ) -> None:
        if self._observer is not None:
            raise RuntimeError("A picker is already presented")
        self._keys = tuple(displayed_property_keys)
        self._observer = observer
        shown = ", ".join(localized_property_name(k) for k in self._keys)
        self._outbox.send(
            f"Share a contact (attach → Contact). Shown properties: {shown}.",
            ReplyKeyboardMarkup(
                [[KeyboardButton(CANCEL_TEXT)]],
                resize_keyboard=True,
                one_time_keyboard=True,
            ),
        )

    def receive_contact(self, payload: dict) -> None:
        """A contact card arrived: select its first displayed property that has a value."""
        observer = self._observer
        if observer is None:
            return
        contact = contact_from_card(
            payload.get("first_name"),
            payload.get("last_name"),
            payload.get("phone_number"),
            payload.get("vcard"),
            default_region=self._default_region,
        )
        self._store.add(contact)
        for key in self._keys:
            values = contact.values_for(key)
            if values:
                self._close("Contact received.")
                observer.on_property_selected(
                    ContactProperty(contact=contact, key=key, value=values[0])
                )
                return
        self._outbox.send("That contact has no phone, email or birthday. Try another one.")

    def cancel(self) -> None:
        if self._observer is not None:
            self._observer.on_cancelled()

    def _close(self, text: str) -> None:
        self._observer = None
        self._keys = ()
        self._outbox.send(text, ReplyKeyboardRemove())

    def dismiss(self) -> None:
        self._close("Picker closed.")


class TelegramContactViewer:
    """Contact card with one button per property and a Done button."""

    def __init__(
        self,
        outbox: Outbox,
        store: TelegramContactStore,
        default_region: str | None = None,
    ) -> None:
        self._outbox = outbox
        self._store = store
        self._default_region = default_region
        self._observer: DetailObserver | None = None
        self._contact: Contact | None = None
        self._properties: list[ContactProperty] = []
        self.awaiting_new_contact = False

    @property
    def is_active(self) -> bool:
        return self._observer is not None

    def _begin(self, observer: DetailObserver) -> None:
        if self._observer is not None:
            raise RuntimeError("A contact view is already presented")
        self._observer = observer

    def _show(self, contact: Contact, heading: str | None = None) -> None:
        self._contact = contact
        self._properties = _contact_properties(contact)
        rows = [
            [
                InlineKeyboardButton(
                    f"{localized_property_name(p.key)}: {p.value}",
                    callback_data=f"detail:prop:{i}",
                )
            ]
            for i, p in enumerate(self._properties)
        ]
        rows.append([InlineKeyboardButton("Done", callback_data="detail:done")])
        text = _format_contact_card(contact)
        if heading:
            text = f"{heading}\n\n{text}"
        self._outbox.send(text, InlineKeyboardMarkup(rows))

    def present_contact(self, contact: Contact, observer: DetailObserver) -> None:
        self._begin(observer)
        self._show(contact)

    def present_unknown_contact(self, contact: Contact, observer: DetailObserver) -> None:
        self._begin(observer)
        self._show(contact, heading="Unknown contact")

    def present_new_contact(self, observer: DetailObserver) -> None:
        self._begin(observer)
        self.awaiting_new_contact = True
        self._outbox.send(
            "New contact: share a contact card to save it (attach → Contact).",
            InlineKeyboardMarkup(
                [[InlineKeyboardButton("Done", callback_data="detail:done")]]
            ),
        )

    def receive_contact(self, payload: dict) -> None:
        if not self.awaiting_new_contact or self._observer is None:
            return
        contact = contact_from_card(
            payload.get("first_name"),
            payload.get("last_name"),
            payload.get("phone_number"),
            payload.get("vcard"),
            default_region=self._default_region,
        )
        self._store.add(contact)
        self.awaiting_new_contact = False
        self._outbox.send(f"Saved {contact.full_name or 'contact'}.")
        self._observer.on_completed(contact)

    def tap(self, index: int) -> None:
        if self._observer is None or not 0 <= index < len(self._properties):
            return
        prop = self._properties[index]
        if self._observer.should_perform_default_action(prop):
            if prop.key == PHONE_NUMBERS_KEY:
                self._outbox.actions.append(
                    SendContact(
                        phone_number=prop.value,
                        first_name=prop.contact.given_name or prop.contact.full_name or "Contact",
                        last_name=prop.contact.family_name or None,
                    )
                )
            else:
                self._outbox.send(prop.value)

    def done(self) -> None:
        if self._observer is not None:
            self._observer.on_completed(self._contact)

    def dismiss(self) -> None:
        self._observer = None
        self._contact = None
        self._properties = []
        self.awaiting_new_contact = False


class TelegramSurface:
    """The menu is one inline button per section; descriptions go in the message body."""

    def __init__(self, outbox: Outbox, title: str = "Contacts") -> None:
        self._outbox = outbox
        self._title = title
        self.rows: list[RenderedRow] = []

    def reload(self, rows: list[RenderedRow]) -> None:
        self.rows = list(rows)
        if not rows:
            return
        lines = [self._title]
        for row in rows:
            if row.detail_text:
                lines.append(f"• {row.text}: {row.detail_text}")
        keyboard = [
            [
                InlineKeyboardButton(
                    row.text + (DISCLOSURE if row.disclosure else ""),
                    callback_data=f"menu:{row.section}",
                )
            ]
            for row in rows
        ]
        self._outbox.send("\n".join(lines), InlineKeyboardMarkup(keyboard))

    def show_notification(self, notification: Notification) -> None:
        self._outbox.send(
            f"{notification.title}\n\n{notification.message}",
            InlineKeyboardMarkup(
                [[InlineKeyboardButton(notification.action_title, callback_data="ack")]]
            ),
        )


def _status_from_env() -> PlatformAuthorizationStatus:
    raw = os.environ.get("CONTACTS_ACCESS", "").strip().lower()
    try:
        return PlatformAuthorizationStatus(raw) if raw else PlatformAuthorizationStatus.NOT_DETERMINED
    except ValueError:
        logger.warning("Unknown CONTACTS_ACCESS %r; using not_determined", raw)
        return PlatformAuthorizationStatus.NOT_DETERMINED


class ChatSession:
    """One browser per chat, wired to Telegram adapters."""

    def __init__(
        self,
        status: PlatformAuthorizationStatus | None = None,
        *,
        menu_source=None,
        default_region: str | None = None,
    ) -> None:
        self.outbox = Outbox()
        self.scheduler = QueueScheduler()
        self.store = TelegramContactStore(self.outbox, status or _status_from_env())
        self.picker = TelegramContactPicker(self.outbox, self.store, default_region)
        self.viewer = TelegramContactViewer(self.outbox, self.store, default_region)
        self.surface = TelegramSurface(self.outbox)
        self.browser: ContactBrowser = build_browser(
            store=self.store,
            picker=self.picker,
            viewer=self.viewer,
            surface=self.surface,
            scheduler=self.scheduler,
            menu_source=menu_source,
        )

    def handle(self, event: dict) -> list:
        """Apply one event, run redispatched callbacks, and return the queued actions."""
        etype = event.get("type")
        subtype = event.get("subtype")
        payload = event.get("payload") or {}
        if etype == "text" and subtype == "command_start":
            self.browser.view_did_appear()
        elif etype == "text" and subtype == "cancel":
            if self.picker.is_active:
                self.picker.cancel()
        elif etype == "callback" and subtype == "menu":
            self.browser.select(payload["section"])
        elif etype == "callback" and subtype == "access":
            self.store.answer(payload["granted"])
        elif etype == "callback" and subtype == "detail_prop":
            self.viewer.tap(payload["index"])
        elif etype == "callback" and subtype == "detail_done":
            self.viewer.done()
        elif etype == "contact_shared":
            if self.picker.is_active:
                self.picker.receive_contact(payload)
            elif self.viewer.awaiting_new_contact:
                self.viewer.receive_contact(payload)
            else:
                self.outbox.send("Open the menu with /start and pick an action first.")
        elif etype == "text" and subtype == "unsupported":
            self.outbox.send("Use /start to open the contacts menu.")
        self.scheduler.drain()
        return self.outbox.drain()


# Chat sessions: chat_id -> ChatSession
_sessions: dict[int, ChatSession] = {}


def get_session(chat_id: int) -> ChatSession:
    if chat_id not in _sessions:
        _sessions[chat_id] = ChatSession()
    return _sessions[chat_id]


def update_to_event(update) -> dict | None:
    """Build an event from a Telegram Update. Returns None if no relevant event."""
    if not update or not isinstance(update, Update):
        return None
    if update.callback_query:
        data = (update.callback_query.data or "").strip()
        payload: dict = {"data": data}
        if data.startswith("menu:"):
            try:
                payload["section"] = int(data[5:])
            except ValueError:
                return None
            subtype = "menu"
        elif data in ("access:grant", "access:deny"):
            payload["granted"] = data == "access:grant"
            subtype = "access"
        elif data.startswith("detail:prop:"):
            try:
                payload["index"] = int(data[12:])
            except ValueError:
                return None
            subtype = "detail_prop"
        elif data == "detail:done":
            subtype = "detail_done"
        elif data == "ack":
            subtype = "ack"
        else:
            return None
        return {"type": "callback", "subtype": subtype, "payload": payload}
    if update.message and update.message.contact:
        c = update.message.contact
        return {
            "type": "contact_shared",
            "subtype": None,
            "payload": {
                "first_name": getattr(c, "first_name", None),
                "last_name": getattr(c, "last_name", None),
                "phone_number": getattr(c, "phone_number", None),
                "vcard": getattr(c, "vcard", None),
            },
        }
    if update.message and update.message.text:
        text = update.message.text.strip()
        payload = {"text": text}
        if text in ("/start", "/menu"):
            subtype = "command_start"
        elif text == CANCEL_TEXT or text == "/cancel":
            subtype = "cancel"
        else:
            subtype = "unsupported"
        return {"type": "text", "subtype": subtype, "payload": payload}
    if update.message:
        return {"type": "text", "subtype": "unsupported", "payload": {"text": ""}}
    return None


async def execute_actions(bot, chat_id: int, actions: list) -> None:
    """Send queued actions to the chat, in order."""
    for action in actions:
        if isinstance(action, SendMessage):
            await bot.send_message(
                chat_id=chat_id, text=action.text, reply_markup=action.reply_markup
            )
        elif isinstance(action, SendContact):
            await bot.send_contact(
                chat_id=chat_id,
                phone_number=action.phone_number,
                first_name=action.first_name,
                last_name=action.last_name,
            )
