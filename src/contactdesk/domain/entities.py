"""Domain entities: authorization states, menu entries, contacts and pick results."""

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum

# Row heights for the menu list. Edit Unknown Contact needs room for its description.
DEFAULT_ROW_HEIGHT = 44.0
EDIT_UNKNOWN_CONTACT_ROW_HEIGHT = 81.0

PHONE_NUMBERS_KEY = "phoneNumbers"
EMAIL_ADDRESSES_KEY = "emailAddresses"
BIRTHDAY_KEY = "birthday"

_LOCALIZED_PROPERTY_NAMES = {
    "givenName": "First name",
    "familyName": "Last name",
    "organizationName": "Company",
    PHONE_NUMBERS_KEY: "Phone",
    EMAIL_ADDRESSES_KEY: "Email",
    BIRTHDAY_KEY: "Birthday",
    "note": "Note",
}


def localized_property_name(key: str) -> str:
    """Return the user-facing label for a contact property key (the key itself if unknown)."""
    return _LOCALIZED_PROPERTY_NAMES.get(key, key)


class AuthorizationState(Enum):
    """Whether this application may read the contact store."""

    UNKNOWN = "unknown"
    NOT_DETERMINED = "not_determined"
    GRANTED = "granted"
    DENIED = "denied"


class PlatformAuthorizationStatus(Enum):
    """Status as reported by a contact store. Restricted is treated as denied."""

    AUTHORIZED = "authorized"
    DENIED = "denied"
    RESTRICTED = "restricted"
    NOT_DETERMINED = "not_determined"

    def to_state(self) -> AuthorizationState:
        if self is PlatformAuthorizationStatus.AUTHORIZED:
            return AuthorizationState.GRANTED
        if self is PlatformAuthorizationStatus.NOT_DETERMINED:
            return AuthorizationState.NOT_DETERMINED
        return AuthorizationState.DENIED


class ActionKind(IntEnum):
    """Menu actions. The ordinal is the section index."""

    PICK_CONTACT = 0
    CREATE_NEW_CONTACT = 1
    DISPLAY_CONTACT = 2
    EDIT_UNKNOWN_CONTACT = 3

    @property
    def is_navigation(self) -> bool:
        """Display and edit rows navigate; the first two rows act like buttons."""
        return self >= ActionKind.DISPLAY_CONTACT


@dataclass(frozen=True)
class MenuEntry:
    """One selectable menu section."""

    action_kind: ActionKind
    title: str
    description: str = ""
    row_height: float = DEFAULT_ROW_HEIGHT

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("Menu entry title must be non-empty.")


@dataclass(frozen=True)
class LabeledValue:
    """A labeled multi-value field such as one phone number ("mobile", "555-1234")."""

    value: str
    label: str | None = None


@dataclass(frozen=True)
class Contact:
    """
    A contact record as handed out by a contact store or picker.
    Contacts are immutable; editing produces a new instance.
    """

    identifier: str = field(default_factory=lambda: str(uuid.uuid4()))
    given_name: str = ""
    family_name: str = ""
    phone_numbers: tuple[LabeledValue, ...] = ()
    email_addresses: tuple[LabeledValue, ...] = ()
    birthday: date | None = None

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}".strip()

    def values_for(self, key: str) -> list[str]:
        """Return the string values stored under a property key."""
        if key == PHONE_NUMBERS_KEY:
            return [p.value for p in self.phone_numbers]
        if key == EMAIL_ADDRESSES_KEY:
            return [e.value for e in self.email_addresses]
        if key == BIRTHDAY_KEY:
            return [self.birthday.isoformat()] if self.birthday else []
        return []


@dataclass(frozen=True)
class ContactProperty:
    """One property of a contact selected in a picker or detail view."""

    contact: Contact
    key: str
    value: str
    label: str | None = None


@dataclass(frozen=True)
class PickResult:
    """What the user picked: whose property, which property, and its value."""

    contact_display_name: str
    property_localized_name: str
    property_value: str

    @classmethod
    def from_property(cls, prop: ContactProperty) -> "PickResult":
        return cls(
            contact_display_name=prop.contact.full_name,
            property_localized_name=localized_property_name(prop.key),
            property_value=str(prop.value),
        )


@dataclass(frozen=True)
class PickCancelled:
    """The picker was dismissed without a selection."""

    pass


@dataclass(frozen=True)
class RenderedRow:
    """A menu row ready for display."""

    section: int
    text: str
    detail_text: str | None = None
    centered: bool = False
    disclosure: bool = False
    height: float = DEFAULT_ROW_HEIGHT


@dataclass(frozen=True)
class Notification:
    """A modal message with a single acknowledgment action."""

    title: str
    message: str
    action_title: str = "OK"
