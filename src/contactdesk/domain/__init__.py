"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactdesk.domain.entities import (
    BIRTHDAY_KEY,
    DEFAULT_ROW_HEIGHT,
    EDIT_UNKNOWN_CONTACT_ROW_HEIGHT,
    EMAIL_ADDRESSES_KEY,
    PHONE_NUMBERS_KEY,
    ActionKind,
    AuthorizationState,
    Contact,
    ContactProperty,
    LabeledValue,
    MenuEntry,
    Notification,
    PickCancelled,
    PickResult,
    PlatformAuthorizationStatus,
    RenderedRow,
    localized_property_name,
)

__all__ = [
    "BIRTHDAY_KEY",
    "DEFAULT_ROW_HEIGHT",
    "EDIT_UNKNOWN_CONTACT_ROW_HEIGHT",
    "EMAIL_ADDRESSES_KEY",
    "PHONE_NUMBERS_KEY",
    "ActionKind",
    "AuthorizationState",
    "Contact",
    "ContactProperty",
    "LabeledValue",
    "MenuEntry",
    "Notification",
    "PickCancelled",
    "PickResult",
    "PlatformAuthorizationStatus",
    "RenderedRow",
    "localized_property_name",
]
