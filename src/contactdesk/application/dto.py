"""Menu configuration and gate decision types."""

import re
from dataclasses import dataclass, field
from enum import Enum

from contactdesk.domain import MenuEntry

DEFAULT_MESSAGES = {
    "privacy_warning_title": "Privacy Warning!",
    "privacy_warning": "Permission was not granted for Contacts.",
    "picker_result_title": "Picker Result",
    "picker_result": "Picked {property} for {name} with number {value}",
    "contact_not_found_title": "Error",
    "contact_not_found": "Could not find {name} in the Contacts application.",
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class MenuConfig:
    """The loaded menu resource: four ordered entries plus notification texts."""

    entries: tuple[MenuEntry, ...]
    messages: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))
    display_contact_name: str = "Appleseed"
    unknown_contact_email: str = "John-Appleseed@mac.com"

    def message(self, message_id: str, **template_vars) -> str:
        text = self.messages.get(message_id) or DEFAULT_MESSAGES.get(message_id) or message_id

        def fill(match: re.Match) -> str:
            key = match.group(1)
            if key not in template_vars:
                return match.group(0)
            value = template_vars[key]
            return str(value) if value is not None else ""

        return _PLACEHOLDER.sub(fill, text)


class GateDecision(Enum):
    """What the caller of the gate should do next."""

    PROCEED = "proceed"
    PROMPT = "prompt"
    BLOCK = "block"
