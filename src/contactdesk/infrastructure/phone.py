"""Phone number formatting for values coming out of shared contact cards."""

import phonenumbers


def normalize_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """Return the E.164 form of the number, or None if it cannot be parsed as valid.

    default_region applies when the input has no leading + ("202 555 1234"
    with "US"). Numbers that carry a country code ignore it.
    """
    if not raw or not str(raw).strip():
        return None
    try:
        parsed = phonenumbers.parse(str(raw).strip(), default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def display_phone(raw: str | None, default_region: str | None = None) -> str:
    """E.164 when the number is valid, otherwise the stripped input unchanged."""
    cleaned = (raw or "").strip()
    return normalize_phone(cleaned, default_region) or cleaned
