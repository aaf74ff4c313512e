"""Tests for phone number formatting (E.164) of shared contact cards."""


from contactdesk.infrastructure.phone import display_phone, normalize_phone


def test_normalize_with_country_code_returns_e164():
    assert normalize_phone("+39 312 345 6789") == "+393123456789"
    assert normalize_phone("+1 202 555 1234") == "+12025551234"


def test_normalize_without_country_code_uses_default_region():
    assert normalize_phone("202 555 1234", default_region="US") == "+12025551234"


def test_normalize_invalid_returns_none():
    assert normalize_phone("") is None
    assert normalize_phone(None) is None
    assert normalize_phone("abc") is None
    assert normalize_phone("123", default_region="US") is None  # too short


def test_display_phone_falls_back_to_raw_value():
    assert display_phone("  +1 202 555 1234 ") == "+12025551234"
    assert display_phone(" 555-1234 ") == "555-1234"
    assert display_phone(None) == ""
