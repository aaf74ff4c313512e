"""Tests for the YAML menu loader."""

import pytest

from contactdesk.application import ConfigMissing
from contactdesk.domain import (
    DEFAULT_ROW_HEIGHT,
    EDIT_UNKNOWN_CONTACT_ROW_HEIGHT,
    ActionKind,
)
from contactdesk.infrastructure.menu_loader import get_menu_path, load_menu

VALID_MENU = """
sections:
  - title: Pick
  - title: Create
    description: ignored for button rows
  - title: Display
    description: Shows Appleseed
  - title: Edit Unknown
    description: Shows an unknown contact
lookups:
  display_contact_name: Ada
messages:
  picker_result: "{name}: {property} = {value}"
"""


def test_load_bundled_menu():
    path = get_menu_path()
    assert path.name == "menu.yaml"
    menu = load_menu(path)
    assert [e.action_kind for e in menu.entries] == list(ActionKind)
    assert menu.entries[0].title == "Display Picker"
    assert menu.entries[0].description == ""
    assert menu.entries[1].description == ""
    assert "Appleseed" in menu.entries[2].description
    assert menu.display_contact_name == "Appleseed"
    assert menu.unknown_contact_email == "John-Appleseed@mac.com"


def test_row_heights():
    menu = load_menu()
    heights = [e.row_height for e in menu.entries]
    assert heights[:3] == [DEFAULT_ROW_HEIGHT] * 3
    assert heights[3] == EDIT_UNKNOWN_CONTACT_ROW_HEIGHT
    assert heights[3] > max(heights[:3])


def test_custom_menu_messages_and_lookups(tmp_path):
    (tmp_path / "menu.yaml").write_text(VALID_MENU)
    menu = load_menu(tmp_path / "menu.yaml")
    assert menu.entries[1].description == ""
    assert menu.display_contact_name == "Ada"
    assert menu.message("picker_result", name="A", property="Phone", value="1") == "A: Phone = 1"
    # Defaults still fill in what the file leaves out
    assert menu.message("picker_result_title") == "Picker Result"


def test_menu_path_env_override(tmp_path, monkeypatch):
    (tmp_path / "other.yaml").write_text(VALID_MENU)
    monkeypatch.setenv("MENU_PATH", str(tmp_path / "other.yaml"))
    assert get_menu_path() == (tmp_path / "other.yaml").resolve()
    assert load_menu().entries[0].title == "Pick"


def test_missing_file_raises_config_missing(tmp_path):
    with pytest.raises(ConfigMissing, match="not found") as excinfo:
        load_menu(tmp_path / "nope.yaml")
    assert excinfo.value.path == tmp_path / "nope.yaml"


def test_invalid_yaml_raises_config_missing(tmp_path):
    (tmp_path / "menu.yaml").write_text("sections: [unclosed")
    with pytest.raises(ConfigMissing, match="not valid YAML"):
        load_menu(tmp_path / "menu.yaml")


def test_wrong_section_count_raises_config_missing(tmp_path):
    (tmp_path / "menu.yaml").write_text(
        "sections:\n  - title: A\n  - title: B\n  - title: C\n"
    )
    with pytest.raises(ConfigMissing, match="exactly 4 sections"):
        load_menu(tmp_path / "menu.yaml")


def test_section_without_title_raises_config_missing(tmp_path):
    (tmp_path / "menu.yaml").write_text(
        "sections:\n  - title: A\n  - description: no title\n  - title: C\n  - title: D\n"
    )
    with pytest.raises(ConfigMissing, match="Section 1 must have a 'title'"):
        load_menu(tmp_path / "menu.yaml")


def test_config_missing_is_a_value_error(tmp_path):
    (tmp_path / "menu.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        load_menu(tmp_path / "menu.yaml")
