"""Load and validate the YAML menu definition. Used by MenuDispatcher."""

import os
from pathlib import Path

import yaml

from contactdesk.application.dto import DEFAULT_MESSAGES, MenuConfig
from contactdesk.application.errors import ConfigMissing
from contactdesk.domain import (
    DEFAULT_ROW_HEIGHT,
    EDIT_UNKNOWN_CONTACT_ROW_HEIGHT,
    ActionKind,
    MenuEntry,
)


def _repo_root() -> Path:
    """Return repo root (parent of src)."""
    return Path(__file__).resolve().parent.parent.parent.parent


def get_menu_path() -> Path:
    """Return path to the menu YAML (MENU_PATH env or menus/menu.yaml)."""
    default = _repo_root() / "menus" / "menu.yaml"
    path = os.environ.get("MENU_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def _row_height(kind: ActionKind) -> float:
    if kind is ActionKind.EDIT_UNKNOWN_CONTACT:
        return EDIT_UNKNOWN_CONTACT_ROW_HEIGHT
    return DEFAULT_ROW_HEIGHT


def load_menu(path: Path | None = None) -> MenuConfig:
    """Load menu YAML and return the MenuConfig. Raises ConfigMissing on any problem."""
    if path is None:
        path = get_menu_path()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigMissing(f"Menu resource not found: {path}", path=path) from e
    try:
        menu = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigMissing(f"Menu resource is not valid YAML: {e}", path=path) from e
    if not isinstance(menu, dict):
        raise ConfigMissing("Menu YAML must be a dict", path=path)
    sections = menu.get("sections")
    if not isinstance(sections, list) or not sections:
        raise ConfigMissing("Menu must have a non-empty 'sections' list", path=path)
    if len(sections) != len(ActionKind):
        raise ConfigMissing(
            f"Menu must have exactly {len(ActionKind)} sections, got {len(sections)}",
            path=path,
        )
    entries = []
    for kind, section in zip(ActionKind, sections):
        if not isinstance(section, dict) or not section.get("title"):
            raise ConfigMissing(f"Section {int(kind)} must have a 'title'", path=path)
        description = section.get("description") or ""
        # Button-style rows never show a description.
        if not kind.is_navigation:
            description = ""
        entries.append(
            MenuEntry(
                action_kind=kind,
                title=str(section["title"]).strip(),
                description=str(description).strip(),
                row_height=_row_height(kind),
            )
        )
    messages = dict(DEFAULT_MESSAGES)
    messages.update({k: str(v) for k, v in (menu.get("messages") or {}).items()})
    lookups = menu.get("lookups") or {}
    return MenuConfig(
        entries=tuple(entries),
        messages=messages,
        display_contact_name=str(lookups.get("display_contact_name") or "Appleseed"),
        unknown_contact_email=str(
            lookups.get("unknown_contact_email") or "John-Appleseed@mac.com"
        ),
    )


# Module-level cache for loaded menu
_menu_cache: MenuConfig | None = None


def get_menu(cache: bool = True) -> MenuConfig:
    """Load menu (cached by default). Pass cache=False to reload."""
    global _menu_cache
    if cache and _menu_cache is not None:
        return _menu_cache
    _menu_cache = load_menu()
    return _menu_cache
