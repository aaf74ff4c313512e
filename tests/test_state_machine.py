"""Tests for the XState lifecycle machines (authorization and menu dispatcher)."""

import json

import pytest

from contactdesk.infrastructure.state_machine import (
    AUTHORIZATION_MACHINE,
    MENU_DISPATCHER_MACHINE,
    XStateMachine,
    get_machine,
    get_machine_path,
    load_machine,
)


def _authorization() -> XStateMachine:
    return get_machine(AUTHORIZATION_MACHINE, cache=False)


def _dispatcher() -> XStateMachine:
    return get_machine(MENU_DISPATCHER_MACHINE, cache=False)


def test_machine_paths_default_to_machines_dir():
    assert get_machine_path(AUTHORIZATION_MACHINE).name == "authorization.json"
    assert get_machine_path(MENU_DISPATCHER_MACHINE).parent.name == "machines"


def test_machine_path_env_override(tmp_path, monkeypatch):
    target = tmp_path / "auth.json"
    monkeypatch.setenv("AUTHORIZATION_MACHINE_PATH", str(target))
    assert get_machine_path(AUTHORIZATION_MACHINE) == target.resolve()


def test_load_machine_requires_initial_state(tmp_path):
    path = tmp_path / "m.json"
    path.write_text(json.dumps({"id": "m", "initial": "missing", "states": {"a": {}}}))
    with pytest.raises(ValueError, match="initial 'missing' must be a state"):
        load_machine(path)


def test_authorization_first_check_transitions():
    machine = _authorization()
    assert machine.initial == "unknown"
    assert machine.transition("unknown", "STATUS_NOT_DETERMINED") == "not_determined"
    assert machine.transition("unknown", "STATUS_GRANTED") == "granted"
    assert machine.transition("unknown", "STATUS_DENIED") == "denied"


def test_not_determined_resolves_but_never_to_itself():
    machine = _authorization()
    assert machine.transition("not_determined", "ACCESS_GRANTED") == "granted"
    assert machine.transition("not_determined", "ACCESS_DENIED") == "denied"
    assert machine.transition("not_determined", "STATUS_NOT_DETERMINED") is None


@pytest.mark.parametrize("terminal", ["granted", "denied"])
def test_granted_and_denied_are_absorbing(terminal):
    machine = _authorization()
    for event in (
        "STATUS_NOT_DETERMINED",
        "STATUS_GRANTED",
        "STATUS_DENIED",
        "ACCESS_GRANTED",
        "ACCESS_DENIED",
    ):
        assert machine.transition(terminal, event) is None


def test_dispatcher_lifecycle():
    machine = _dispatcher()
    assert machine.initial == "uninitialized"
    assert machine.transition("uninitialized", "PRESENT_PICKER") is None
    assert machine.transition("uninitialized", "LOAD") == "loaded"
    assert machine.transition("loaded", "PRESENT_PICKER") == "picker_active"
    assert machine.transition("picker_active", "PRESENT_PICKER") is None
    assert machine.transition("picker_active", "PRESENT_DETAIL") is None
    assert machine.transition("picker_active", "PICKER_FINISHED") == "loaded"
    assert machine.transition("loaded", "PRESENT_DETAIL") == "detail_active"
    assert machine.transition("detail_active", "DETAIL_FINISHED") == "loaded"
    assert machine.transition("loaded", "TEARDOWN") == "uninitialized"
