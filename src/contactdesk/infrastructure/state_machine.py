"""
XState-compatible state machines using xstate-python.

Loads standard XState JSON (id, initial, states with on: { EVENT: target })
and uses the library for transitions. The authorization lifecycle and the
menu dispatcher lifecycle are both defined this way under machines/.
"""

import json
import os
from pathlib import Path

from xstate.machine import Machine

AUTHORIZATION_MACHINE = "authorization"
MENU_DISPATCHER_MACHINE = "menu_dispatcher"

_PATH_ENV = {
    AUTHORIZATION_MACHINE: "AUTHORIZATION_MACHINE_PATH",
    MENU_DISPATCHER_MACHINE: "DISPATCHER_MACHINE_PATH",
}


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent.parent.parent


def get_machine_path(name: str) -> Path:
    """Return path to a machine JSON (env override or machines/<name>.json)."""
    default = _repo_root() / "machines" / f"{name}.json"
    env_name = _PATH_ENV.get(name)
    path = os.environ.get(env_name, "").strip() if env_name else ""
    if path:
        return Path(path).resolve()
    return default


def load_machine(path: Path) -> dict:
    raw = path.read_text(encoding="utf-8")
    config = json.loads(raw)
    if "id" not in config or "initial" not in config or "states" not in config:
        raise ValueError("Machine must have 'id', 'initial' and 'states'")
    if config["initial"] not in config["states"]:
        raise ValueError(f"initial '{config['initial']}' must be a state")
    return config


class XStateMachine:
    """Wraps one XState config. transition() returns None when the event is not accepted."""

    def __init__(self, config: dict) -> None:
        self.config = config
        self._machine = Machine(config)

    @property
    def initial(self) -> str:
        return self.config["initial"]

    @property
    def states(self) -> list[str]:
        return list(self.config["states"])

    def transition(self, state_value: str, event: str) -> str | None:
        try:
            state = self._machine.state_from(state_value)
            next_state = self._machine.transition(state, event)
        except (ValueError, KeyError):
            return None
        if next_state.value == state_value:
            return None
        return next_state.value


# Module-level cache of loaded machines, keyed by name
_machine_cache: dict[str, XStateMachine] = {}


def get_machine(name: str, cache: bool = True) -> XStateMachine:
    """Load machine by name (cached by default). Pass cache=False to reload."""
    if cache and name in _machine_cache:
        return _machine_cache[name]
    machine = XStateMachine(load_machine(get_machine_path(name)))
    _machine_cache[name] = machine
    return machine
