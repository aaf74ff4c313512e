"""Unit tests for AuthorizationGate. In-memory contact store only."""

import threading

import pytest

from contactdesk.application import AuthorizationGate, GateDecision
from contactdesk.domain import AuthorizationState, PlatformAuthorizationStatus
from contactdesk.infrastructure import AUTHORIZATION_MACHINE, InMemoryContactStore, get_machine


def _gate(
    status: PlatformAuthorizationStatus = PlatformAuthorizationStatus.NOT_DETERMINED,
    **store_kwargs,
) -> tuple[AuthorizationGate, InMemoryContactStore]:
    store = InMemoryContactStore(status, **store_kwargs)
    return AuthorizationGate(store, get_machine(AUTHORIZATION_MACHINE)), store


def test_state_is_unknown_before_first_check() -> None:
    gate, store = _gate()
    assert gate.state is AuthorizationState.UNKNOWN
    assert gate.decision is None
    assert store.status_queries == 0


@pytest.mark.parametrize(
    ("status", "expected", "decision"),
    [
        (PlatformAuthorizationStatus.AUTHORIZED, AuthorizationState.GRANTED, GateDecision.PROCEED),
        (PlatformAuthorizationStatus.NOT_DETERMINED, AuthorizationState.NOT_DETERMINED, GateDecision.PROMPT),
        (PlatformAuthorizationStatus.DENIED, AuthorizationState.DENIED, GateDecision.BLOCK),
        (PlatformAuthorizationStatus.RESTRICTED, AuthorizationState.DENIED, GateDecision.BLOCK),
    ],
)
def test_check_access_maps_store_status(status, expected, decision) -> None:
    gate, store = _gate(status)
    assert gate.check_access() is expected
    assert gate.decision is decision
    assert store.status_queries == 1
    assert store.request_count == 0


def test_request_access_granted_calls_back_once() -> None:
    gate, store = _gate()
    gate.check_access()
    results = []
    gate.request_access(results.append)
    assert store.request_count == 1
    assert results == []
    assert gate.state is AuthorizationState.NOT_DETERMINED

    store.respond(True)
    assert results == [True]
    assert gate.state is AuthorizationState.GRANTED
    assert gate.is_granted


def test_request_access_denied() -> None:
    gate, store = _gate()
    gate.check_access()
    results = []
    gate.request_access(results.append)
    store.respond(False)
    assert results == [False]
    assert gate.state is AuthorizationState.DENIED


def test_request_error_is_treated_as_denial() -> None:
    gate, store = _gate()
    gate.check_access()
    results = []
    gate.request_access(results.append)
    store.respond(False, RuntimeError("prompt failed"))
    assert results == [False]
    assert gate.state is AuthorizationState.DENIED


def test_duplicate_completion_is_ignored() -> None:
    gate, store = _gate()
    gate.check_access()
    completions = []
    store.request_access = completions.append  # capture the raw completion
    results = []
    gate.request_access(results.append)
    (completion,) = completions
    completion(True, None)
    completion(False, None)
    assert results == [True]
    assert gate.state is AuthorizationState.GRANTED


def test_undecided_prompt_stays_not_determined() -> None:
    gate, store = _gate()
    gate.check_access()
    gate.request_access(lambda granted: None)
    assert store.has_pending_request
    assert gate.state is AuthorizationState.NOT_DETERMINED


@pytest.mark.parametrize(
    "status",
    [PlatformAuthorizationStatus.AUTHORIZED, PlatformAuthorizationStatus.DENIED],
)
def test_request_access_requires_not_determined(status) -> None:
    gate, store = _gate(status)
    gate.check_access()
    with pytest.raises(RuntimeError, match="requires not_determined"):
        gate.request_access(lambda granted: None)
    assert store.request_count == 0


def test_request_access_only_once_per_check() -> None:
    gate, _ = _gate()
    gate.check_access()
    gate.request_access(lambda granted: None)
    with pytest.raises(RuntimeError, match="already in flight"):
        gate.request_access(lambda granted: None)


def test_completion_on_worker_thread() -> None:
    gate, _ = _gate(auto_response=(True, None), respond_on_thread=True)
    gate.check_access()
    threads = []
    gate.request_access(lambda granted: threads.append((granted, threading.current_thread())))
    ((granted, thread),) = threads
    assert granted is True
    assert thread is not threading.main_thread()
    assert gate.state is AuthorizationState.GRANTED


def test_recheck_after_out_of_band_reset() -> None:
    gate, store = _gate(PlatformAuthorizationStatus.AUTHORIZED)
    assert gate.check_access() is AuthorizationState.GRANTED
    store.set_status(PlatformAuthorizationStatus.DENIED)
    assert gate.check_access() is AuthorizationState.DENIED
    assert store.status_queries == 2


def test_stale_completion_after_recheck_is_ignored() -> None:
    gate, store = _gate()
    gate.check_access()
    results = []
    gate.request_access(results.append)
    store.set_status(PlatformAuthorizationStatus.AUTHORIZED)
    gate.check_access()
    store.respond(False)
    assert results == []
    assert gate.state is AuthorizationState.GRANTED
