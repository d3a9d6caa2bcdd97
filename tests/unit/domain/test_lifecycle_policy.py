"""Tests for the assignment lifecycle graph."""

import pytest

from printroute.domain.errors import InvalidTransition
from printroute.domain.policies.lifecycle import (
    INITIAL_STATUS,
    allowed_transitions,
    can_transition,
    ensure_transition,
    is_terminal,
)
from printroute.domain.value_objects.enums import AssignmentStatus as S


def test_initial_status():
    assert INITIAL_STATUS == S.PENDING


@pytest.mark.parametrize("current,target", [
    (S.PENDING, S.PRINTING),
    (S.PRINTING, S.READY),
    (S.READY, S.DELIVERED),
    (S.PENDING, S.CANCELLED),
    (S.PRINTING, S.CANCELLED),
    (S.READY, S.CANCELLED),
])
def test_legal_edges(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize("current,target", [
    (S.PENDING, S.READY),
    (S.PENDING, S.DELIVERED),
    (S.PRINTING, S.PENDING),
    (S.READY, S.PRINTING),
    (S.PENDING, S.PENDING),
])
def test_illegal_edges(current, target):
    assert not can_transition(current, target)
    with pytest.raises(InvalidTransition):
        ensure_transition(current, target)


@pytest.mark.parametrize("terminal", [S.DELIVERED, S.CANCELLED])
def test_terminal_states_have_no_exits(terminal):
    assert is_terminal(terminal)
    assert allowed_transitions(terminal) == frozenset()
    for target in S:
        with pytest.raises(InvalidTransition, match="no further transitions"):
            ensure_transition(terminal, target)


def test_open_states_are_not_terminal():
    assert not any(is_terminal(s) for s in (S.PENDING, S.PRINTING, S.READY))
