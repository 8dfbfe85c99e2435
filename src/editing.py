"""Edits an editing surface can apply to an automaton.

Each function returns a new automaton with its type re-derived. Requests
that name a state or transition the automaton does not have return the
input unchanged.
"""

import dataclasses
import logging
from typing import Iterable

from automaton import Automaton, Transition


logger = logging.getLogger(__name__)


def empty_automaton(name: str = "automaton") -> Automaton:
    return Automaton(name=name)


def add_state(automaton: Automaton, state_id: str) -> Automaton:
    if state_id in automaton.states:
        return automaton
    return dataclasses.replace(automaton, states=automaton.states + (state_id,))


def remove_state(automaton: Automaton, state_id: str) -> Automaton:
    if state_id not in automaton.states:
        return automaton

    return dataclasses.replace(
        automaton,
        states=tuple(s for s in automaton.states if s != state_id),
        transitions=tuple(
            t
            for t in automaton.transitions
            if t.from_state != state_id and t.to_state != state_id
        ),
        start_state=None if automaton.start_state == state_id else automaton.start_state,
        final_states=tuple(s for s in automaton.final_states if s != state_id),
    )


def add_transition(
    automaton: Automaton, from_state: str, to_state: str, symbol: str
) -> Automaton:
    if from_state not in automaton.states or to_state not in automaton.states:
        logger.debug("ignoring transition between unknown states %s, %s", from_state, to_state)
        return automaton

    transition = Transition(from_state, to_state, symbol)
    if transition in automaton.transitions:
        return automaton

    updated = dataclasses.replace(
        automaton, transitions=automaton.transitions + (transition,)
    )
    if updated.type != automaton.type:
        logger.debug("%s is now a %s", automaton.name, updated.type.value)
    return updated


def remove_transition(
    automaton: Automaton, from_state: str, to_state: str, symbol: str
) -> Automaton:
    transition = Transition(from_state, to_state, symbol)
    if transition not in automaton.transitions:
        return automaton

    return dataclasses.replace(
        automaton,
        transitions=tuple(t for t in automaton.transitions if t != transition),
    )


def set_start_state(automaton: Automaton, state_id: str) -> Automaton:
    if state_id not in automaton.states:
        return automaton
    return dataclasses.replace(automaton, start_state=state_id)


def set_final_states(automaton: Automaton, state_ids: Iterable[str]) -> Automaton:
    known = set(automaton.states)
    return dataclasses.replace(
        automaton, final_states=tuple(s for s in state_ids if s in known)
    )
