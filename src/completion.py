import dataclasses
import logging
from itertools import count
from typing import Iterable

from alphabet import alphabet_of, state_name
from automaton import Automaton, Transition
from classification import is_complete_dfa, missing_transitions


logger = logging.getLogger(__name__)


def dead_state_name(states: Iterable[str]) -> str:
    """First base-26 name not already taken by ``states``."""
    taken = set(states)
    for index in count():
        name = state_name(index)
        if name not in taken:
            return name


def complete(dfa: Automaton) -> Automaton:
    if is_complete_dfa(dfa):
        logger.debug("%s is already complete", dfa.name)
        return dfa

    alphabet = alphabet_of(dfa.transitions)
    if not alphabet:
        logger.debug("%s has an empty alphabet, nothing to complete", dfa.name)
        return dfa

    missing = missing_transitions(dfa)
    if not missing:
        return dfa

    dead = dead_state_name(dfa.states)
    logger.debug("adding dead state %s for %d missing transition(s)", dead, len(missing))

    added = [Transition(frm, dead, sym) for frm, sym in missing]
    loops = [Transition(dead, dead, sym) for sym in alphabet]

    return dataclasses.replace(
        dfa,
        states=dfa.states + (dead,),
        transitions=dfa.transitions + tuple(added) + tuple(loops),
    )
