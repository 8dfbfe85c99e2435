import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from alphabet import alphabet_of, is_epsilon


logger = logging.getLogger(__name__)


class AutomatonType(str, Enum):
    DFA = "DFA"
    NFA = "NFA"


@dataclass(frozen=True)
class NondeterministicTransition:
    from_state: str
    symbol: str
    destinations: Tuple[str, ...]


@dataclass(frozen=True)
class Analysis:
    has_epsilon: bool
    has_nondeterministic: bool
    epsilon_transitions: Tuple
    nondeterministic_transitions: Tuple[NondeterministicTransition, ...]


def group_destinations(transitions: Iterable) -> Dict[Tuple[str, str], List[str]]:
    """Map (from_state, symbol) to its distinct destinations, in first-seen order."""
    groups: Dict[Tuple[str, str], List[str]] = {}
    for t in transitions:
        dests = groups.setdefault((t.from_state, t.symbol), [])
        if t.to_state not in dests:
            dests.append(t.to_state)
    return groups


def classify(transitions: Iterable) -> AutomatonType:
    transitions = list(transitions)

    epsilon = [t for t in transitions if is_epsilon(t.symbol)]
    if epsilon:
        logger.debug("NFA detected: %d epsilon transition(s)", len(epsilon))
        return AutomatonType.NFA

    for (frm, sym), dests in group_destinations(transitions).items():
        if len(dests) > 1:
            logger.debug("NFA detected: %s on %r goes to %s", frm, sym, dests)
            return AutomatonType.NFA

    return AutomatonType.DFA


def analyze(automaton) -> Analysis:
    epsilon = tuple(t for t in automaton.transitions if is_epsilon(t.symbol))
    nondeterministic = tuple(
        NondeterministicTransition(frm, sym, tuple(dests))
        for (frm, sym), dests in group_destinations(automaton.transitions).items()
        if len(dests) > 1
    )
    return Analysis(
        has_epsilon=bool(epsilon),
        has_nondeterministic=bool(nondeterministic),
        epsilon_transitions=epsilon,
        nondeterministic_transitions=nondeterministic,
    )


def missing_transitions(automaton) -> List[Tuple[str, str]]:
    """(state, symbol) pairs with no outgoing transition, states first."""
    present = {(t.from_state, t.symbol) for t in automaton.transitions}
    alphabet = alphabet_of(automaton.transitions)
    return [
        (state, symbol)
        for state in automaton.states
        for symbol in alphabet
        if (state, symbol) not in present
    ]


def is_complete_dfa(automaton) -> bool:
    if automaton.type == AutomatonType.NFA:
        return False

    analysis = analyze(automaton)
    if analysis.has_epsilon or analysis.has_nondeterministic:
        return False

    return not missing_transitions(automaton)
