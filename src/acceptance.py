import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from alphabet import is_epsilon
from classification import AutomatonType


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptanceResult:
    accepted: bool
    path: Optional[Tuple[str, ...]] = None

    def __bool__(self) -> bool:
        return self.accepted


def epsilon_closure(transitions: Iterable, states: Iterable[str]) -> FrozenSet[str]:
    epsilon_moves: Dict[str, List[str]] = {}
    for t in transitions:
        if is_epsilon(t.symbol):
            epsilon_moves.setdefault(t.from_state, []).append(t.to_state)

    closure = set(states)
    stack = list(closure)

    while stack:
        s = stack.pop()
        for nxt in epsilon_moves.get(s, ()):
            if nxt not in closure:
                closure.add(nxt)
                stack.append(nxt)

    return frozenset(closure)


def accepts(automaton, symbols: Iterable[str]) -> AcceptanceResult:
    """Run ``symbols`` through ``automaton``.

    DFA paths list the states visited; NFA paths list each active state set
    as a sorted, comma-joined string. A missing start state rejects with no
    path.
    """
    if automaton.start_state is None:
        return AcceptanceResult(False)

    if automaton.type == AutomatonType.DFA:
        return _accepts_dfa(automaton, symbols)
    return _accepts_nfa(automaton, symbols)


def _accepts_dfa(automaton, symbols: Iterable[str]) -> AcceptanceResult:
    delta: Dict[Tuple[str, str], str] = {}
    for t in automaton.transitions:
        delta.setdefault((t.from_state, t.symbol), t.to_state)

    current = automaton.start_state
    path = [current]

    for symbol in symbols:
        nxt = delta.get((current, symbol))
        if nxt is None:
            logger.debug("no transition from %s on %r, rejecting", current, symbol)
            return AcceptanceResult(False, tuple(path))
        current = nxt
        path.append(current)

    return AcceptanceResult(current in automaton.final_states, tuple(path))


def _accepts_nfa(automaton, symbols: Iterable[str]) -> AcceptanceResult:
    moves: Dict[Tuple[str, str], Set[str]] = {}
    for t in automaton.transitions:
        moves.setdefault((t.from_state, t.symbol), set()).add(t.to_state)

    current = epsilon_closure(automaton.transitions, {automaton.start_state})
    path = [",".join(sorted(current))]

    for symbol in symbols:
        next_states: Set[str] = set()
        for state in current:
            next_states |= moves.get((state, symbol), set())

        if not next_states:
            logger.debug("no move from {%s} on %r, rejecting", path[-1], symbol)
            return AcceptanceResult(False, tuple(path))

        current = epsilon_closure(automaton.transitions, next_states)
        path.append(",".join(sorted(current)))

    finals = set(automaton.final_states)
    return AcceptanceResult(bool(current & finals), tuple(path))
