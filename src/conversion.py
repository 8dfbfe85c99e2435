import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, Iterable, List, Set, Tuple

from acceptance import epsilon_closure
from alphabet import alphabet_of, set_key, state_name
from automaton import Automaton, Transition
from classification import AutomatonType


logger = logging.getLogger(__name__)


def move(transitions: Iterable, states: Iterable[str], symbol: str) -> Set[str]:
    states = set(states)
    return {
        t.to_state
        for t in transitions
        if t.from_state in states and t.symbol == symbol
    }


def to_dfa(nfa: Automaton, name_suffix="__DFA") -> Automaton:
    """Subset construction, with one dead state for empty moves.

    A DFA is returned as is. DFA states are named A, B, C, ... in the order
    the construction discovers them.
    """
    if nfa.type == AutomatonType.DFA:
        return nfa

    name = f"{nfa.name}{name_suffix}"
    if nfa.start_state is None:
        logger.debug("%s has no start state, converting to an empty DFA", nfa.name)
        return Automaton(name=name)

    alphabet = alphabet_of(nfa.transitions)
    start_closure = epsilon_closure(nfa.transitions, {nfa.start_state})

    names: Dict[str, str] = {set_key(start_closure): state_name(0)}
    composition: Dict[str, FrozenSet[str]] = {state_name(0): start_closure}
    queue: Deque[FrozenSet[str]] = deque([start_closure])
    dfa_trans: List[Transition] = []
    missing: List[Tuple[str, str]] = []

    while queue:
        T = queue.popleft()
        T_name = names[set_key(T)]

        for a in alphabet:
            U = move(nfa.transitions, T, a)
            if not U:
                missing.append((T_name, a))
                continue

            U = epsilon_closure(nfa.transitions, U)
            key = set_key(U)
            if key not in names:
                new_name = state_name(len(names))
                names[key] = new_name
                composition[new_name] = U
                queue.append(U)
                logger.debug("created DFA state %s for {%s}", new_name, key)

            dfa_trans.append(Transition(T_name, names[key], a))

    states = list(composition)
    finals = set(nfa.final_states)
    dfa_finals = [s for s, subset in composition.items() if subset & finals]

    if missing:
        dead = state_name(len(states))
        logger.debug("created dead state %s for %d empty move(s)", dead, len(missing))
        states.append(dead)
        dfa_trans.extend(Transition(frm, dead, a) for frm, a in missing)
        dfa_trans.extend(Transition(dead, dead, a) for a in alphabet)

    return Automaton(
        states=tuple(states),
        transitions=tuple(dfa_trans),
        start_state=state_name(0),
        final_states=tuple(dfa_finals),
        name=name,
        state_composition={s: tuple(sorted(subset)) for s, subset in composition.items()},
    )
