from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from alphabet import alphabet_of, is_epsilon
from classification import AutomatonType, classify
from errors import InvalidAutomatonError


@dataclass(frozen=True)
class Transition:
    from_state: str
    to_state: str
    symbol: str

    def __str__(self) -> str:
        return f"{self.from_state} --{self.symbol}--> {self.to_state}"


@dataclass(frozen=True)
class Automaton:
    """An immutable finite automaton.

    ``type`` is not a constructor argument: it is always re-derived from
    ``transitions``, including in copies made with ``dataclasses.replace``.
    Duplicate states, transitions and final states collapse to one entry,
    first occurrence wins.
    """

    states: Tuple[str, ...] = ()
    transitions: Tuple[Transition, ...] = ()
    start_state: Optional[str] = None
    final_states: Tuple[str, ...] = ()
    name: str = "automaton"
    state_composition: Mapping[str, Tuple[str, ...]] = field(
        default_factory=dict, compare=False
    )
    type: AutomatonType = field(init=False)

    def __post_init__(self):
        states = tuple(dict.fromkeys(self.states))
        transitions = tuple(
            dict.fromkeys(
                t if isinstance(t, Transition) else Transition(*t)
                for t in self.transitions
            )
        )
        final_states = tuple(dict.fromkeys(self.final_states))

        known = set(states)
        if self.start_state is not None and self.start_state not in known:
            raise InvalidAutomatonError(
                f"start state {self.start_state!r} is not a state of {self.name!r}"
            )
        unknown_finals = [s for s in final_states if s not in known]
        if unknown_finals:
            raise InvalidAutomatonError(
                f"final states {unknown_finals} are not states of {self.name!r}"
            )
        for t in transitions:
            if t.from_state not in known or t.to_state not in known:
                raise InvalidAutomatonError(
                    f"transition {t} references an unknown state in {self.name!r}"
                )

        object.__setattr__(self, "states", states)
        object.__setattr__(self, "transitions", transitions)
        object.__setattr__(self, "final_states", final_states)
        object.__setattr__(
            self,
            "state_composition",
            MappingProxyType(
                {
                    s: tuple(comp)
                    for s, comp in self.state_composition.items()
                    if s in known
                }
            ),
        )
        object.__setattr__(self, "type", classify(transitions))

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return tuple(alphabet_of(self.transitions))

    @property
    def is_dfa(self) -> bool:
        return self.type == AutomatonType.DFA

    def get_readable_state_name(self, state: str) -> str:
        if state in self.state_composition:
            composition = sorted(self.state_composition[state])

            if len(composition) > 1:
                return f"{state}<{','.join(composition)}>"
            elif len(composition) == 1:
                return f"{state}<{composition[0]}>"

        return state

    def get_stats(self) -> Dict:
        epsilon_transitions = sum(1 for t in self.transitions if is_epsilon(t.symbol))

        return {
            "states": len(self.states),
            "alphabet_size": len(self.alphabet),
            "final_states": len(self.final_states),
            "total_transitions": len(self.transitions),
            "epsilon_transitions": epsilon_transitions,
            "type": self.type.value,
        }
