"""DFA minimization by partition refinement.

The initial split into final and non-final states is Hopcroft's; the
refinement itself rescans every block until no symbol separates any of
them, which keeps each split easy to explain step by step.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from alphabet import alphabet_of, state_name
from automaton import Automaton, Transition
from classification import AutomatonType
from completion import complete


logger = logging.getLogger(__name__)

Partition = Tuple[Tuple[str, ...], ...]

# Group key for states with no transition on the symbol being checked.
NO_TRANSITION = -1


@dataclass(frozen=True)
class SplitDetail:
    symbol: str
    split_occurred: bool
    split_result: Optional[Partition] = None


@dataclass(frozen=True)
class PartitioningStep:
    step: int
    description: str
    partitions_before: Partition
    partitions_after: Partition
    splitting_partition: Optional[Tuple[str, ...]] = None
    symbols_checked: Tuple[str, ...] = ()
    split_details: Tuple[SplitDetail, ...] = ()


@dataclass(frozen=True)
class CombinedTransition:
    to: str
    original_transitions: Tuple[Transition, ...]


@dataclass(frozen=True)
class MinimizationResult:
    """Everything one minimization run produced.

    ``original_dfa`` is the automaton exactly as it was passed in;
    ``complete_dfa`` is the completed, reachable-only DFA the partitions
    were computed over. ``applied`` is False when the input was not a DFA,
    in which case every mapping is empty and both automata are the input.
    """

    original_dfa: Automaton
    complete_dfa: Automaton
    minimized_dfa: Automaton
    state_mapping: Mapping[str, str] = field(default_factory=dict)
    partitions: Partition = ()
    equivalent_states: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    combined_transitions: Mapping[str, Mapping[str, CombinedTransition]] = field(
        default_factory=dict
    )
    partitioning_steps: Tuple[PartitioningStep, ...] = ()
    algorithm: str = "Hopcroft"
    applied: bool = True

    def __post_init__(self):
        object.__setattr__(self, "state_mapping", MappingProxyType(dict(self.state_mapping)))
        object.__setattr__(
            self, "equivalent_states", MappingProxyType(dict(self.equivalent_states))
        )
        object.__setattr__(
            self,
            "combined_transitions",
            MappingProxyType(
                {
                    s: MappingProxyType(dict(by_symbol))
                    for s, by_symbol in self.combined_transitions.items()
                }
            ),
        )


def _freeze(partitions: Sequence[Sequence[str]]) -> Partition:
    return tuple(tuple(p) for p in partitions)


def _braces(block: Sequence[str]) -> str:
    return "{" + ", ".join(block) + "}"


def reachable_states(automaton: Automaton) -> List[str]:
    """States reachable from the start state, in breadth-first order."""
    if automaton.start_state is None:
        return []

    successors: Dict[str, List[str]] = {}
    for t in automaton.transitions:
        successors.setdefault(t.from_state, []).append(t.to_state)

    reachable = [automaton.start_state]
    seen = {automaton.start_state}
    queue = deque(reachable)

    while queue:
        current = queue.popleft()
        for nxt in successors.get(current, ()):
            if nxt not in seen:
                seen.add(nxt)
                reachable.append(nxt)
                queue.append(nxt)

    return reachable


def prune_unreachable(automaton: Automaton) -> Automaton:
    reachable = set(reachable_states(automaton))
    return Automaton(
        states=tuple(s for s in automaton.states if s in reachable),
        transitions=tuple(
            t
            for t in automaton.transitions
            if t.from_state in reachable and t.to_state in reachable
        ),
        start_state=automaton.start_state,
        final_states=tuple(s for s in automaton.final_states if s in reachable),
        name=automaton.name,
        state_composition=automaton.state_composition,
    )


def split_block(
    block: Sequence[str],
    block_of: Mapping[str, int],
    delta: Mapping[Tuple[str, str], str],
    symbol: str,
) -> List[List[str]]:
    """Group ``block`` by the block each member's ``symbol`` move lands in."""
    groups: Dict[int, List[str]] = {}
    for state in block:
        target = delta.get((state, symbol))
        key = block_of[target] if target is not None else NO_TRANSITION
        groups.setdefault(key, []).append(state)
    return list(groups.values())


def refine_partitions(
    partitions: Sequence[Sequence[str]],
    alphabet: Sequence[str],
    delta: Mapping[Tuple[str, str], str],
    on_step: Callable[[PartitioningStep], None] = None,
    first_step: int = 1,
) -> Partition:
    """Split blocks until no symbol distinguishes two members of a block.

    After a split the scan restarts from the first block. ``on_step`` is
    called once for every multi-state block examined.
    """
    partitions = [list(p) for p in partitions]
    alphabet = tuple(alphabet)
    step = first_step
    changed = True

    while changed:
        changed = False
        i = 0

        while i < len(partitions) and not changed:
            block = partitions[i]
            if len(block) <= 1:
                i += 1
                continue

            before = _freeze(partitions)
            block_of = {s: idx for idx, p in enumerate(partitions) for s in p}
            details: List[SplitDetail] = []

            for symbol in alphabet:
                groups = split_block(block, block_of, delta, symbol)
                if len(groups) > 1:
                    details.append(SplitDetail(symbol, True, _freeze(groups)))
                    partitions[i : i + 1] = groups
                    changed = True
                    logger.debug("split %s on %r into %s", block, symbol, groups)
                    break
                details.append(SplitDetail(symbol, False))

            if changed:
                description = f"Analyzing partition {_braces(block)} with all symbols"
            else:
                description = (
                    f"Checked partition {_braces(block)} with all symbols - no split needed"
                )

            if on_step is not None:
                on_step(
                    PartitioningStep(
                        step=step,
                        description=description,
                        partitions_before=before,
                        partitions_after=_freeze(partitions),
                        splitting_partition=tuple(block),
                        symbols_checked=alphabet,
                        split_details=tuple(details),
                    )
                )
            step += 1
            i += 1

    return _freeze(partitions)


def minimize(dfa: Automaton, name_suffix="__MIN") -> MinimizationResult:
    if dfa.type != AutomatonType.DFA:
        logger.debug("%s is not a DFA, skipping minimization", dfa.name)
        return MinimizationResult(
            original_dfa=dfa, complete_dfa=dfa, minimized_dfa=dfa, applied=False
        )

    reachable_dfa = prune_unreachable(complete(dfa))
    alphabet = alphabet_of(reachable_dfa.transitions)

    delta: Dict[Tuple[str, str], str] = {}
    for t in reachable_dfa.transitions:
        delta.setdefault((t.from_state, t.symbol), t.to_state)

    finals = set(reachable_dfa.final_states)
    initial = [
        block
        for block in (
            [s for s in reachable_dfa.states if s not in finals],
            list(reachable_dfa.final_states),
        )
        if block
    ]

    steps = [
        PartitioningStep(
            step=0,
            description="Initial partition: separate final and non-final states",
            partitions_before=(),
            partitions_after=_freeze(initial),
        )
    ]
    partitions = refine_partitions(initial, alphabet, delta, on_step=steps.append)
    logger.debug("final partitions for %s: %s", dfa.name, partitions)

    state_mapping: Dict[str, str] = {}
    equivalent_states: Dict[str, Tuple[str, ...]] = {}
    for index, block in enumerate(partitions):
        new_name = state_name(index)
        equivalent_states[new_name] = block
        for s in block:
            state_mapping[s] = new_name

    min_trans: Dict[Transition, None] = {}
    collapsed: Dict[str, Dict[str, Tuple[str, List[Transition]]]] = {
        s: {} for s in equivalent_states
    }
    for t in reachable_dfa.transitions:
        frm, to = state_mapping[t.from_state], state_mapping[t.to_state]
        entry = collapsed[frm].setdefault(t.symbol, (to, []))
        entry[1].append(t)
        min_trans.setdefault(Transition(frm, to, t.symbol), None)

    combined_transitions = {
        s: {
            sym: CombinedTransition(to, tuple(originals))
            for sym, (to, originals) in by_symbol.items()
        }
        for s, by_symbol in collapsed.items()
    }

    start = reachable_dfa.start_state
    minimized = Automaton(
        states=tuple(equivalent_states),
        transitions=tuple(min_trans),
        start_state=state_mapping[start] if start is not None else None,
        final_states=tuple(state_mapping[s] for s in reachable_dfa.final_states),
        name=f"{dfa.name}{name_suffix}",
        state_composition=equivalent_states,
    )

    return MinimizationResult(
        original_dfa=dfa,
        complete_dfa=reachable_dfa,
        minimized_dfa=minimized,
        state_mapping=state_mapping,
        partitions=partitions,
        equivalent_states=equivalent_states,
        combined_transitions=combined_transitions,
        partitioning_steps=tuple(steps),
    )
