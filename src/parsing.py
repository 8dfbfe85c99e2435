import json
import logging
import os
from typing import Dict, List

from automaton import Automaton, Transition
from errors import AutomatonFormatError, InvalidAutomatonError
from minimization import MinimizationResult


logger = logging.getLogger(__name__)


def _state_id(entry) -> str:
    if isinstance(entry, dict):
        if "id" not in entry:
            raise AutomatonFormatError(f"state entry without an id: {entry!r}")
        return str(entry["id"])
    return str(entry)


def automaton_from_dict(data: dict, name: str = "automaton") -> Automaton:
    if not isinstance(data, dict):
        raise AutomatonFormatError(f"expected an object, got {type(data).__name__}")

    states: List[str] = [_state_id(s) for s in data.get("states", [])]
    transitions: List[Transition] = []
    for raw in data.get("transitions", []):
        try:
            frm, to, symbol = raw["from"], raw["to"], raw["symbol"]
        except (KeyError, TypeError) as e:
            raise AutomatonFormatError(f"malformed transition {raw!r}") from e
        # epsilon must be spelled out, a missing symbol is not one
        if symbol is None:
            raise AutomatonFormatError(f"transition without a symbol: {raw!r}")
        transitions.append(Transition(_state_id(frm), _state_id(to), str(symbol)))

    # States mentioned only in transitions are still states
    for t in transitions:
        for s in (t.from_state, t.to_state):
            if s not in states:
                states.append(s)

    start = data.get("startState")
    try:
        automaton = Automaton(
            states=tuple(states),
            transitions=tuple(transitions),
            start_state=_state_id(start) if start is not None else None,
            final_states=tuple(_state_id(s) for s in data.get("finalStates", [])),
            name=data.get("name", name),
            state_composition={
                _state_id(s): tuple(_state_id(c) for c in comp)
                for s, comp in data.get("stateComposition", {}).items()
            },
        )
    except InvalidAutomatonError as e:
        raise AutomatonFormatError(str(e)) from e

    stored_type = data.get("type")
    if stored_type is not None and stored_type != automaton.type.value:
        logger.warning(
            "%s was stored as %s but its transitions make it a %s",
            automaton.name,
            stored_type,
            automaton.type.value,
        )
    return automaton


def automaton_to_dict(a: Automaton) -> dict:
    result = {
        "name": a.name,
        "states": [{"id": s} for s in a.states],
        "transitions": [
            {"from": t.from_state, "to": t.to_state, "symbol": t.symbol}
            for t in a.transitions
        ],
        "startState": a.start_state,
        "finalStates": list(a.final_states),
        "type": a.type.value,
    }
    if a.state_composition:
        result["stateComposition"] = {
            state: list(composition)
            for state, composition in a.state_composition.items()
        }
    return result


def parse_json_automaton(path: str) -> Automaton:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise AutomatonFormatError(f"invalid JSON: {e}", path) from e
    except UnicodeDecodeError as e:
        raise AutomatonFormatError(f"not UTF-8 text: {e}", path) from e

    name = os.path.splitext(os.path.basename(path))[0]
    try:
        return automaton_from_dict(data, name=name)
    except AutomatonFormatError as e:
        raise AutomatonFormatError(str(e), path) from e


def write_automaton(a: Automaton, path: str) -> None:
    dirname = os.path.dirname(path)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(automaton_to_dict(a), f, ensure_ascii=False, indent=2)


def _transition_dict(t: Transition) -> Dict[str, str]:
    return {"from": t.from_state, "to": t.to_state, "symbol": t.symbol}


def minimization_result_to_dict(result: MinimizationResult) -> dict:
    return {
        "algorithm": result.algorithm,
        "applied": result.applied,
        "originalDFA": automaton_to_dict(result.original_dfa),
        "minimizedDFA": automaton_to_dict(result.minimized_dfa),
        "stateMapping": dict(result.state_mapping),
        "partitions": [list(p) for p in result.partitions],
        "equivalentStates": {s: list(b) for s, b in result.equivalent_states.items()},
        "combinedTransitions": {
            s: {
                sym: {
                    "to": combined.to,
                    "originalTransitions": [
                        _transition_dict(t) for t in combined.original_transitions
                    ],
                }
                for sym, combined in by_symbol.items()
            }
            for s, by_symbol in result.combined_transitions.items()
        },
        "partitioningSteps": [
            {
                "step": step.step,
                "description": step.description,
                "partitionsBefore": [list(p) for p in step.partitions_before],
                "partitionsAfter": [list(p) for p in step.partitions_after],
                "splittingPartition": (
                    list(step.splitting_partition)
                    if step.splitting_partition is not None
                    else None
                ),
                "symbolsChecked": list(step.symbols_checked),
                "splitDetails": [
                    {
                        "symbol": d.symbol,
                        "splitOccurred": d.split_occurred,
                        "splitResult": (
                            [list(g) for g in d.split_result]
                            if d.split_result is not None
                            else None
                        ),
                    }
                    for d in step.split_details
                ],
            }
            for step in result.partitioning_steps
        ],
    }
