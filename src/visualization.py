from typing import Dict, Tuple

import networkx as nx

from alphabet import EPSILON, is_epsilon
from automaton import Automaton


def _display_symbol(symbol: str) -> str:
    return EPSILON if is_epsilon(symbol) else symbol


def to_digraph(automaton: Automaton, use_readable_names=True) -> nx.DiGraph:
    """Graph of ``automaton`` for a display surface to lay out and draw.

    Transitions between the same two states share one edge whose ``label``
    joins their symbols with commas.
    """
    G = nx.DiGraph(name=automaton.name, type=automaton.type.value)

    finals = set(automaton.final_states)
    for state in automaton.states:
        G.add_node(
            state,
            label=(
                automaton.get_readable_state_name(state)
                if use_readable_names
                else state
            ),
            start=state == automaton.start_state,
            final=state in finals,
        )

    for t in automaton.transitions:
        symbol = _display_symbol(t.symbol)
        if G.has_edge(t.from_state, t.to_state):
            symbols = G.edges[t.from_state, t.to_state]["symbols"]
            if symbol not in symbols:
                symbols.append(symbol)
        else:
            G.add_edge(t.from_state, t.to_state, symbols=[symbol])

    for _, _, data in G.edges(data=True):
        data["label"] = ",".join(data["symbols"])

    return G


def edge_labels(automaton: Automaton) -> Dict[Tuple[str, str], str]:
    G = to_digraph(automaton)
    return {(u, v): label for u, v, label in G.edges(data="label")}
