import itertools

import pytest

from automaton import Automaton


def build(states, transitions, start=None, finals=(), name="automaton"):
    """Build an automaton from ``(from, to, symbol)`` triples."""
    return Automaton(
        states=tuple(states),
        transitions=tuple(transitions),
        start_state=start,
        final_states=tuple(finals),
        name=name,
    )


def all_strings(alphabet, max_length=4):
    for length in range(max_length + 1):
        for chars in itertools.product(alphabet, repeat=length):
            yield "".join(chars)


@pytest.fixture
def three_state_dfa():
    """Already-minimal DFA over {0, 1} accepting strings ending in 00."""
    return build(
        ["A", "B", "C"],
        [
            ("A", "B", "0"),
            ("A", "A", "1"),
            ("B", "C", "0"),
            ("B", "A", "1"),
            ("C", "C", "0"),
            ("C", "A", "1"),
        ],
        start="A",
        finals=["C"],
    )


@pytest.fixture
def epsilon_nfa():
    return build(
        ["A", "B", "C"],
        [("A", "B", "ε"), ("B", "C", "a")],
        start="A",
        finals=["C"],
    )


@pytest.fixture
def abb_nfa():
    """NFA for (a|b)*abb."""
    return build(
        ["0", "1", "2", "3"],
        [
            ("0", "0", "a"),
            ("0", "0", "b"),
            ("0", "1", "a"),
            ("1", "2", "b"),
            ("2", "3", "b"),
        ],
        start="0",
        finals=["3"],
    )


@pytest.fixture
def reducible_dfa():
    """A and B are equivalent, and so are C and D."""
    return build(
        ["A", "B", "C", "D"],
        [
            ("A", "B", "0"),
            ("A", "C", "1"),
            ("B", "A", "0"),
            ("B", "C", "1"),
            ("C", "D", "0"),
            ("C", "D", "1"),
            ("D", "D", "0"),
            ("D", "D", "1"),
        ],
        start="A",
        finals=["C", "D"],
    )
