import pytest

from automaton import Automaton, Transition
from classification import (
    AutomatonType,
    NondeterministicTransition,
    analyze,
    classify,
    is_complete_dfa,
)
from errors import InvalidAutomatonError

from conftest import build


class TestClassify:
    @pytest.mark.parametrize("symbol", ["ε", "e", "E", ""])
    def test_epsilon_forces_nfa(self, symbol):
        assert classify([Transition("A", "B", symbol)]) == AutomatonType.NFA

    def test_two_destinations_is_nfa(self):
        transitions = [Transition("A", "B", "0"), Transition("A", "C", "0")]
        assert classify(transitions) == AutomatonType.NFA

    def test_deterministic_is_dfa(self, three_state_dfa):
        assert classify(three_state_dfa.transitions) == AutomatonType.DFA

    def test_repeated_transition_is_still_dfa(self):
        transitions = [Transition("A", "B", "0"), Transition("A", "B", "0")]
        assert classify(transitions) == AutomatonType.DFA

    def test_empty_is_dfa(self):
        assert classify([]) == AutomatonType.DFA


class TestAnalyze:
    def test_reports_nondeterministic_branching(self):
        a = build(["A", "B", "C"], [("A", "B", "0"), ("A", "C", "0")], start="A")
        analysis = analyze(a)

        assert analysis.has_nondeterministic
        assert not analysis.has_epsilon
        assert analysis.nondeterministic_transitions == (
            NondeterministicTransition("A", "0", ("B", "C")),
        )

    def test_reports_epsilon_transitions(self, epsilon_nfa):
        analysis = analyze(epsilon_nfa)

        assert analysis.has_epsilon
        assert analysis.epsilon_transitions == (Transition("A", "B", "ε"),)
        assert analysis.nondeterministic_transitions == ()

    def test_clean_dfa(self, three_state_dfa):
        analysis = analyze(three_state_dfa)
        assert not analysis.has_epsilon
        assert not analysis.has_nondeterministic


class TestIsCompleteDFA:
    def test_total_dfa(self, three_state_dfa):
        assert is_complete_dfa(three_state_dfa)

    def test_missing_transition(self, three_state_dfa):
        partial = build(
            three_state_dfa.states,
            [t for t in three_state_dfa.transitions if t != Transition("C", "A", "1")],
            start="A",
            finals=["C"],
        )
        assert not is_complete_dfa(partial)

    def test_nfa_is_never_complete(self, epsilon_nfa):
        assert not is_complete_dfa(epsilon_nfa)

    def test_empty_alphabet(self):
        assert is_complete_dfa(build(["A"], [], start="A"))


class TestAutomatonType:
    def test_type_follows_transitions(self, epsilon_nfa, three_state_dfa):
        assert epsilon_nfa.type == AutomatonType.NFA
        assert three_state_dfa.type == AutomatonType.DFA
        assert three_state_dfa.is_dfa

    def test_type_is_not_a_constructor_argument(self):
        with pytest.raises(TypeError):
            Automaton(states=("A",), type=AutomatonType.NFA)

    def test_duplicates_collapse(self):
        a = build(
            ["A", "A", "B"],
            [("A", "B", "0"), ("A", "B", "0")],
            start="A",
            finals=["B", "B"],
        )
        assert a.states == ("A", "B")
        assert a.transitions == (Transition("A", "B", "0"),)
        assert a.final_states == ("B",)

    @pytest.mark.parametrize(
        "transitions,start,finals",
        [
            ([], "Z", []),
            ([], "A", ["Z"]),
            ([("A", "Z", "0")], "A", []),
        ],
    )
    def test_unknown_states_are_rejected(self, transitions, start, finals):
        with pytest.raises(InvalidAutomatonError):
            build(["A"], transitions, start=start, finals=finals)

    def test_invalid_automaton_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            build(["A"], [], start="B")

    def test_stats(self, epsilon_nfa):
        stats = epsilon_nfa.get_stats()
        assert stats == {
            "states": 3,
            "alphabet_size": 1,
            "final_states": 1,
            "total_transitions": 2,
            "epsilon_transitions": 1,
            "type": "NFA",
        }
