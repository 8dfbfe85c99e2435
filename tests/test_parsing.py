import json
import logging

import pytest

from classification import AutomatonType
from errors import AutomatonFormatError
from minimization import minimize
from parsing import (
    automaton_from_dict,
    automaton_to_dict,
    minimization_result_to_dict,
    parse_json_automaton,
    write_automaton,
)


STORED = {
    "name": "ends_in_00",
    "states": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
    "transitions": [
        {"from": "A", "to": "B", "symbol": "0"},
        {"from": "A", "to": "A", "symbol": "1"},
        {"from": "B", "to": "C", "symbol": "0"},
        {"from": "B", "to": "A", "symbol": "1"},
        {"from": "C", "to": "C", "symbol": "0"},
        {"from": "C", "to": "A", "symbol": "1"},
    ],
    "startState": "A",
    "finalStates": ["C"],
    "type": "DFA",
}


class TestDict:
    def test_load(self):
        a = automaton_from_dict(STORED)
        assert a.name == "ends_in_00"
        assert a.states == ("A", "B", "C")
        assert a.start_state == "A"
        assert a.final_states == ("C",)
        assert a.type == AutomatonType.DFA

    def test_dump_matches_stored_shape(self):
        assert automaton_to_dict(automaton_from_dict(STORED)) == STORED

    def test_plain_string_states_and_implicit_states(self):
        a = automaton_from_dict(
            {
                "states": ["A"],
                "transitions": [{"from": "A", "to": "B", "symbol": "ε"}],
                "startState": "A",
                "finalStates": ["B"],
            }
        )
        assert a.states == ("A", "B")
        assert a.type == AutomatonType.NFA

    def test_stale_type_is_rederived(self, caplog):
        data = dict(STORED, type="NFA")
        with caplog.at_level(logging.WARNING, logger="parsing"):
            a = automaton_from_dict(data)
        assert a.type == AutomatonType.DFA
        assert "stored as NFA" in caplog.text

    @pytest.mark.parametrize(
        "data",
        [
            {
                "states": [0, 1],
                "transitions": [{"from": 0, "to": 1, "symbol": "a"}],
                "startState": 0,
                "finalStates": [1],
            },
            {
                "states": [{"id": 0}, {"id": 1}],
                "transitions": [{"from": 0, "to": 1, "symbol": "a"}],
                "startState": 0,
                "finalStates": [1],
            },
        ],
    )
    def test_numeric_ids(self, data):
        a = automaton_from_dict(data)
        assert a.states == ("0", "1")
        assert a.start_state == "0"
        assert a.final_states == ("1",)
        assert a.type == AutomatonType.DFA

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"states": ["A"], "transitions": [{"from": "A", "to": "A"}]},
            {"states": ["A"], "transitions": [{"from": "A", "to": "A", "symbol": None}]},
            {"states": [{"name": "A"}]},
            {"states": ["A"], "transitions": [{"from": "A"}]},
            {"states": ["A"], "startState": "B"},
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(AutomatonFormatError):
            automaton_from_dict(data)


class TestFiles:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "out" / "dfa.json"
        a = automaton_from_dict(STORED)
        write_automaton(a, str(path))
        assert parse_json_automaton(str(path)) == a

    def test_name_defaults_to_file_name(self, tmp_path):
        path = tmp_path / "mine.json"
        path.write_text(json.dumps({"states": ["A"], "startState": "A"}), encoding="utf-8")
        assert parse_json_automaton(str(path)).name == "mine"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(AutomatonFormatError) as excinfo:
            parse_json_automaton(str(path))
        assert str(path) in str(excinfo.value)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"states": ["\xff"]}')
        with pytest.raises(AutomatonFormatError) as excinfo:
            parse_json_automaton(str(path))
        assert str(path) in str(excinfo.value)


def test_minimization_result_is_json_ready(reducible_dfa):
    data = minimization_result_to_dict(minimize(reducible_dfa))

    assert data["equivalentStates"] == {"A": ["A", "B"], "B": ["C", "D"]}
    assert data["combinedTransitions"]["A"]["0"]["originalTransitions"] == [
        {"from": "A", "to": "B", "symbol": "0"},
        {"from": "B", "to": "A", "symbol": "0"},
    ]
    assert data["partitioningSteps"][0]["splittingPartition"] is None
    json.dumps(data)
