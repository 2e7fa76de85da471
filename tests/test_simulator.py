from __future__ import annotations

import random

from hippodrome.game_logic.roster import generate_roster
from hippodrome.game_logic.simulator import DEFAULT_CONDITION, race_time, simulate_round


class FixedLuck:
    def uniform(self, low, high):
        return 1.0


def test_simulate_round_assigns_positions_by_time() -> None:
    horses = generate_roster(10, rng=random.Random(11))

    outcome = simulate_round(horses, 1600, rng=random.Random(5))

    assert sorted(e.finish_position for e in outcome.results) == list(range(1, 11))
    times = [e.race_time for e in outcome.results]
    assert times == sorted(times)
    assert [e.finish_position for e in outcome.results] == list(range(1, 11))
    assert outcome.winner == outcome.results[0]
    assert outcome.winner.finish_position == 1
    assert {e.id for e in outcome.results} == {h.id for h in horses}


def test_race_time_follows_condition_formula() -> None:
    assert race_time(100, 1500, rng=FixedLuck()) == 70.0
    assert race_time(0, 1500, rng=FixedLuck()) == 100.0


def test_race_time_is_rounded_to_two_decimals() -> None:
    value = race_time(37, 1400, rng=random.Random(3))

    assert value == round(value, 2)


def test_ties_keep_input_order() -> None:
    horses = [
        {"id": 3, "name": "C", "condition": 50},
        {"id": 1, "name": "A", "condition": 50},
        {"id": 2, "name": "B", "condition": 50},
    ]

    outcome = simulate_round(horses, 1200, rng=FixedLuck())

    assert [e.id for e in outcome.results] == [3, 1, 2]
    assert [e.finish_position for e in outcome.results] == [1, 2, 3]


def test_empty_round_has_no_winner() -> None:
    outcome = simulate_round([], 1200)

    assert outcome.results == []
    assert outcome.winner is None


def test_malformed_conditions_fall_back_to_neutral_value() -> None:
    horses = [
        {"id": 1, "name": "Missing"},
        {"id": 2, "name": "Text", "condition": "fast"},
        {"id": 3, "name": "Nan", "condition": float("nan")},
        {"id": 4, "name": "Neutral", "condition": DEFAULT_CONDITION},
    ]

    outcome = simulate_round(horses, 1500, rng=FixedLuck())

    assert len(outcome.results) == 4
    assert len({e.race_time for e in outcome.results}) == 1
    assert [e.condition for e in outcome.results] == [None, None, None, 50]


def test_out_of_range_conditions_are_clamped() -> None:
    horses = [{"id": 1, "condition": 500}, {"id": 2, "condition": "-20"}]

    outcome = simulate_round(horses, 1500, rng=FixedLuck())

    assert {e.id: e.condition for e in outcome.results} == {1: 100, 2: 1}
    assert outcome.winner.id == 1


def test_malformed_identity_fields_do_not_break_the_round() -> None:
    horses = [
        {"id": 1, "name": 123, "color": None, "condition": 50},
        {"id": "x", "name": "Letter", "condition": 50},
        {"id": 1.5, "name": "Half", "condition": 50, "lane": "two"},
        {"id": "7", "name": "Text id", "condition": 50, "lane": 3.0},
        {"id": True, "name": None, "condition": 50, "lane": "--5"},
    ]

    outcome = simulate_round(horses, 1200, rng=FixedLuck())

    assert [e.id for e in outcome.results] == [1, None, None, 7, None]
    assert [e.name for e in outcome.results] == ["123", "Letter", "Half", "Text id", ""]
    assert outcome.results[0].color == ""
    assert [e.lane for e in outcome.results] == [None, None, None, 3, None]
    assert outcome.winner.finish_position == 1
