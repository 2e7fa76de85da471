from __future__ import annotations

import random

from hippodrome.config import RACE_DISTANCES
from hippodrome.game_logic.program import build_program
from hippodrome.game_logic.roster import generate_roster


def test_program_has_six_rounds_with_fixed_distances() -> None:
    horses = generate_roster(20, rng=random.Random(1))

    program = build_program(horses, rng=random.Random(2))

    assert [r.round for r in program] == [1, 2, 3, 4, 5, 6]
    assert [r.distance for r in program] == [1200, 1400, 1600, 1800, 2000, 2200]
    assert tuple(r.distance for r in program) == RACE_DISTANCES


def test_each_round_fields_ten_distinct_horses_in_lanes() -> None:
    horses = generate_roster(20, rng=random.Random(1))
    roster_ids = {h.id for h in horses}

    program = build_program(horses, rng=random.Random(3))

    for race_round in program:
        assert len(race_round.horses) == 10
        assert [h.lane for h in race_round.horses] == list(range(1, 11))
        ids = [h.id for h in race_round.horses]
        assert len(set(ids)) == 10
        assert set(ids) <= roster_ids


def test_lane_horses_keep_roster_attributes() -> None:
    horses = generate_roster(20, rng=random.Random(1))
    by_id = {h.id: h for h in horses}

    program = build_program(horses, rng=random.Random(4))

    for runner in program[0].horses:
        original = by_id[runner.id]
        assert (runner.name, runner.color, runner.condition) == (original.name, original.color, original.condition)


def test_rounds_draw_different_fields() -> None:
    horses = generate_roster(20, rng=random.Random(1))

    program = build_program(horses, rng=random.Random(5))

    fields = {tuple(h.id for h in r.horses) for r in program}
    assert len(fields) > 1


def test_small_roster_fields_every_horse() -> None:
    horses = generate_roster(6, rng=random.Random(1))

    program = build_program(horses, rng=random.Random(6))

    assert all(len(r.horses) == 6 for r in program)
