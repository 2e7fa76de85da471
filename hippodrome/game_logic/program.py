import random

from hippodrome.config import HORSES_PER_ROUND, RACE_DISTANCES
from hippodrome.game_logic.models import LaneHorse, RaceRound


def build_program(horses, rng=None, distances=RACE_DISTANCES, field_size=HORSES_PER_ROUND):
    rng = rng or random
    program = []
    for index, distance in enumerate(distances):
        # random.shuffle Fisher-Yates karıştırması yapar
        shuffled = list(horses)
        rng.shuffle(shuffled)
        runners = [
            LaneHorse(**horse.model_dump(exclude={"lane"}), lane=lane)
            for lane, horse in enumerate(shuffled[:field_size], start=1)
        ]
        program.append(RaceRound(round=index + 1, distance=distance, horses=runners))
    return program
