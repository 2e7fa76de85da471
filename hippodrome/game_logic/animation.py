import random

from hippodrome.game_logic.models import HorsePosition


class Runner:
    def __init__(self, horse, speed, final_position):
        self.horse = horse
        self.speed = speed                     # Tick başına metre
        self.final_position = final_position   # Önceden hesaplanan bitiş sırası
        self.position = 0.0                    # Atın anlık konumu (metre)

    def move(self, distance, progress, rng):
        new_position = self.position + self.speed
        self.speed *= rng.uniform(0.95, 1.05)

        # Erken bitirmeyi engelle
        if progress < 0.9:
            new_position = min(new_position, distance * (progress + 0.1))

        # Son düzlük: gerçek sıralamaya göre atak
        if progress > 0.8:
            new_position += distance * (1 / self.final_position) * 0.1

        self.position = max(self.position, min(distance, new_position))
        return self.position

    def snapshot(self):
        return HorsePosition(
            id=self.horse.id,
            name=self.horse.name,
            color=self.horse.color,
            lane=self.horse.lane,
            position=self.position,
        )


class RoundAnimation:
    def __init__(self, race_round, ranking, total_ticks, rng=None):
        self.distance = race_round.distance
        self.total_ticks = total_ticks
        self.rng = rng or random
        self.tick = 0

        ranks = {entry.id: entry.finish_position for entry in ranking}
        base_speed = self.distance / total_ticks
        self.runners = [
            Runner(horse, base_speed * self.rng.uniform(0.8, 1.2), ranks.get(horse.id, len(race_round.horses)))
            for horse in race_round.horses
        ]
        self.is_finished = not self.runners

    @property
    def progress(self):
        return self.tick / self.total_ticks

    def positions(self):
        return [runner.snapshot() for runner in self.runners]

    def step(self):
        """Animasyonu 1 tick ilerletir ve tüm atların konumunu döndürür."""
        if self.is_finished:
            return self.positions()

        self.tick += 1
        progress = self.progress
        for runner in self.runners:
            runner.move(self.distance, progress, self.rng)

        all_finished = all(runner.position >= self.distance for runner in self.runners)
        if all_finished or self.tick >= self.total_ticks:
            if not all_finished:
                for runner in self.runners:
                    runner.position = float(self.distance)
            self.is_finished = True

        return self.positions()
