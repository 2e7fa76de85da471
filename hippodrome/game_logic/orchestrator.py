import asyncio
import logging
import random
from datetime import datetime

from hippodrome.config import ROSTER_SIZE, RaceSettings
from hippodrome.game_logic.animation import RoundAnimation
from hippodrome.game_logic.clock import AsyncioClock
from hippodrome.game_logic.models import (
    HorseStanding,
    RaceStatus,
    RoundResult,
    SessionSnapshot,
)
from hippodrome.game_logic.program import build_program
from hippodrome.game_logic.roster import generate_roster
from hippodrome.game_logic.simulator import simulate_round

logger = logging.getLogger(__name__)


class RaceOrchestrator:
    """Yarış programının tek sahibi.

    Durumu sadece bu sınıf değiştirir; sunum katmanı `snapshot()` okur,
    `add_listener` ile olayları dinler ve komut gönderir.
    """

    def __init__(self, settings=None, clock=None, rng=None,
                 roster_provider=generate_roster, simulate=simulate_round):
        self.settings = settings or RaceSettings.from_env()
        self.clock = clock or AsyncioClock()
        self.rng = rng or random.Random()
        self.roster_provider = roster_provider
        self.simulate = simulate

        self.horses = []
        self.program = []
        self.results = []
        self.current_round = 0
        self.is_racing = False
        self.race_in_progress = False
        self.positions = []

        self.loop_task = None
        self.listeners = []

    # ==========================================
    # DİNLEYİCİLER
    # ==========================================
    def add_listener(self, listener):
        self.listeners.append(listener)

    def remove_listener(self, listener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def emit(self, event: str, payload: dict):
        for listener in list(self.listeners):
            try:
                listener(event, payload)
            except Exception:
                logger.exception("Listener failed while handling %s", event)

    def emit_state(self):
        self.emit("state_update", {
            "status": self.status.value,
            "current_round": self.current_round,
            "is_racing": self.is_racing,
            "race_in_progress": self.race_in_progress,
            "all_rounds_completed": self.all_rounds_completed(),
        })

    def emit_positions(self):
        self.emit("positions_update", {
            "round": self.current_round + 1,
            "positions": [p.model_dump(mode="json") for p in self.positions],
        })

    # ==========================================
    # SORGULAR
    # ==========================================
    @property
    def has_program(self):
        return bool(self.program)

    @property
    def status(self):
        if not self.program:
            return RaceStatus.IDLE
        if self.all_rounds_completed():
            return RaceStatus.COMPLETED
        if self.is_racing:
            return RaceStatus.RACING
        if not self.results and not self.race_in_progress:
            return RaceStatus.PROGRAM_READY
        return RaceStatus.PAUSED

    def current_round_data(self):
        if 0 <= self.current_round < len(self.program):
            return self.program[self.current_round]
        return None

    def all_rounds_completed(self):
        return len(self.program) > 0 and len(self.results) >= len(self.program)

    def standings(self):
        table = {
            horse.id: HorseStanding(id=horse.id, name=horse.name, color=horse.color)
            for horse in self.horses
        }
        for result in self.results:
            for entry in result.results:
                standing = table.get(entry.id)
                if standing is None:
                    continue
                standing.races += 1
                if entry.finish_position == 1:
                    standing.wins += 1
                standing.win_rate = round(standing.wins / standing.races, 2)
                standing.form.pop(0)
                standing.form.append(str(entry.finish_position))

        return sorted(table.values(), key=lambda s: (-s.wins, -s.win_rate, s.id))

    def snapshot(self):
        return SessionSnapshot(
            status=self.status,
            horses=self.horses,
            program=self.program,
            results=self.results,
            current_round=self.current_round,
            current_round_data=self.current_round_data(),
            is_racing=self.is_racing,
            race_in_progress=self.race_in_progress,
            has_program=self.has_program,
            all_rounds_completed=self.all_rounds_completed(),
            positions=self.positions,
        )

    # ==========================================
    # KOMUTLAR
    # ==========================================
    async def generate_program(self):
        await self.cancel_round_loop()

        if not self.horses:
            self.horses = self.roster_provider(ROSTER_SIZE, rng=self.rng)
        program = build_program(self.horses, rng=self.rng)

        self.clear()
        self.program = program
        logger.info("Generated program: %d rounds from %d horses", len(program), len(self.horses))

        self.emit("program_update", {
            "horses": [h.model_dump(mode="json") for h in self.horses],
            "program": [r.model_dump(mode="json") for r in self.program],
        })
        self.emit_state()

    async def reset(self):
        await self.cancel_round_loop()
        self.clear()
        logger.info("Race session reset")
        self.emit_state()

    async def toggle_race(self):
        if not self.program or self.all_rounds_completed():
            logger.debug("Ignoring toggle in %s state", self.status.value)
            return

        if self.is_racing:
            self.is_racing = False
            logger.info("Race paused at round %d", self.current_round + 1)
        else:
            self.is_racing = True
            if not self.race_in_progress:
                self.race_in_progress = True
                self.loop_task = asyncio.create_task(self.run_rounds())
            logger.info("Race running from round %d", self.current_round + 1)
        self.emit_state()

    async def close(self):
        await self.cancel_round_loop()

    def clear(self):
        self.program = []
        self.results = []
        self.current_round = 0
        self.is_racing = False
        self.race_in_progress = False
        self.positions = []

    async def cancel_round_loop(self):
        task, self.loop_task = self.loop_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    # ==========================================
    # YARIŞ DÖNGÜSÜ
    # ==========================================
    async def run_rounds(self):
        self.race_in_progress = True
        index = self.current_round
        cancelled = False
        try:
            while index < len(self.program):
                if not self.is_racing:
                    break
                self.current_round = index
                self.emit_state()

                result = await self.run_round(self.program[index])
                self.results.append(result)
                logger.info("Round %d finished, winner: %s", result.round,
                            result.results[0].name if result.results else "-")
                self.emit("result_added", {"result": result.model_dump(mode="json")})

                index += 1
                if index < len(self.program):
                    await self.clock.sleep(self.settings.round_delay)
        except asyncio.CancelledError:
            # Yeni program durumu kendisi yayınlar
            cancelled = True
            raise
        finally:
            self.race_in_progress = False
            self.is_racing = False
            if self.all_rounds_completed():
                self.current_round = len(self.program)
                logger.info("All %d rounds completed", len(self.program))
            elif self.program:
                self.current_round = min(index, len(self.program))
            if not cancelled:
                self.emit_state()

    async def run_round(self, race_round):
        outcome = self.simulate(race_round.horses, race_round.distance, rng=self.rng)
        animation = RoundAnimation(race_round, outcome.results, self.settings.total_ticks, rng=self.rng)

        if not animation.is_finished:
            logger.info("Round %d started: %dm, %d horses", race_round.round,
                        race_round.distance, len(race_round.horses))
            while not animation.is_finished:
                await self.clock.sleep(self.settings.tick_interval)
                # Duraklatıldıysa zamanlayıcı yaşar ama konumlar donar
                if not self.is_racing:
                    continue
                self.positions = animation.step()
                self.emit_positions()

            # Atlar bitiş çizgisinde görünsün
            await self.clock.sleep(self.settings.finish_hold)

        self.positions = []
        self.emit_positions()
        return RoundResult(
            round=race_round.round,
            distance=race_round.distance,
            results=outcome.results,
            completed_at=datetime.now().strftime("%H:%M:%S"),
        )
