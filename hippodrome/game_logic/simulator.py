import math
import random
from collections.abc import Mapping

from hippodrome.game_logic.models import FinishEntry, RoundOutcome

BASE_SPEED = 15  # metre / saniye
CONDITION_WEIGHT = 0.3  # En iyi form süreyi %30 kısaltır
DEFAULT_CONDITION = 50


def _field(horse, name, default=None):
    if isinstance(horse, Mapping):
        return horse.get(name, default)
    return getattr(horse, name, default)


def _condition(horse):
    raw = _field(horse, "condition")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return int(min(100, max(1, round(value))))


def _whole_number(raw):
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def _text(raw):
    return "" if raw is None else str(raw)


def race_time(condition, distance, rng=None):
    rng = rng or random
    if condition is None:
        condition = DEFAULT_CONDITION
    base_time = distance / BASE_SPEED
    condition_bonus = (condition / 100) * CONDITION_WEIGHT
    luck_factor = rng.uniform(0.8, 1.2)
    return round(base_time * (1 - condition_bonus) * luck_factor, 2)


def simulate_round(horses, distance, rng=None):
    """Bir koşunun gerçek sıralamasını tek seferde hesaplar.

    Eşit sürelerde giriş sırası korunur (sorted kararlıdır).
    """
    timed = []
    for horse in horses:
        condition = _condition(horse)
        timed.append((horse, condition, race_time(condition, distance, rng)))

    timed.sort(key=lambda item: item[2])

    results = []
    for position, (horse, condition, time) in enumerate(timed, start=1):
        results.append(FinishEntry(
            id=_whole_number(_field(horse, "id")),
            name=_text(_field(horse, "name")),
            color=_text(_field(horse, "color")),
            condition=condition,
            lane=_whole_number(_field(horse, "lane")),
            race_time=time,
            finish_position=position,
        ))

    return RoundOutcome(distance=distance, results=results, winner=results[0] if results else None)
