import random

from hippodrome.config import ROSTER_SIZE
from hippodrome.game_logic.models import Horse

HORSE_NAMES = [
    "Ada Lovelace", "Grace Hopper", "Margaret Hamilton", "Joan Clarke",
    "Lightning Bolt", "Thunder Strike", "Storm Chaser", "Wind Runner",
    "Fire Blaze", "Star Dancer", "Moon Walker", "Sun Rider",
    "Ocean Wave", "Mountain Peak", "Desert Wind", "Forest Spirit",
    "Golden Arrow", "Silver Bullet", "Bronze Medal", "Diamond Dust",
]

HORSE_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FECA57",
    "#FF9FF3", "#54A0FF", "#5F27CD", "#00D2D3", "#FF9F43",
    "#10AC84", "#EE5A24", "#0abde3", "#c44569", "#ff6348",
    "#1dd1a1", "#ff3838", "#2f3542", "#40407a", "#706fd3",
]


def horse_names():
    return list(HORSE_NAMES)


def generate_roster(count=ROSTER_SIZE, rng=None):
    """Havuzlardan sırayla isim ve renk alarak `count` at üretir.

    Havuz biterse baştan alınır; ikinci turdaki atların ismine " 2" eklenir
    ki isimler tekil kalsın. Renkler tekrar eder.
    """
    if count < 0:
        raise ValueError(f"Roster size cannot be negative: {count}")
    rng = rng or random

    horses = []
    for i in range(count):
        cycle, slot = divmod(i, len(HORSE_NAMES))
        name = HORSE_NAMES[slot] if cycle == 0 else f"{HORSE_NAMES[slot]} {cycle + 1}"
        horses.append(Horse(
            id=i + 1,
            name=name,
            color=HORSE_COLORS[i % len(HORSE_COLORS)],
            condition=rng.randint(1, 100),
        ))
    return horses
