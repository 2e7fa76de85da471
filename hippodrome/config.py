import os

from pydantic import BaseModel, Field

# ==========================================
# SABİT YARIŞ PROGRAMI
# ==========================================
RACE_DISTANCES = (1200, 1400, 1600, 1800, 2000, 2200)
ROUND_COUNT = len(RACE_DISTANCES)
ROSTER_SIZE = 20
HORSES_PER_ROUND = 10

# ==========================================
# SUNUCU AYARLARI
# ==========================================
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))


class RaceSettings(BaseModel):
    tick_interval_ms: int = Field(100, gt=0)
    animation_duration_ms: int = Field(5000, gt=0)
    finish_hold_ms: int = Field(1000, ge=0)
    round_delay_ms: int = Field(1500, ge=0)

    @classmethod
    def from_env(cls):
        overrides = {
            "tick_interval_ms": os.getenv("RACE_TICK_INTERVAL_MS"),
            "animation_duration_ms": os.getenv("RACE_ANIMATION_DURATION_MS"),
            "finish_hold_ms": os.getenv("RACE_FINISH_HOLD_MS"),
            "round_delay_ms": os.getenv("RACE_ROUND_DELAY_MS"),
        }
        return cls(**{key: value for key, value in overrides.items() if value is not None})

    @property
    def total_ticks(self) -> int:
        return max(1, round(self.animation_duration_ms / self.tick_interval_ms))

    @property
    def tick_interval(self) -> float:
        return self.tick_interval_ms / 1000

    @property
    def finish_hold(self) -> float:
        return self.finish_hold_ms / 1000

    @property
    def round_delay(self) -> float:
        return self.round_delay_ms / 1000
