from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Horse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    color: str
    condition: int = Field(ge=1, le=100)  # Form durumu, koşu süresini etkiler
    total_races: int = 0
    wins: int = 0
    win_rate: float = 0


class LaneHorse(Horse):
    lane: int = Field(ge=1)


class RaceRound(BaseModel):
    model_config = ConfigDict(frozen=True)

    round: int = Field(ge=1)
    distance: int
    horses: List[LaneHorse]


class FinishEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str = ""
    color: str = ""
    condition: Optional[int] = None
    lane: Optional[int] = None
    race_time: float
    finish_position: int = Field(ge=1)


class RoundOutcome(BaseModel):
    distance: int
    results: List[FinishEntry]
    winner: Optional[FinishEntry] = None


class RoundResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    round: int
    distance: int
    results: List[FinishEntry]
    completed_at: str


class HorsePosition(BaseModel):
    id: int
    name: str
    color: str
    lane: int
    position: float


class HorseStanding(BaseModel):
    id: int
    name: str
    color: str
    races: int = 0
    wins: int = 0
    win_rate: float = 0
    form: List[str] = Field(default_factory=lambda: ["-", "-", "-"])


class RaceStatus(str, Enum):
    IDLE = "IDLE"
    PROGRAM_READY = "PROGRAM_READY"
    RACING = "RACING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class SessionSnapshot(BaseModel):
    status: RaceStatus
    horses: List[Horse]
    program: List[RaceRound]
    results: List[RoundResult]
    current_round: int
    current_round_data: Optional[RaceRound] = None
    is_racing: bool
    race_in_progress: bool
    has_program: bool
    all_rounds_completed: bool
    positions: List[HorsePosition]
