"""
Nankan Settlement - Data Type Definitions

Dataclasses for prediction documents, result documents and the
settled archive records built from them.

Documents are parsed leniently: missing keys become empty values so that
incomplete data reaches the evaluator instead of failing at load time.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .assignment import Assignment
from .config import BET_POINTS, BET_TYPE


def _to_int(value: Any) -> Optional[int]:
    """Convert a JSON scalar to int, or None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Horse:
    """A horse entry within a race prediction."""
    number: Optional[int]
    name: str = ""
    assignment: str = ""  # Raw role tag, e.g. "本命"
    total_score: float = 0.0
    jockey: str = ""

    @property
    def role(self) -> Optional[Assignment]:
        return Assignment.parse(self.assignment)

    @classmethod
    def from_dict(cls, d: dict) -> "Horse":
        return cls(
            number=_to_int(d.get("number")),
            name=d.get("name") or "",
            assignment=d.get("assignment") or "",
            total_score=d.get("totalScore") or 0.0,
            # The shared repository names the jockey field "kisyu"
            jockey=d.get("jockey") or d.get("kisyu") or "",
        )


@dataclass
class RaceInfo:
    """Race metadata attached to a prediction."""
    race_number: Any = ""  # Race label, e.g. "3R"
    race_name: str = ""
    distance: Any = None
    surface: str = ""
    start_time: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> "RaceInfo":
        return cls(
            race_number=d.get("raceNumber", ""),
            race_name=d.get("raceName") or "",
            distance=d.get("distance"),
            surface=d.get("surface") or "",
            start_time=d.get("startTime") or "",
        )


@dataclass
class RacePrediction:
    """Prediction for a single race."""
    race_info: RaceInfo = field(default_factory=RaceInfo)
    horses: List[Horse] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> "RacePrediction":
        return cls(
            race_info=RaceInfo.from_dict(d.get("raceInfo") or {}),
            horses=[Horse.from_dict(h) for h in d.get("horses") or []],
        )


@dataclass
class PredictionSet:
    """All race predictions for one race day."""
    track: str = ""
    total_races: Optional[int] = None  # Declared race count
    races: List[RacePrediction] = field(default_factory=list)
    race_date: str = ""

    @property
    def declared_races(self) -> int:
        """Declared race count, or the number of predictions if undeclared."""
        if self.total_races is None:
            return len(self.races)
        return self.total_races

    @classmethod
    def from_dict(cls, d: dict) -> "PredictionSet":
        return cls(
            track=d.get("track") or "",
            total_races=_to_int(d.get("totalRaces")),
            races=[RacePrediction.from_dict(r) for r in d.get("races") or []],
            race_date=d.get("raceDate") or d.get("date") or "",
        )


@dataclass
class Finisher:
    """A horse's finishing position."""
    number: Optional[int]
    rank: Optional[int]

    @classmethod
    def from_dict(cls, d: dict) -> "Finisher":
        return cls(number=_to_int(d.get("number")), rank=_to_int(d.get("rank")))


@dataclass
class PayoutEntry:
    """Payout for one combination, e.g. "3-5" -> 2340 yen."""
    combination: str
    payout: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> "PayoutEntry":
        return cls(
            combination=str(d.get("combination", "")),
            payout=_to_int(d.get("payout")) or 0,
        )


@dataclass
class RaceResult:
    """Official result of a single race."""
    race_number: Optional[int]
    race_name: str = ""
    results: List[Finisher] = field(default_factory=list)
    umatan: List[PayoutEntry] = field(default_factory=list)

    def finisher(self, rank: int) -> Optional[Finisher]:
        """First finisher with the given rank, if any."""
        for f in self.results:
            if f.rank == rank:
                return f
        return None

    def umatan_payout(self, combination: str) -> Optional[PayoutEntry]:
        """First umatan payout entry matching the combination exactly."""
        for p in self.umatan:
            if p.combination == combination:
                return p
        return None

    @classmethod
    def from_dict(cls, d: dict) -> "RaceResult":
        payouts = d.get("payouts") or {}
        return cls(
            race_number=_to_int(d.get("raceNumber")),
            race_name=d.get("raceName") or "",
            results=[Finisher.from_dict(r) for r in d.get("results") or []],
            umatan=[PayoutEntry.from_dict(p) for p in payouts.get("umatan") or []],
        )


@dataclass
class ResultSet:
    """All race results for one race day."""
    venue: str = ""
    races: List[RaceResult] = field(default_factory=list)

    def find_race(self, race_number: Optional[int]) -> Optional[RaceResult]:
        if race_number is None:
            return None
        for race in self.races:
            if race.race_number == race_number:
                return race
        return None

    @classmethod
    def from_dict(cls, d: dict) -> "ResultSet":
        return cls(
            venue=d.get("venue") or "",
            races=[RaceResult.from_dict(r) for r in d.get("races") or []],
        )


@dataclass
class HitResult:
    """Outcome of the umatan strategy for one race."""
    hit: bool = False
    payout: int = 0


@dataclass
class RaceOutcome:
    """Settled outcome of one race, as stored in the archive."""
    race_number: Any
    race_name: str
    hit: bool = False
    payout: int = 0
    bet_type: str = BET_TYPE
    bet_points: int = BET_POINTS

    def to_dict(self) -> dict:
        return {
            "raceNumber": self.race_number,
            "raceName": self.race_name,
            "betType": self.bet_type,
            "betPoints": self.bet_points,
            "hit": self.hit,
            "payout": self.payout,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RaceOutcome":
        return cls(
            race_number=d.get("raceNumber"),
            race_name=d.get("raceName", ""),
            hit=bool(d.get("hit", False)),
            payout=d.get("payout", 0),
            bet_type=d.get("betType", BET_TYPE),
            bet_points=d.get("betPoints", BET_POINTS),
        )


@dataclass
class DayArchiveEntry:
    """Aggregated results for one race day."""
    venue: str
    total_races: int
    hit_races: int = 0
    perfect_hit: bool = False
    total_payout: int = 0
    recovery_rate: int = 0
    races: List[RaceOutcome] = field(default_factory=list)

    @property
    def total_bet(self) -> int:
        return BET_POINTS * self.total_races

    def to_dict(self) -> Dict[str, Any]:
        return {
            "venue": self.venue,
            "totalRaces": self.total_races,
            "hitRaces": self.hit_races,
            "perfectHit": self.perfect_hit,
            "totalPayout": self.total_payout,
            "recoveryRate": self.recovery_rate,
            "races": [r.to_dict() for r in self.races],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "DayArchiveEntry":
        return cls(
            venue=d.get("venue", ""),
            total_races=d.get("totalRaces", 0),
            hit_races=d.get("hitRaces", 0),
            perfect_hit=bool(d.get("perfectHit", False)),
            total_payout=d.get("totalPayout", 0),
            recovery_rate=d.get("recoveryRate", 0),
            races=[RaceOutcome.from_dict(r) for r in d.get("races") or []],
        )
