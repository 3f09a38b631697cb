"""
Nankan Settlement - Day Aggregator

Settle every race of a race day and build the day's archive entry.
"""

import logging
import math
import re
from typing import Dict, Optional, Tuple, Union

from .config import BET_POINTS, BET_TYPE, RACE_LABEL_SUFFIX, RACE_NAME_PLACEHOLDER
from .hit_evaluator import UmatanHitEvaluator
from .types import DayArchiveEntry, PredictionSet, RaceOutcome, ResultSet

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def split_date(date: str) -> Tuple[str, str, str]:
    """
    Split "YYYY-MM-DD" into zero-padded (year, month, day) archive keys.

    Raises:
        ValueError: If the date is not in YYYY-MM-DD form
    """
    match = _DATE_PATTERN.match(date or "")
    if not match:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {date!r}")
    return match.group(1), match.group(2), match.group(3)


def parse_race_label(label) -> Optional[int]:
    """
    Extract the race ordinal from a label such as "3R".

    Returns:
        Race number, or None if the label has no numeric prefix
    """
    if isinstance(label, bool):
        return None
    if isinstance(label, int):
        return label
    if not isinstance(label, str):
        return None

    match = _LEADING_DIGITS.match(label.replace(RACE_LABEL_SUFFIX, "", 1))
    if not match:
        return None
    return int(match.group(1))


def recovery_rate(total_payout: float, total_bet: float) -> int:
    """
    Recovery rate (回収率) as an integer percentage.

    Halves round up: 12.5% -> 13%. Returns 0 when nothing was staked.
    """
    if total_bet <= 0:
        return 0
    return math.floor(total_payout / total_bet * 100 + 0.5)


class DayAggregator:
    """
    Build a day's archive entry from its prediction and result documents.

    Every predicted race produces one outcome, in prediction order. A race
    without a matching result is settled as a miss.
    """

    def __init__(
        self,
        evaluator: Optional[UmatanHitEvaluator] = None,
        bet_points: int = BET_POINTS,
    ):
        self.evaluator = evaluator or UmatanHitEvaluator()
        self.bet_points = bet_points

    def build_day_entry(
        self,
        prediction_set: Union[PredictionSet, dict],
        result_set: Union[ResultSet, dict],
    ) -> DayArchiveEntry:
        """
        Settle all races of a day.

        Args:
            prediction_set: Prediction document (typed or raw dict)
            result_set: Result document (typed or raw dict)

        Returns:
            DayArchiveEntry with per-race outcomes and day totals
        """
        if isinstance(prediction_set, dict):
            prediction_set = PredictionSet.from_dict(prediction_set)
        if isinstance(result_set, dict):
            result_set = ResultSet.from_dict(result_set)

        outcomes = []
        for prediction in prediction_set.races:
            info = prediction.race_info
            race_num = parse_race_label(info.race_number)
            result = result_set.find_race(race_num)

            if result is None:
                logger.warning(f"No result data for race {info.race_number}")
                outcomes.append(RaceOutcome(
                    race_number=info.race_number,
                    race_name=info.race_name or RACE_NAME_PLACEHOLDER,
                    hit=False,
                    payout=0,
                    bet_type=BET_TYPE,
                    bet_points=self.bet_points,
                ))
                continue

            settled = self.evaluator.evaluate(prediction, result)
            outcomes.append(RaceOutcome(
                race_number=info.race_number,
                race_name=result.race_name or info.race_name or RACE_NAME_PLACEHOLDER,
                hit=settled.hit,
                payout=settled.payout,
                bet_type=BET_TYPE,
                bet_points=self.bet_points,
            ))

        # Totals use the declared race count, which may differ from
        # the number of races actually settled
        total_races = prediction_set.declared_races
        hit_races = sum(1 for o in outcomes if o.hit)
        total_payout = sum(o.payout for o in outcomes)
        total_bet = self.bet_points * total_races

        entry = DayArchiveEntry(
            venue=result_set.venue or prediction_set.track,
            total_races=total_races,
            hit_races=hit_races,
            perfect_hit=hit_races == total_races,
            total_payout=total_payout,
            recovery_rate=recovery_rate(total_payout, total_bet),
            races=outcomes,
        )

        logger.info(
            f"Settled {entry.venue}: {hit_races}/{total_races}R hit, "
            f"payout ¥{total_payout:,}, recovery {entry.recovery_rate}%"
        )
        return entry

    def aggregate(
        self,
        prediction_set: Union[PredictionSet, dict],
        result_set: Union[ResultSet, dict],
        date: str,
    ) -> Dict[str, Dict[str, Dict[str, dict]]]:
        """
        Settle a day and wrap the entry as {year: {month: {day: entry}}}.

        Raises:
            ValueError: If date is not YYYY-MM-DD
        """
        year, month, day = split_date(date)
        entry = self.build_day_entry(prediction_set, result_set)
        return {year: {month: {day: entry.to_dict()}}}


def aggregate(
    prediction_set: Union[PredictionSet, dict],
    result_set: Union[ResultSet, dict],
    date: str,
) -> Dict[str, Dict[str, Dict[str, dict]]]:
    """Settle a day with the standard strategy and return its archive fragment."""
    return DayAggregator().aggregate(prediction_set, result_set, date)
