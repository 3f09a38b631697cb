"""
Nankan Settlement - Umatan Hit Evaluation

Decide whether the axis/companion umatan (馬単/exacta) strategy hit
for a race and look up what it paid.
"""

import logging
from typing import FrozenSet, Set, Union

from .assignment import AXIS_ASSIGNMENTS, COMPANION_ASSIGNMENTS, Assignment
from .types import HitResult, RacePrediction, RaceResult

logger = logging.getLogger(__name__)


class UmatanHitEvaluator:
    """
    Settle the axis/companion umatan strategy for a single race.

    Axis (軸) horses are boxed against companion (ヒモ) horses, so the bet
    hits when the top two finishers are one axis and one companion horse
    in either order:

        Pattern A: axis 1st, companion 2nd
        Pattern B: companion 1st, axis 2nd

    The payout is always looked up as "<1st>-<2nd>". A hit whose
    combination is missing from the payout table pays 0 but stays a hit.
    """

    def __init__(
        self,
        axis_assignments: FrozenSet[Assignment] = AXIS_ASSIGNMENTS,
        companion_assignments: FrozenSet[Assignment] = COMPANION_ASSIGNMENTS,
    ):
        self.axis_assignments = axis_assignments
        self.companion_assignments = companion_assignments

    def _numbers_with_role(
        self, prediction: RacePrediction, roles: FrozenSet[Assignment]
    ) -> Set[int]:
        return {
            h.number
            for h in prediction.horses
            if h.number is not None and h.role in roles
        }

    def evaluate(
        self,
        prediction: Union[RacePrediction, dict],
        result: Union[RaceResult, dict],
    ) -> HitResult:
        """
        Evaluate one race.

        Args:
            prediction: Race prediction (typed or raw document dict)
            result: Race result (typed or raw document dict)

        Returns:
            HitResult; incomplete data yields a miss, never an exception
        """
        if isinstance(prediction, dict):
            prediction = RacePrediction.from_dict(prediction)
        if isinstance(result, dict):
            result = RaceResult.from_dict(result)

        axis = self._numbers_with_role(prediction, self.axis_assignments)
        companions = self._numbers_with_role(prediction, self.companion_assignments)

        if not axis or not companions:
            return HitResult(hit=False, payout=0)

        first = result.finisher(1)
        second = result.finisher(2)

        if first is None or second is None:
            return HitResult(hit=False, payout=0)

        pattern_a = first.number in axis and second.number in companions
        pattern_b = first.number in companions and second.number in axis

        if not (pattern_a or pattern_b):
            return HitResult(hit=False, payout=0)

        combination = f"{first.number}-{second.number}"
        entry = result.umatan_payout(combination)
        if entry is None:
            logger.debug(f"Hit {combination} has no umatan payout entry")
            return HitResult(hit=True, payout=0)

        return HitResult(hit=True, payout=entry.payout or 0)


_DEFAULT_EVALUATOR = UmatanHitEvaluator()


def evaluate(
    prediction: Union[RacePrediction, dict],
    result: Union[RaceResult, dict],
) -> HitResult:
    """Evaluate one race with the standard axis/companion assignments."""
    return _DEFAULT_EVALUATOR.evaluate(prediction, result)
