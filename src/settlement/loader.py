"""
Nankan Settlement - Document Loader

Load a day's prediction and result documents from the shared data
repository (nankan/{predictions,results}/YYYY/MM/YYYY-MM-DD.json).
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .config import SettlementConfig
from .types import PredictionSet, ResultSet

logger = logging.getLogger(__name__)


class DocumentLoader:
    """
    Read prediction/result JSON documents for a date.

    Files in test_data_dir (prediction-<date>.json, result-<date>.json)
    take precedence over the shared repository.
    """

    def __init__(self, config: Optional[SettlementConfig] = None):
        self.config = config or SettlementConfig()

    def _override_path(self, kind: str, date: str) -> Optional[Path]:
        if self.config.test_data_dir is None:
            return None
        path = self.config.test_data_dir / f"{kind}-{date}.json"
        return path if path.exists() else None

    def _read(self, path: Path, label: str) -> dict:
        if not path.exists():
            raise FileNotFoundError(f"{label} not found: {path}")

        logger.debug(f"Loading {label}: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def load_prediction_document(self, date: str) -> dict:
        """
        Load the raw prediction document for a date.

        Raises:
            FileNotFoundError: If no prediction document exists for the date
        """
        path = self._override_path("prediction", date) or self.config.get_prediction_path(date)
        return self._read(path, "Prediction data")

    def load_result_document(self, date: str) -> dict:
        """
        Load the raw result document for a date.

        Raises:
            FileNotFoundError: If no result document exists for the date
        """
        path = self._override_path("result", date) or self.config.get_result_path(date)
        return self._read(path, "Result data")

    def load_prediction(self, date: str) -> PredictionSet:
        return PredictionSet.from_dict(self.load_prediction_document(date))

    def load_result(self, date: str) -> ResultSet:
        return ResultSet.from_dict(self.load_result_document(date))
