"""
Nankan Settlement - Configuration

Betting constants for umatan settlement and file locations for the
shared prediction/result repository and the results archive.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


# Bet settings
BET_TYPE = "馬単"  # Umatan (exacta)
BET_POINTS = 12  # Fixed stake count per race (axis x companion combinations)

# Race label format: "<number>R" (e.g., "3R")
RACE_LABEL_SUFFIX = "R"

# Shown when neither the result nor the prediction names the race
RACE_NAME_PLACEHOLDER = "-"

# Output file name patterns
ARCHIVE_FRAGMENT_FILENAME = "archiveResults-{date}.json"
PREDICTION_OUTPUT_FILENAME = "allRacesPrediction-{date}.json"


@dataclass
class SettlementConfig:
    """Configuration for loading documents and persisting the archive."""

    # Shared data repository (keiba-data-shared layout)
    data_shared_dir: Path = field(default_factory=lambda: Path("data/keiba-data-shared"))
    predictions_subdir: str = "nankan/predictions"
    results_subdir: str = "nankan/results"

    # Local overrides checked before the shared repository
    test_data_dir: Optional[Path] = None

    # Output configuration
    output_dir: Path = field(default_factory=lambda: Path("output"))
    archive_path: Path = field(default_factory=lambda: Path("data/archiveResults.json"))
    public_archive_path: Optional[Path] = None  # Mirror copy for the public site

    def _dated_path(self, subdir: str, date: str) -> Path:
        year, month = date.split("-")[:2]
        return self.data_shared_dir / subdir / year / month / f"{date}.json"

    def get_prediction_path(self, date: str) -> Path:
        """Get path of the shared prediction document for a date."""
        return self._dated_path(self.predictions_subdir, date)

    def get_result_path(self, date: str) -> Path:
        """Get path of the shared result document for a date."""
        return self._dated_path(self.results_subdir, date)

    def get_archive_fragment_path(self, date: str) -> Path:
        """Get output path of a day's archive fragment."""
        return self.output_dir / ARCHIVE_FRAGMENT_FILENAME.format(date=date)

    def get_prediction_output_path(self, date: str) -> Path:
        """Get output path of a day's formatted prediction."""
        return self.output_dir / PREDICTION_OUTPUT_FILENAME.format(date=date)
