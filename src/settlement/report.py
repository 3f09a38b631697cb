"""
Nankan Settlement - Archive Report

Day-by-day and monthly summaries of the results archive.
"""

import logging

import pandas as pd

from .aggregator import recovery_rate
from .archive import ArchiveStore
from .types import DayArchiveEntry

logger = logging.getLogger(__name__)

DAY_COLUMNS = [
    "date",
    "venue",
    "total_races",
    "hit_races",
    "perfect_hit",
    "total_payout",
    "total_bet",
    "recovery_rate",
]

MONTH_COLUMNS = [
    "month",
    "days",
    "races",
    "hits",
    "hit_rate",
    "total_payout",
    "total_bet",
    "recovery_rate",
]


def archive_to_frame(archive: dict) -> pd.DataFrame:
    """One row per archived day, sorted by date."""
    store = ArchiveStore.from_nested(archive)

    rows = []
    for date, raw in store.items():
        entry = DayArchiveEntry.from_dict(raw)
        rows.append({
            "date": date,
            "venue": entry.venue,
            "total_races": entry.total_races,
            "hit_races": entry.hit_races,
            "perfect_hit": entry.perfect_hit,
            "total_payout": entry.total_payout,
            "total_bet": entry.total_bet,
            "recovery_rate": entry.recovery_rate,
        })

    return pd.DataFrame(rows, columns=DAY_COLUMNS)


def monthly_summary(archive: dict) -> pd.DataFrame:
    """
    Aggregate the archive by month.

    Recovery rate is recomputed from the monthly totals (not averaged
    over days), rounding halves up like the daily figure.
    """
    days = archive_to_frame(archive)
    if days.empty:
        return pd.DataFrame(columns=MONTH_COLUMNS)

    days["month"] = days["date"].str[:7]
    monthly = days.groupby("month", sort=True).agg(
        days=("date", "count"),
        races=("total_races", "sum"),
        hits=("hit_races", "sum"),
        total_payout=("total_payout", "sum"),
        total_bet=("total_bet", "sum"),
    ).reset_index()

    monthly["hit_rate"] = (monthly["hits"] / monthly["races"] * 100).where(
        monthly["races"] > 0, 0.0
    )
    monthly["recovery_rate"] = [
        recovery_rate(payout, bet)
        for payout, bet in zip(monthly["total_payout"], monthly["total_bet"])
    ]

    logger.debug(f"Summarized {len(days)} days into {len(monthly)} months")
    return monthly[MONTH_COLUMNS]
