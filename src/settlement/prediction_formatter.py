"""
Nankan Settlement - Prediction Formatter

Convert a shared prediction document into the prediction page format
(allRacesPrediction.json) with marks ◎ ○ ▲ △.
"""

from datetime import datetime
from typing import List, Optional

from .assignment import ASSIGNMENT_MARKS, Assignment
from .types import Horse, RacePrediction


def _horse_row(horse: Horse, mark: str, role: str) -> dict:
    return {
        "number": horse.number,
        "name": horse.name,
        "mark": mark,
        "role": role,
        "score": horse.total_score,
        "jockey": horse.jockey,
    }


def format_race_horses(race: RacePrediction) -> List[dict]:
    """
    Order a race's marked horses for display.

    One 本命, one 対抗, every 単穴, then every horse whose tag contains
    連下 (連下最上位 included), shown as 連下. Other tags are left out.
    """
    rows = []

    for role in (Assignment.PRIMARY, Assignment.RIVAL):
        horse = next((h for h in race.horses if h.role is role), None)
        if horse is not None:
            rows.append(_horse_row(horse, ASSIGNMENT_MARKS[role], role.value))

    for horse in race.horses:
        if horse.role is Assignment.DARK_HORSE:
            rows.append(_horse_row(
                horse, ASSIGNMENT_MARKS[Assignment.DARK_HORSE], Assignment.DARK_HORSE.value
            ))

    for horse in race.horses:
        if "連下" in horse.assignment:
            rows.append(_horse_row(
                horse, ASSIGNMENT_MARKS[Assignment.LONGSHOT], Assignment.LONGSHOT.value
            ))

    return rows


def format_prediction(source: dict, last_updated: Optional[str] = None) -> dict:
    """
    Build the prediction page document from a shared prediction document.

    Args:
        source: Shared prediction document
        last_updated: ISO timestamp to stamp; defaults to now

    Returns:
        Prediction page document
    """
    if last_updated is None:
        last_updated = datetime.now().isoformat()

    output = {
        "date": source.get("raceDate"),
        "track": source.get("track"),
        "totalRaces": source.get("totalRaces"),
        "lastUpdated": last_updated,
        "races": [],
    }

    for raw in source.get("races") or []:
        race = RacePrediction.from_dict(raw)
        info = race.race_info
        output["races"].append({
            "raceNumber": info.race_number,
            "raceName": info.race_name,
            "distance": info.distance,
            "surface": info.surface,
            "startTime": info.start_time,
            "horses": format_race_horses(race),
        })

    return output
