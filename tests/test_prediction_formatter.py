"""Tests for prediction page formatting."""

import pytest

from src.settlement.prediction_formatter import format_prediction, format_race_horses
from src.settlement.types import RacePrediction


@pytest.fixture
def source() -> dict:
    """Shared prediction document with one race."""
    return {
        "raceDate": "2026-02-10",
        "track": "川崎",
        "totalRaces": 1,
        "races": [{
            "raceInfo": {
                "raceNumber": "1R",
                "raceName": "C3一",
                "distance": 1400,
                "surface": "ダート",
                "startTime": "14:45",
            },
            "horses": [
                {"number": 8, "name": "H8", "assignment": "連下", "totalScore": 55, "kisyu": "J8"},
                {"number": 2, "name": "H2", "assignment": "単穴", "totalScore": 65, "kisyu": "J2"},
                {"number": 5, "name": "H5", "assignment": "対抗", "totalScore": 70, "kisyu": "J5"},
                {"number": 3, "name": "H3", "assignment": "本命", "totalScore": 80, "kisyu": "J3"},
                {"number": 6, "name": "H6", "assignment": "連下最上位", "totalScore": 60, "kisyu": "J6"},
                {"number": 9, "name": "H9", "assignment": "補欠", "totalScore": 40, "kisyu": "J9"},
                {"number": 1, "name": "H1", "assignment": "単穴", "totalScore": 62, "kisyu": "J1"},
            ],
        }],
    }


class TestFormatRaceHorses:
    """Test display ordering of marked horses."""

    def test_order(self, source):
        rows = format_race_horses(RacePrediction.from_dict(source["races"][0]))

        assert [r["number"] for r in rows] == [3, 5, 2, 1, 8, 6]
        assert [r["mark"] for r in rows] == ["◎", "○", "▲", "▲", "△", "△"]

    def test_longshot_family_shown_as_renka(self, source):
        """連下最上位 is grouped and labelled as 連下."""
        rows = format_race_horses(RacePrediction.from_dict(source["races"][0]))

        assert rows[-1]["role"] == "連下"
        assert rows[-1]["number"] == 6

    def test_alternate_omitted(self, source):
        rows = format_race_horses(RacePrediction.from_dict(source["races"][0]))

        assert 9 not in [r["number"] for r in rows]

    def test_row_fields(self, source):
        rows = format_race_horses(RacePrediction.from_dict(source["races"][0]))

        assert rows[0] == {
            "number": 3,
            "name": "H3",
            "mark": "◎",
            "role": "本命",
            "score": 80,
            "jockey": "J3",
        }

    def test_only_first_primary(self):
        race = RacePrediction.from_dict({
            "horses": [
                {"number": 1, "assignment": "本命"},
                {"number": 2, "assignment": "本命"},
            ]
        })

        assert [r["number"] for r in format_race_horses(race)] == [1]


class TestFormatPrediction:
    """Test format_prediction."""

    def test_document(self, source):
        output = format_prediction(source, last_updated="2026-02-10T09:00:00")

        assert output["date"] == "2026-02-10"
        assert output["track"] == "川崎"
        assert output["totalRaces"] == 1
        assert output["lastUpdated"] == "2026-02-10T09:00:00"
        race = output["races"][0]
        assert race["raceNumber"] == "1R"
        assert race["raceName"] == "C3一"
        assert race["distance"] == 1400
        assert race["surface"] == "ダート"
        assert race["startTime"] == "14:45"
        assert len(race["horses"]) == 6

    def test_default_timestamp(self, source):
        assert format_prediction(source)["lastUpdated"]

    def test_no_races(self):
        assert format_prediction({"track": "大井"})["races"] == []
