from datetime import date

import pytest

from airparif import (
    CityIndex,
    Criteria,
    Day,
    DayIndex,
    Episode,
    EpisodeType,
    Index,
    Level,
    ParseError,
    PollutantEpisode,
    format_city_index,
    format_day_index,
    format_episode,
    format_index,
    parse_index,
)


def test_format_global_index():
    index = Index(
        date=date(2012, 8, 9),
        value=35,
        map_url="http://localhost:5000/services/cartes/indice/date/hier",
    )

    assert format_index(index) == (
        "2012-08-09 (city : None) : [global] = 35 "
        "(map : http://localhost:5000/services/cartes/indice/date/hier)"
    )


def test_format_city_index_line():
    index = Index(date=date(2024, 1, 2), value=25, pollutants=("no2", "pm10"), insee="75056")

    assert format_index(index) == "2024-01-02 (city : 75056) : [no2, pm10] = 25 (map : None)"


@pytest.mark.parametrize(
    "index",
    [
        Index(date=date(2012, 8, 9), value=35,
              map_url="https://www.airparif.asso.fr/services/cartes/indice/date/hier"),
        Index(date=date(2024, 1, 2), value=125, pollutants=("o3", "no2", "pm10"), insee="2A004"),
        Index(date=date(2024, 1, 2), value=30, pollutants=()),
    ],
)
def test_render_then_parse_reproduces_index(index):
    assert parse_index(format_index(index)) == index


def test_parse_index_rejects_other_lines():
    with pytest.raises(ParseError):
        parse_index("2012-08-09 : global = 35")

    with pytest.raises(ParseError):
        parse_index("2012-13-09 (city : None) : [global] = 35 (map : None)")


def test_format_day_and_city_index():
    today = DayIndex(Day.TODAY, Index(date=date(2024, 1, 2), value=38,
                                       pollutants=("o3",), insee="75056"))
    city = CityIndex(insee="75056", today=today)

    assert format_day_index(today) == "jour : 2024-01-02 (city : 75056) : [o3] = 38 (map : None)"
    assert format_city_index(city).splitlines() == [
        "75056",
        "  hier : None",
        "  jour : 2024-01-02 (city : 75056) : [o3] = 38 (map : None)",
        "  demain : None",
    ]


def test_format_episode():
    episode = Episode(
        date=date(2024, 7, 1),
        pollutants=(
            PollutantEpisode("o3", EpisodeType.OBSERVED, Level.INFO,
                             (Criteria.AREA, Criteria.POPULATION)),
            PollutantEpisode("so2", EpisodeType.FORECAST, Level.ALERT),
        ),
    )

    assert format_episode(episode) == (
        "2024-07-01 [o3 : constate info [km, pop]; so2 : prevu alerte []] (detail : None)"
    )


def test_present_values_render_as_themselves():
    index = Index(date=date(2024, 1, 2), value=10, insee="")

    assert format_index(index) == "2024-01-02 (city : ) : [global] = 10 (map : None)"
    assert parse_index(format_index(index)) == index
