#  Provides a python client for simply retrieving
#  pollution indices and alerts from the AirParif web API.
#  Copyright (C) 2025 The airparif contributors

#  This library is free software; you can redistribute it and/or modify it
#  under the terms of the GNU Lesser General Public License as published by
#  the Free Software Foundation; either version 3 of the License, or
#  (at your option) any later version.

#  This library is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU Lesser General Public License for more details.


"""
Human readable rendering of indices and alerts
"""

import re
from datetime import date

from airparif.airparif import ParseError
from airparif.objects import CityIndex, Day, DayIndex, Episode, Index, PollutantEpisode

_NONE = "None"

_INDEX_LINE_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2}) \(city : (?P<insee>[^)]*)\) : "
    r"\[(?P<pollutants>[^\]]*)\] = (?P<value>-?\d+) \(map : (?P<map_url>.*)\)$"
)


def _optional(value: str | None) -> str:
    return _NONE if value is None else value


def format_index(index: Index) -> str:
    """
    Render an index on a single line.

    Example: ``2012-08-09 (city : 75056) : [no2, pm10] = 25 (map : None)``

    :param index: Index to render
    :type index: Index
    :rtype: str
    """
    return (
        f"{index.date.isoformat()} (city : {_optional(index.insee)}) : "
        f"[{', '.join(index.pollutants)}] = {index.value} "
        f"(map : {_optional(index.map_url)})"
    )


def parse_index(line: str) -> Index:
    """
    Read back a line produced by :func:`format_index`.

    :param line: Rendered index
    :type line: str
    :rtype: Index
    :raises ParseError: If the line is not a rendered index
    """
    match = _INDEX_LINE_RE.match(line.strip())
    if not match:
        raise ParseError(f"Not a rendered index: {line!r}")

    try:
        index_date = date.fromisoformat(match["date"])
    except ValueError as exc:
        raise ParseError(f"Invalid date in rendered index: {match['date']}") from exc

    pollutants = match["pollutants"]
    insee = match["insee"]
    map_url = match["map_url"]

    return Index(
        date=index_date,
        value=int(match["value"]),
        pollutants=tuple(pollutants.split(", ")) if pollutants else (),
        map_url=None if map_url == _NONE else map_url,
        insee=None if insee == _NONE else insee,
    )


def format_day_index(day_index: DayIndex) -> str:
    """Render a day index, e.g. ``jour : 2012-08-09 (city : None) : ...``."""
    return f"{day_index.day.value} : {format_index(day_index.index)}"


def format_city_index(city_index: CityIndex) -> str:
    """Render a city index on one line per relative day."""
    lines = [city_index.insee]
    for day in Day:
        day_index = city_index.for_day(day)
        lines.append(
            f"  {format_day_index(day_index)}" if day_index else f"  {day.value} : {_NONE}"
        )
    return "\n".join(lines)


def format_pollutant_episode(pollutant: PollutantEpisode) -> str:
    """Render alert details for a pollutant, e.g. ``o3 : constate info [km, pop]``."""
    criteria = ", ".join(criterion.value for criterion in pollutant.criteria)
    return f"{pollutant.pollutant} : {pollutant.kind.value} {pollutant.level.value} [{criteria}]"


def format_episode(episode: Episode) -> str:
    """Render a pollution alert on a single line."""
    pollutants = "; ".join(format_pollutant_episode(p) for p in episode)
    return (
        f"{episode.date.isoformat()} [{pollutants}] "
        f"(detail : {_optional(episode.detail)})"
    )
