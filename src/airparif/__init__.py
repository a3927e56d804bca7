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
Provides a python client for simply retrieving
pollution indices and alerts from the AirParif web API.
"""

__version__ = "0.1.0"

from .airparif import (
    AirParif,
    AirParifError,
    RequestError,
    CallError,
    ParseError,
    MissingKeyError,
    WrongTypeError,
    UnexpectedDateError,
    UnknownValueError,
    InvalidCityCodeError,
    InvalidDayError,
    index,
    index_day,
    index_city,
    episodes,
)
from .objects import (
    CityIndex,
    Criteria,
    Day,
    DayIndex,
    Episode,
    EpisodeType,
    Index,
    Level,
    PollutantEpisode,
)
from .display import (
    format_city_index,
    format_day_index,
    format_episode,
    format_index,
    format_pollutant_episode,
    parse_index,
)

__all__ = [
    "AirParif",
    "AirParifError",
    "RequestError",
    "CallError",
    "ParseError",
    "MissingKeyError",
    "WrongTypeError",
    "UnexpectedDateError",
    "UnknownValueError",
    "InvalidCityCodeError",
    "InvalidDayError",
    "index",
    "index_day",
    "index_city",
    "episodes",
    "CityIndex",
    "Criteria",
    "Day",
    "DayIndex",
    "Episode",
    "EpisodeType",
    "Index",
    "Level",
    "PollutantEpisode",
    "format_city_index",
    "format_day_index",
    "format_episode",
    "format_index",
    "format_pollutant_episode",
    "parse_index",
    "__version__",
]
