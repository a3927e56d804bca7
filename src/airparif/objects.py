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
Immutable records describing pollution indices and alerts
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from airparif import const


class Day(Enum):
    """Relative day as used by the HTTP API."""

    YESTERDAY = "hier"
    TODAY = "jour"
    TOMORROW = "demain"

    @property
    def offset(self) -> int:
        """Number of days between this day and today."""
        return _DAY_OFFSETS[self]

    def to_date(self, today: date) -> date:
        """
        Resolve the relative day against a reference date.

        :param today: Reference date standing for :attr:`Day.TODAY`
        :type today: date
        :rtype: date
        """
        return today + timedelta(days=self.offset)


_DAY_OFFSETS = {
    Day.YESTERDAY: -1,
    Day.TODAY: 0,
    Day.TOMORROW: 1,
}


class EpisodeType(Enum):
    """Whether a pollution alert was forecast or observed."""

    FORECAST = "prevu"
    OBSERVED = "constate"


class Level(Enum):
    """Alert severity for a pollutant."""

    INFO = "info"
    ALERT = "alerte"
    NORMAL = "normal"


class Criteria(Enum):
    """Criteria that can raise an alert."""

    # More than 100 km2 affected
    AREA = "km"
    # More than 10% of the population affected
    POPULATION = "pop"


@dataclass(frozen=True)
class Index:
    """
    A pollution index for one day.

    ``pollutants`` lists the labels the score applies to: ``("global",)``
    for the aggregate figure, a single pollutant for a per-pollutant
    breakdown, or the pollutants responsible for a city index.
    """

    date: date
    value: int
    pollutants: tuple[str, ...] = (const.GLOBAL_POLLUTANT,)
    map_url: str | None = None
    insee: str | None = None

    @property
    def levels(self) -> dict[str, int]:
        """Pollutant label to severity score mapping."""
        return {pollutant: self.value for pollutant in self.pollutants}

    @property
    def is_global(self) -> bool:
        return const.GLOBAL_POLLUTANT in self.pollutants


@dataclass(frozen=True)
class DayIndex:
    """An :class:`Index` tagged with the relative day it was requested for."""

    day: Day
    index: Index


@dataclass(frozen=True)
class CityIndex:
    """
    Indices of a single city for yesterday, today and tomorrow.

    A day the service has no data for yet is ``None``.
    """

    insee: str
    yesterday: DayIndex | None = None
    today: DayIndex | None = None
    tomorrow: DayIndex | None = None

    @property
    def days(self) -> tuple[DayIndex, ...]:
        """Available day indices, in chronological order."""
        return tuple(
            day_index
            for day_index in (self.yesterday, self.today, self.tomorrow)
            if day_index is not None
        )

    def for_day(self, day: Day) -> DayIndex | None:
        """
        Get the index for a relative day.

        :param day: Relative day
        :type day: Day
        :return: The day index, or None if the service returned no data
        :rtype: DayIndex | None
        """
        return {
            Day.YESTERDAY: self.yesterday,
            Day.TODAY: self.today,
            Day.TOMORROW: self.tomorrow,
        }[day]


@dataclass(frozen=True)
class PollutantEpisode:
    """Alert details for a single pollutant."""

    pollutant: str
    kind: EpisodeType
    level: Level
    criteria: tuple[Criteria, ...] = ()


@dataclass(frozen=True)
class Episode:
    """A pollution alert for one day, possibly covering several pollutants."""

    date: date
    detail: str | None = None
    pollutants: tuple[PollutantEpisode, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.pollutants)
