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
AirParif pollution index client
"""

import json
import logging
import re
from collections.abc import Iterable
from datetime import datetime, date, timezone
from enum import Enum

import requests

from airparif import const
from airparif.data_manager import DataManager
from airparif.objects import (
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

_LOGGER = logging.getLogger(__name__)

_INSEE_CODE_RE = re.compile(const.INSEE_CODE_PATTERN)


def _dump(value) -> str:
    """Render a JSON value for error messages."""
    return json.dumps(value, ensure_ascii=False)


class AirParifError(Exception):
    """Base exception for the airparif library."""

class RequestError(AirParifError):
    """Raised when the HTTP request itself fails (DNS, connection, timeout)."""

class CallError(AirParifError):
    """Raised when the API answers with a status other than 2XX."""

    def __init__(self, url: str, body: str, status: int):
        self.url = url
        self.body = body
        self.status = status
        super().__init__(
            f"Unexpected HTTP response : url={url}, status={status}, body={body!r}"
        )

class ParseError(AirParifError):
    """Raised when a successful response cannot be decoded into the expected shape."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)

class MissingKeyError(ParseError):
    """Raised when a member is missing from a JSON object."""

    def __init__(self, key: str, json_value: str):
        self.key = key
        self.json = json_value
        super().__init__(f"Missing key {key} in {json_value}")

class WrongTypeError(ParseError):
    """Raised when a JSON value is not of the expected type."""

    def __init__(self, expected: str, json_value: str):
        self.expected = expected
        self.json = json_value
        super().__init__(
            f"Unexpected type value in JSON : expected an {expected} but got {json_value}"
        )

class UnexpectedDateError(ParseError):
    """Raised when a date is neither 'hier', 'jour', 'demain' nor a dd/mm/yyyy date."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Wrong date : expect one of 'hier', 'jour', 'demain' or dd/mm/yyyy but got {value}"
        )

class UnknownValueError(ParseError):
    """Raised when an alert token has no matching enum value."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Error parsing enum value : unexpected value {value}")

class InvalidCityCodeError(AirParifError, ValueError):
    """Raised when city codes given to :meth:`AirParif.index_city` are empty or malformed."""

class InvalidDayError(AirParifError, ValueError):
    """Raised when :meth:`AirParif.index_day` receives something other than a :class:`Day` or its token."""


class AirParif:
    """
    A client for the AirParif pollution index API (Ile-de-France).

    Each public method performs a single GET request and returns
    immutable records. Nothing is cached.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = const.DEFAULT_BASE_URL,
        *,
        session: requests.Session | None = None,
        request_timeout: float = const.REQUEST_TIMEOUT
    ):
        """
        Initialize the AirParif client.

        :param api_key: API key, see https://www.airparif.asso.fr/rss/api
        :type api_key: str
        :param base_url: Root URL of the API, override it to target a mock server
        :type base_url: str
        :param session: HTTP session to reuse
        :type session: requests.Session, optional
        :param request_timeout: HTTP request timeout in seconds
        :type request_timeout: float
        """
        self._data_manager = DataManager(
            api_key,
            base_url=base_url,
            session=session,
            request_timeout=request_timeout
        )


    @property
    def base_url(self) -> str:
        """Root URL requests are sent to."""
        return self._data_manager.base_url


    def index(self) -> list[Index]:
        """
        Get the global pollution index for yesterday, today and tomorrow
        through the ``indice`` endpoint.

        :return: Global indices, in chronological order
        :rtype: list[Index]
        :raises RequestError: If the request cannot be performed
        :raises CallError: If the HTTP status is not 2XX
        :raises ParseError: If the response is not as expected
        """
        _LOGGER.debug("Querying indice endpoint")
        data = self._data_manager.fetch_json(const.INDEX_ENDPOINT)
        return self._index_to_index(data)


    def index_day(self, day: Day = Day.TODAY) -> list[DayIndex]:
        """
        Get global and per pollutant indices for a day through
        the ``indiceJour`` endpoint.

        :param day: Which day to get indices for
        :type day: Day
        :return: One entry per pollutant, the global one included
        :rtype: list[DayIndex]
        :raises InvalidDayError: If ``day`` is not a :class:`Day` or one of its tokens
        :raises RequestError: If the request cannot be performed
        :raises CallError: If the HTTP status is not 2XX
        :raises ParseError: If the response is not as expected
        """
        try:
            day = Day(day)
        except ValueError as exc:
            raise InvalidDayError(f"Invalid day: {day!r}") from exc
        _LOGGER.debug("Querying indiceJour endpoint for %s", day.value)
        data = self._data_manager.fetch_json(
            const.INDEX_DAY_ENDPOINT,
            {const.DATE_PARAM: day.value}
        )
        return self._index_day_to_day_index(data, day)


    def index_city(self, cities: Iterable[str]) -> list[CityIndex]:
        """
        Get pollution indices of several cities for yesterday, today and
        tomorrow through the ``idxville`` endpoint.

        Codes are validated before any request is made.

        :param cities: INSEE city codes, e.g. ``["75056", "94028"]``
        :type cities: Iterable[str]
        :return: One entry per city returned by the service
        :rtype: list[CityIndex]
        :raises InvalidCityCodeError: If no code is given or a code is malformed
        :raises RequestError: If the request cannot be performed
        :raises CallError: If the HTTP status is not 2XX
        :raises ParseError: If the response is not as expected
        """
        codes = self._validate_cities(cities)
        _LOGGER.debug("Querying idxville endpoint for %s", codes)
        data = self._data_manager.fetch_json(
            const.INDEX_CITY_ENDPOINT,
            {const.CITIES_PARAM: ",".join(codes)}
        )
        return self._idxville_to_city_index(data)


    def episodes(self) -> list[Episode]:
        """
        List pollution alerts for yesterday, today and tomorrow through
        the ``episode`` endpoint, in the order the service returns them.

        :return: Pollution alerts
        :rtype: list[Episode]
        :raises RequestError: If the request cannot be performed
        :raises CallError: If the HTTP status is not 2XX
        :raises ParseError: If the response is not as expected
        """
        _LOGGER.debug("Querying episode endpoint")
        data = self._data_manager.fetch_json(const.EPISODE_ENDPOINT)
        return self._episode_to_episode(data)


    def _validate_cities(self, cities: Iterable[str]) -> list[str]:
        """
        Check INSEE codes and drop duplicates, keeping order.

        :raises InvalidCityCodeError: If no code is given or a code is malformed
        """
        if isinstance(cities, str):
            cities = [cities]

        codes = []
        for city in cities:
            if not isinstance(city, str) or not _INSEE_CODE_RE.match(city):
                raise InvalidCityCodeError(f"Invalid INSEE city code: {city!r}")
            if city not in codes:
                codes.append(city)

        if not codes:
            raise InvalidCityCodeError("At least one INSEE city code is required.")

        return codes


    def _index_to_index(self, data) -> list[Index]:
        """
        Convert an ``indice`` response into global indices.

        :raises ParseError: If the response is not as expected
        """
        today = self._today()
        result = []

        for value in self._get_list(data):
            day = self._convert_to_day(self._get_string_value(const.DATE_KEY, value))
            result.append((day, Index(
                date=day.to_date(today),
                value=self._get_number_value(const.INDEX_KEY, value),
                map_url=self._get_optional_string(const.MAP_URL_KEY, value),
            )))

        result.sort(key=lambda item: item[0].offset)
        _LOGGER.debug("Parsed %d global indices", len(result))
        return [index for _, index in result]


    def _index_day_to_day_index(self, data, day: Day) -> list[DayIndex]:
        """
        Convert an ``indiceJour`` response into per pollutant indices.

        :raises ParseError: If the response is not as expected
        """
        raw_date = self._get_string_value(const.DATE_KEY, data)
        try:
            index_date = datetime.strptime(raw_date, const.DAY_DATE_FORMAT).date()
        except ValueError as exc:
            raise UnexpectedDateError(raw_date) from exc

        result = []
        for pollutant, value in data.items():
            if pollutant == const.DATE_KEY:
                continue
            result.append(DayIndex(day, Index(
                date=index_date,
                value=self._get_number_value(const.INDEX_KEY, value),
                pollutants=(pollutant,),
                map_url=self._get_optional_string(const.MAP_URL_KEY, value),
            )))

        _LOGGER.debug("Parsed %d pollutant indices for %s", len(result), index_date)
        return result


    def _idxville_to_city_index(self, data) -> list[CityIndex]:
        """
        Convert an ``idxville`` response into city indices.

        :raises ParseError: If the response is not as expected
        """
        today = self._today()
        result = []

        for entry in self._get_list(data):
            insee = self._get_string_value(const.INSEE_KEY, entry)
            days = {}

            for key, value in entry.items():
                if key == const.INSEE_KEY:
                    continue
                day = self._convert_to_day(key)
                # Days without data yet are kept absent
                if value is None:
                    continue
                days[day] = DayIndex(day, Index(
                    date=day.to_date(today),
                    value=self._get_number_value(const.INDEX_KEY, value),
                    pollutants=self._get_string_list(const.POLLUTANTS_KEY, value),
                    insee=insee,
                ))

            result.append(CityIndex(
                insee=insee,
                yesterday=days.get(Day.YESTERDAY),
                today=days.get(Day.TODAY),
                tomorrow=days.get(Day.TOMORROW),
            ))

        _LOGGER.debug("Parsed indices for %d cities", len(result))
        return result


    def _episode_to_episode(self, data) -> list[Episode]:
        """
        Convert an ``episode`` response into pollution alerts.

        :raises ParseError: If the response is not as expected
        """
        today = self._today()
        result = []

        for entry in self._get_list(data):
            day = self._convert_to_day(self._get_string_value(const.DATE_KEY, entry))
            detail = self._get_optional_string(const.DETAIL_KEY, entry)

            pollutants = []
            for pollutant, value in entry.items():
                if pollutant in (const.DATE_KEY, const.DETAIL_KEY):
                    continue
                criteria = tuple(
                    self._convert_enum(Criteria, token)
                    for token in self._get_string_list(const.EPISODE_CRITERIA_KEY, value)
                )
                pollutants.append(PollutantEpisode(
                    pollutant=pollutant,
                    kind=self._convert_enum(
                        EpisodeType,
                        self._get_string_value(const.EPISODE_TYPE_KEY, value)
                    ),
                    level=self._convert_enum(
                        Level,
                        self._get_string_value(const.EPISODE_LEVEL_KEY, value)
                    ),
                    criteria=criteria,
                ))

            result.append(Episode(
                date=day.to_date(today),
                detail=detail,
                pollutants=tuple(pollutants),
            ))

        _LOGGER.debug("Parsed %d episodes", len(result))
        return result


    def _today(self) -> date:
        """
        Reference date relative days are resolved against.

        This is the UTC date. Between midnight in Paris and midnight UTC
        it is still the previous day, so ``jour`` resolves one day early.
        """
        return datetime.now(timezone.utc).date()


    def _convert_to_day(self, value: str) -> Day:
        """
        Convert an ``hier``, ``jour`` or ``demain`` token into a :class:`Day`.

        :raises UnexpectedDateError: If the token is unknown
        """
        try:
            return Day(value)
        except ValueError as exc:
            raise UnexpectedDateError(str(value)) from exc


    def _convert_enum(self, enum_type: type[Enum], value: str):
        """
        Convert an upstream token into a member of ``enum_type``.

        :raises UnknownValueError: If the token matches no member
        """
        try:
            return enum_type(value)
        except ValueError as exc:
            raise UnknownValueError(str(value)) from exc


    def _get_list(self, data) -> list:
        """
        :raises WrongTypeError: If ``data`` is not a JSON array
        """
        if not isinstance(data, list):
            raise WrongTypeError("array", _dump(data))
        return data


    def _get_object(self, data) -> dict:
        """
        :raises WrongTypeError: If ``data`` is not a JSON object
        """
        if not isinstance(data, dict):
            raise WrongTypeError("object", _dump(data))
        return data


    def _get_number_value(self, key: str, data) -> int:
        """
        Extract a number member from a JSON object.

        :param key: Member name
        :type key: str
        :param data: JSON object
        :return: The number, as an integer
        :rtype: int
        :raises MissingKeyError: If the member is absent
        :raises WrongTypeError: If the member is not a number
        """
        data = self._get_object(data)
        if key not in data:
            raise MissingKeyError(key, _dump(data))

        value = data[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise WrongTypeError("number", _dump(value))
        if isinstance(value, float) and not value.is_integer():
            raise WrongTypeError("integer", _dump(value))
        return int(value)


    def _get_string_value(self, key: str, data) -> str:
        """
        Extract a string member from a JSON object.

        :param key: Member name
        :type key: str
        :param data: JSON object
        :rtype: str
        :raises MissingKeyError: If the member is absent
        :raises WrongTypeError: If the member is not a string
        """
        data = self._get_object(data)
        if key not in data:
            raise MissingKeyError(key, _dump(data))

        value = data[key]
        if not isinstance(value, str):
            raise WrongTypeError("string", _dump(value))
        return value


    def _get_optional_string(self, key: str, data) -> str | None:
        """Extract a string member, None when absent, empty or not a string."""
        value = self._get_object(data).get(key)
        return value if isinstance(value, str) and value else None


    def _get_string_list(self, key: str, data) -> tuple[str, ...]:
        """
        Extract an array of strings, empty when the member is absent.

        :raises WrongTypeError: If an item is not a string
        """
        values = self._get_object(data).get(key)
        if not isinstance(values, list):
            return ()

        for value in values:
            if not isinstance(value, str):
                raise WrongTypeError("string", _dump(value))
        return tuple(values)


def index(api_key: str) -> list[Index]:
    """
    Shortcut for :meth:`AirParif.index`.
    Use :class:`AirParif` directly when several calls are made.
    """
    return AirParif(api_key).index()


def index_day(api_key: str, day: Day = Day.TODAY) -> list[DayIndex]:
    """
    Shortcut for :meth:`AirParif.index_day`.
    Use :class:`AirParif` directly when several calls are made.
    """
    return AirParif(api_key).index_day(day)


def index_city(api_key: str, cities: Iterable[str]) -> list[CityIndex]:
    """
    Shortcut for :meth:`AirParif.index_city`.
    Use :class:`AirParif` directly when several calls are made.
    """
    return AirParif(api_key).index_city(cities)


def episodes(api_key: str) -> list[Episode]:
    """
    Shortcut for :meth:`AirParif.episodes`.
    Use :class:`AirParif` directly when several calls are made.
    """
    return AirParif(api_key).episodes()
