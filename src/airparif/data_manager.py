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
HTTP access to the AirParif endpoints
"""

import logging
import re
from urllib.parse import urlencode

import requests

# Can't import the exceptions directly
import airparif
from airparif import const


_LOGGER = logging.getLogger(__name__)
_KEY_PATTERN = re.compile(rf"([?&]{const.KEY_PARAM}=)[^&]*")

class DataManager:
    """
    Performs GET requests against the AirParif API and decodes JSON bodies.
    Every call issues exactly one request, nothing is cached or retried.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = const.DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        request_timeout: float = const.REQUEST_TIMEOUT
    ):
        """
        Initialize the DataManager.

        :param api_key: AirParif API key, sent as the ``key`` query parameter
        :type api_key: str
        :param base_url: Root URL of the API, overridable for tests
        :type base_url: str
        :param session: HTTP session to reuse, a new one is created if omitted
        :type session: requests.Session, optional
        :param request_timeout: HTTP request timeout in seconds
        :type request_timeout: float
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._request_timeout = request_timeout


    @property
    def base_url(self) -> str:
        """Get the root URL requests are sent to."""
        return self._base_url


    def build_url(self, endpoint: str, params: dict[str, str] | None = None) -> str:
        """
        Build the full URL of an endpoint, API key included.

        :param endpoint: Endpoint path, e.g. ``indice``
        :type endpoint: str
        :param params: Extra query parameters, in order
        :type params: dict[str, str], optional
        :return: Prepared URL
        :rtype: str
        """
        query = dict(params or {})
        query[const.KEY_PARAM] = self._api_key

        # City lists are comma separated, commas are sent unescaped
        return f"{self._base_url}/{endpoint.lstrip('/')}?{urlencode(query, safe=',')}"


    def fetch_json(self, endpoint: str, params: dict[str, str] | None = None):
        """
        Query an endpoint and return its decoded JSON body.

        :param endpoint: Endpoint path, e.g. ``indice``
        :type endpoint: str
        :param params: Extra query parameters
        :type params: dict[str, str], optional
        :return: Decoded JSON (list or dict)
        :raises RequestError: If the request cannot be performed
        :raises CallError: If the HTTP status is not 2XX
        :raises ParseError: If the body is not valid JSON
        """
        url = self.build_url(endpoint, params)
        _LOGGER.debug("Querying %s", self._mask_key(url))

        headers = {
            "User-Agent": const.USER_AGENT,
            "Accept": "application/json"
        }

        try:
            response = self._session.get(url,
                headers=headers,
                timeout=self._request_timeout
            )
        except requests.exceptions.RequestException as exc:
            _LOGGER.warning("Request to %s failed: %s", self._mask_key(url), exc)
            raise airparif.RequestError(
                f"Error calling AirParif API: {exc}"
            ) from exc

        if not 200 <= response.status_code < 300:
            _LOGGER.warning(
                "Unexpected HTTP response from %s: Status %d",
                self._mask_key(url),
                response.status_code,
            )
            raise airparif.CallError(
                url=url,
                body=response.text,
                status=response.status_code
            )

        try:
            data = response.json()
        except ValueError as exc:
            _LOGGER.warning("Response from %s is not valid JSON: %s", self._mask_key(url), exc)
            raise airparif.ParseError(
                f"Error parsing JSON response: {exc}"
            ) from exc

        _LOGGER.debug("Received %s from %s", type(data).__name__, endpoint)
        return data


    def _mask_key(self, url: str) -> str:
        """Hide the API key before an URL is logged."""
        return _KEY_PATTERN.sub(r"\g<1>***", url)
