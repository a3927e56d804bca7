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
Constants shared by the AirParif client
"""

DEFAULT_BASE_URL = "https://www.airparif.asso.fr/services/api/1.1"

REQUEST_TIMEOUT = 10
USER_AGENT = "airparif-python-client"

# Endpoints
INDEX_ENDPOINT = "indice"
INDEX_DAY_ENDPOINT = "indiceJour"
INDEX_CITY_ENDPOINT = "idxville"
EPISODE_ENDPOINT = "episode"

# Query parameters
KEY_PARAM = "key"
DATE_PARAM = "date"
CITIES_PARAM = "villes"

# Response members
DATE_KEY = "date"
INDEX_KEY = "indice"
MAP_URL_KEY = "url_carte"
INSEE_KEY = "ninsee"
POLLUTANTS_KEY = "polluants"
DETAIL_KEY = "detail"
EPISODE_TYPE_KEY = "type"
EPISODE_LEVEL_KEY = "niveau"
EPISODE_CRITERIA_KEY = "criteres"

GLOBAL_POLLUTANT = "global"

# Absolute dates returned by indiceJour, e.g. 09/08/2012
DAY_DATE_FORMAT = "%d/%m/%Y"

# Five digits, or 2A/2B followed by three digits for Corsica
INSEE_CODE_PATTERN = r"^(?:\d{5}|2[AB]\d{3})$"
