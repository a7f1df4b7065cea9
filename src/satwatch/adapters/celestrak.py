# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CelesTrak adapter: fetches OMM element records from the GP API.

External dependencies (urllib, json) are confined to this layer.

Data source:
    CelesTrak GP API — https://celestrak.org/NORAD/elements/gp.php
    Queried by international designator (INTDES) or by collection (GROUP).
"""
import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote

from satwatch.ports.catalog import CatalogSource


_log = logging.getLogger(__name__)

BASE_URL = "https://celestrak.org/NORAD/elements/gp.php"
DEFAULT_TIMEOUT_S = 10
USER_AGENT = "satwatch/0.1"


class CelesTrakAdapter(CatalogSource):
    """
    Fetches OMM records from CelesTrak's GP API.

    Collections (non-exhaustive):
        stations, weather, noaa, goes, resource, sarsat, dmc,
        gps-ops, glo-ops, galileo, beidou, science, geodetic,
        engineering, education, military, radar, cubesat

    Rate limiting: CelesTrak updates at most every 2 hours.
    """

    def __init__(self, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT_S):
        self._base_url = base_url
        self._timeout = timeout

    def fetch_by_designator(self, designator: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}?INTDES={quote(designator)}&FORMAT=JSON"
        return self._fetch_json(url)

    def fetch_collection(self, collection: str) -> list[dict[str, Any]]:
        url = f"{self._base_url}?GROUP={quote(collection)}&FORMAT=JSON"
        return self._fetch_json(url)

    def _fetch_json(self, url: str) -> list[dict[str, Any]]:
        """Fetch JSON data from CelesTrak API."""
        _log.debug("GET %s", url)
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                text = response.read().decode('utf-8')
        except urllib.error.HTTPError as e:
            raise ConnectionError(f"CelesTrak API error {e.code}: {e.reason}") from e
        except urllib.error.URLError as e:
            raise ConnectionError(f"CelesTrak connection failed: {e.reason}") from e
        except (OSError, http.client.HTTPException) as e:
            # Timeouts and truncated bodies while reading the response
            raise ConnectionError(f"CelesTrak read failed: {e!r}") from e

        if text.strip() == "No GP data found":
            return []
        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"CelesTrak returned malformed JSON: {e}") from e
        if not isinstance(records, list):
            raise ValueError(
                f"CelesTrak returned {type(records).__name__}, expected a list"
            )
        return records
