"""Geocoding through an OpenStreetMap Nominatim server."""

from __future__ import annotations

import requests

from agromarket.application.geocoding import Geocoder, GeocodingError
from agromarket.domain.exceptions import ValidationError
from agromarket.domain.model.value_objects import Coordinates

USER_AGENT = "agromarket/0.1"


class NominatimGeocoder(Geocoder):

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def locate(self, address: str) -> Coordinates | None:
        results = self._get("/search", {"q": address, "format": "json", "limit": 1})
        if not results:
            return None
        first = results[0]
        try:
            return Coordinates(float(first["lat"]), float(first["lon"]))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise GeocodingError(f"Unusable geocoder answer for {address!r}") from e

    def describe(self, coordinates: Coordinates) -> str | None:
        result = self._get(
            "/reverse",
            {
                "lat": coordinates.latitude,
                "lon": coordinates.longitude,
                "format": "json",
            },
        )
        if not isinstance(result, dict):
            return None
        return result.get("display_name") or None

    def _get(self, path: str, params: dict):
        try:
            response = self._session.get(
                f"{self._base_url}{path}",
                params=params,
                headers={"User-Agent": USER_AGENT},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise GeocodingError(f"Geocoding service is unavailable: {e}") from e

        if response.status_code != 200:
            raise GeocodingError(
                f"Geocoding service answered {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise GeocodingError("Geocoding service returned invalid JSON") from e
