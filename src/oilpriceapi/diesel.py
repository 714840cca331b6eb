"""Diesel prices: state averages and nearby stations."""

from __future__ import annotations

from typing import Any, Dict

from oilpriceapi.engine import RequestEngine
from oilpriceapi.errors import ResponseFormatError
from oilpriceapi.validation import MAX_STATION_RADIUS_METERS, require_in_range, require_state_code

DEFAULT_STATION_RADIUS_METERS = 8047  # 5 miles


class DieselResource:
    """Access to ``/v1/diesel-prices``."""

    def __init__(self, engine: RequestEngine) -> None:
        self.engine = engine

    def get_price(self, state: str) -> Dict[str, Any]:
        """Average diesel price for a two-letter US state code."""
        code = require_state_code(state)
        response = self.engine.execute("/v1/diesel-prices", {"state": code})
        if not isinstance(response, dict) or "regional_average" not in response:
            raise ResponseFormatError("Diesel price response has no regional_average")
        return response["regional_average"]

    def get_stations(self, lat: float, lng: float, radius: int = DEFAULT_STATION_RADIUS_METERS) -> Dict[str, Any]:
        """Stations within ``radius`` meters, with the regional average for comparison."""
        require_in_range(lat, -90, 90, "Latitude must be between -90 and 90")
        require_in_range(lng, -180, 180, "Longitude must be between -180 and 180")
        require_in_range(
            radius, 0, MAX_STATION_RADIUS_METERS, f"Radius must be between 0 and {MAX_STATION_RADIUS_METERS} meters"
        )
        return self.engine.execute(
            "/v1/diesel-prices/stations",
            method="POST",
            body={"lat": lat, "lng": lng, "radius": radius},
        )
