"""Public client for the Oil Price API."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

from oilpriceapi.alerts import AlertsResource
from oilpriceapi.config import ClientConfig
from oilpriceapi.diesel import DieselResource
from oilpriceapi.engine import RequestEngine, Transport
from oilpriceapi.logging_utils import setup_logger
from oilpriceapi.validation import (
    AGGREGATION_INTERVALS,
    HISTORICAL_PERIODS,
    optional,
    require_choice,
    require_date,
    require_non_empty,
    require_positive_int,
)


class OilPriceAPI:
    """Client for commodity prices, commodity metadata, diesel prices and alerts.

    Example::

        client = OilPriceAPI(ClientConfig(api_key="..."))
        wti = client.get_latest_prices(commodity="WTI_USD")
        week = client.get_historical_prices(period="past_week", commodity="BRENT_CRUDE_USD")
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config
        if config.debug:
            setup_logger(debug=True)
        self.engine = RequestEngine(config, transport=transport, sleep=sleep)
        self.diesel = DieselResource(self.engine)
        self.alerts = AlertsResource(self.engine)

    def get_latest_prices(self, commodity: Optional[str] = None) -> List[Dict[str, Any]]:
        """Latest prices for all commodities, or only ``commodity`` (e.g. "WTI_USD")."""
        optional(commodity, require_non_empty, "Commodity code")
        return self.engine.execute("/v1/prices/latest", {"by_code": commodity})

    def get_historical_prices(
        self,
        period: Optional[str] = None,
        commodity: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        interval: Optional[str] = None,
        per_page: Optional[int] = None,
        page: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Historical prices for a period or a ``YYYY-MM-DD`` date range.

        Use ``interval="daily"`` or ``"weekly"`` for year-long queries to keep
        responses small.
        """
        optional(period, require_choice, HISTORICAL_PERIODS, "period")
        optional(commodity, require_non_empty, "Commodity code")
        optional(start_date, require_date, "start_date")
        optional(end_date, require_date, "end_date")
        optional(interval, require_choice, AGGREGATION_INTERVALS, "interval")
        optional(per_page, require_positive_int, "per_page")
        optional(page, require_positive_int, "page")

        params = {
            "period": period,
            "by_code": commodity,
            "start_date": start_date,
            "end_date": end_date,
            "interval": interval,
            "per_page": per_page,
            "page": page,
        }
        return self.engine.execute("/v1/prices/past_year", params)

    def get_commodities(self) -> Dict[str, Any]:
        """Metadata for every supported commodity, as ``{"commodities": [...]}``."""
        return self.engine.execute("/v1/commodities")

    def get_commodity_categories(self) -> Dict[str, Any]:
        """Commodity categories keyed by category id."""
        return self.engine.execute("/v1/commodities/categories")

    def get_commodity(self, code: str) -> Dict[str, Any]:
        require_non_empty(code, "Commodity code")
        return self.engine.execute(f"/v1/commodities/{quote(code, safe='')}")
