"""Price alerts: conditions on a commodity price with optional webhook delivery."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

from oilpriceapi.engine import RequestEngine
from oilpriceapi.errors import ResponseFormatError
from oilpriceapi.validation import (
    ALERT_OPERATORS,
    ValidationError,
    require_alert_name,
    require_choice,
    require_condition_value,
    require_cooldown,
    require_https_url,
    require_non_empty,
)

UPDATABLE_FIELDS = (
    "name",
    "commodity_code",
    "condition_operator",
    "condition_value",
    "webhook_url",
    "enabled",
    "cooldown_minutes",
    "metadata",
)


def _unwrap(response: Any, key: str) -> Any:
    if not isinstance(response, dict) or key not in response:
        raise ResponseFormatError(f"Alert response has no {key!r} field")
    return response[key]


def _alert_path(alert_id: Any) -> str:
    require_non_empty(alert_id, "Alert ID")
    return f"/v1/alerts/{quote(alert_id, safe='')}"


class AlertsResource:
    """Access to ``/v1/alerts``."""

    def __init__(self, engine: RequestEngine) -> None:
        self.engine = engine

    def list(self) -> List[Dict[str, Any]]:
        """All alerts of the authenticated user, including disabled ones."""
        return _unwrap(self.engine.execute("/v1/alerts"), "alerts")

    def get(self, alert_id: str) -> Dict[str, Any]:
        return _unwrap(self.engine.execute(_alert_path(alert_id)), "alert")

    def create(
        self,
        name: str,
        commodity_code: str,
        condition_operator: str,
        condition_value: float,
        webhook_url: Optional[str] = None,
        enabled: bool = True,
        cooldown_minutes: int = 60,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Create an alert that fires when the price meets the condition.

        ``cooldown_minutes`` is the minimum interval between two triggers.
        """
        require_alert_name(name)
        require_non_empty(commodity_code, "Commodity code")
        require_choice(condition_operator, ALERT_OPERATORS, "operator")
        require_condition_value(condition_value)
        if webhook_url is not None:
            require_https_url(webhook_url)
        require_cooldown(cooldown_minutes)

        body = {
            "price_alert": {
                "name": name,
                "commodity_code": commodity_code,
                "condition_operator": condition_operator,
                "condition_value": condition_value,
                "webhook_url": webhook_url,
                "enabled": enabled,
                "cooldown_minutes": cooldown_minutes,
                "metadata": metadata,
            }
        }
        return _unwrap(self.engine.execute("/v1/alerts", method="POST", body=body), "alert")

    def update(self, alert_id: str, **fields: Any) -> Dict[str, Any]:
        """Partially update an alert; only the given fields are sent.

        ``webhook_url`` and ``metadata`` may be None to clear them.
        """
        path = _alert_path(alert_id)
        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown alert fields {unknown}")
        if not fields:
            raise ValidationError("At least one field must be given to update an alert")

        if "name" in fields:
            require_alert_name(fields["name"])
        if "commodity_code" in fields:
            require_non_empty(fields["commodity_code"], "Commodity code")
        if "condition_operator" in fields:
            require_choice(fields["condition_operator"], ALERT_OPERATORS, "operator")
        if "condition_value" in fields:
            require_condition_value(fields["condition_value"])
        if fields.get("webhook_url") is not None:
            require_https_url(fields["webhook_url"])
        if "cooldown_minutes" in fields:
            require_cooldown(fields["cooldown_minutes"])

        response = self.engine.execute(path, method="PATCH", body={"price_alert": fields})
        return _unwrap(response, "alert")

    def delete(self, alert_id: str) -> None:
        """Permanently delete an alert."""
        self.engine.execute(_alert_path(alert_id), method="DELETE", expect_body=False)

    def test_webhook(self, webhook_url: str) -> Dict[str, Any]:
        """Ask the API to POST a test event to ``webhook_url``.

        The result carries ``success``, ``status_code`` and ``response_time_ms``.
        """
        require_https_url(webhook_url)
        return self.engine.execute("/v1/alerts/test_webhook", method="POST", body={"webhook_url": webhook_url})
