"""Command-line interface for the Oil Price API client."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, List

from oilpriceapi.client import OilPriceAPI
from oilpriceapi.config import ClientConfig, load_config
from oilpriceapi.diesel import DEFAULT_STATION_RADIUS_METERS
from oilpriceapi.errors import ConfigError
from oilpriceapi.validation import AGGREGATION_INTERVALS, HISTORICAL_PERIODS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oilpriceapi", description="Query commodity prices from the Oil Price API.")
    parser.add_argument("--config", help="Path to a YAML client config.")
    parser.add_argument("--api-key", help="API key (overrides the config file).")
    parser.add_argument("--base-url", help="API base URL.")
    parser.add_argument("--retries", type=int, help="Maximum number of retries.")
    parser.add_argument("--timeout-ms", type=int, help="Per-attempt timeout in milliseconds.")
    parser.add_argument("--debug", action="store_true", default=None, help="Log requests to stderr.")

    commands = parser.add_subparsers(dest="command", required=True)

    latest = commands.add_parser("latest", help="Latest prices.")
    latest.add_argument("--commodity", help="Commodity code, e.g. WTI_USD.")

    historical = commands.add_parser("historical", help="Historical prices.")
    historical.add_argument("--period", choices=HISTORICAL_PERIODS)
    historical.add_argument("--commodity")
    historical.add_argument("--start-date")
    historical.add_argument("--end-date")
    historical.add_argument("--interval", choices=AGGREGATION_INTERVALS)
    historical.add_argument("--per-page", type=int)
    historical.add_argument("--page", type=int)

    commands.add_parser("commodities", help="All supported commodities.")
    commands.add_parser("categories", help="Commodity categories.")

    commodity = commands.add_parser("commodity", help="A single commodity.")
    commodity.add_argument("code")

    diesel_price = commands.add_parser("diesel-price", help="State average diesel price.")
    diesel_price.add_argument("state")

    stations = commands.add_parser("diesel-stations", help="Nearby diesel stations.")
    stations.add_argument("--lat", type=float, required=True)
    stations.add_argument("--lng", type=float, required=True)
    stations.add_argument("--radius", type=int, default=DEFAULT_STATION_RADIUS_METERS)

    commands.add_parser("alerts", help="List price alerts.")
    return parser


def _load_client_config(args: argparse.Namespace) -> ClientConfig:
    overrides = {
        "api_key": args.api_key,
        "base_url": args.base_url,
        "max_retries": args.retries,
        "timeout_ms": args.timeout_ms,
        "debug": args.debug,
    }
    if args.config:
        return load_config(args.config, **overrides)
    if not args.api_key:
        raise ConfigError("An API key is required (use --api-key or --config).")
    return ClientConfig(**{key: value for key, value in overrides.items() if value is not None})


def _run(client: OilPriceAPI, args: argparse.Namespace) -> Any:
    if args.command == "latest":
        return client.get_latest_prices(commodity=args.commodity)
    if args.command == "historical":
        return client.get_historical_prices(
            period=args.period,
            commodity=args.commodity,
            start_date=args.start_date,
            end_date=args.end_date,
            interval=args.interval,
            per_page=args.per_page,
            page=args.page,
        )
    if args.command == "commodities":
        return client.get_commodities()
    if args.command == "categories":
        return client.get_commodity_categories()
    if args.command == "commodity":
        return client.get_commodity(args.code)
    if args.command == "diesel-price":
        return client.diesel.get_price(args.state)
    if args.command == "diesel-stations":
        return client.diesel.get_stations(lat=args.lat, lng=args.lng, radius=args.radius)
    return client.alerts.list()


def main(argv: List[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    try:
        client = OilPriceAPI(_load_client_config(args))
        result = _run(client, args)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
