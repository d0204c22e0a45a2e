"""Cariot REST endpoints.

Each function builds the query for one resource and returns the raw JSON
payload; authentication and error propagation are handled by the client.
"""

import logging
from typing import Any
from urllib.parse import quote

from .client import CariotClient
from .consts import (
    DAILY_REPORT_URL_PATH,
    DAILY_REPORTS_URL_PATH,
    DEVICE_SNAPSHOTS_URL_PATH,
    DRIVERS_URL_PATH,
    VEHICLES_URL_PATH,
)
from .utils import drop_none

logger = logging.getLogger("cariot-mcp.api")


async def get_drivers(
    client: CariotClient,
    driver_name: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """List drivers, optionally filtered by (partial) name."""
    params = drop_none({"driver_name": driver_name, "limit": limit})
    return await client.get_json(DRIVERS_URL_PATH, params=params)


async def get_vehicles(
    client: CariotClient,
    vehicle_name: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """List vehicles, optionally filtered by (partial) name."""
    params = drop_none({"vehicle_name": vehicle_name, "limit": limit})
    return await client.get_json(VEHICLES_URL_PATH, params=params)


async def get_daily_reports(
    client: CariotClient,
    driver_name: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """List daily reports in a date range (dates are ``yyyy-MM-dd``)."""
    params = drop_none(
        {
            "driver_name": driver_name,
            "date_from": date_from,
            "date_to": date_to,
            "limit": limit,
        }
    )
    return await client.get_json(DAILY_REPORTS_URL_PATH, params=params)


async def get_daily_report(client: CariotClient, daily_report_no: str) -> dict[str, Any]:
    """Fetch one daily report with its rides, events and alcohol checks."""
    path = DAILY_REPORT_URL_PATH.format(daily_report_no=quote(daily_report_no, safe=""))
    return await client.get_json(path)


async def get_device_snapshots(
    client: CariotClient, device_uids: list[str]
) -> dict[str, Any]:
    """Fetch the realtime snapshot of each device."""
    logger.debug(f"Fetching snapshots for {len(device_uids)} device(s)")
    return await client.get_json(
        DEVICE_SNAPSHOTS_URL_PATH, params={"device_uid": ",".join(device_uids)}
    )
