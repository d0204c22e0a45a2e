"""MCP tools"""

import logging
from typing import Any

from . import api
from .alcohol import analyze_reports, today_in
from .charts import build_chart_config
from .client import CariotClient
from .config import Config
from .models import ChartDataset, ChartType, DailyReport, Response
from .utils import split_device_uids

logger = logging.getLogger("cariot-mcp.tools")


def _success(data: Any, message: str, **metadata) -> Response:
    return Response(
        status="success", message=message, data=data, metadata=metadata or None
    )


def _empty(message: str) -> Response:
    return Response(status="success", message=message)


class Tools:
    """MCP tools sharing one authenticated client"""

    def __init__(self, client: CariotClient, config: Config):
        self.client = client
        self.config = config
        logger.info("tools initialized")

    async def get_drivers(
        self, driver_name: str | None = None, limit: int | None = None
    ) -> Response:
        """List drivers"""
        try:
            response = await api.get_drivers(self.client, driver_name, limit)
            items = response.get("items") or []
            if not items:
                return _empty("API call successful but no drivers found.")
            return _success(response, f"Retrieved {len(items)} drivers", count=len(items))
        except Exception as e:
            return Response.from_error(e)

    async def get_vehicles(
        self, vehicle_name: str | None = None, limit: int | None = None
    ) -> Response:
        """List vehicles"""
        try:
            response = await api.get_vehicles(self.client, vehicle_name, limit)
            items = response.get("items") or []
            if not items:
                return _empty("API call successful but no vehicles found.")
            return _success(
                response, f"Retrieved {len(items)} vehicles", count=len(items)
            )
        except Exception as e:
            return Response.from_error(e)

    async def get_daily_reports(
        self,
        driver_name: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        limit: int | None = None,
    ) -> Response:
        """List daily reports"""
        try:
            response = await api.get_daily_reports(
                self.client, driver_name, date_from, date_to, limit
            )
            items = response.get("items") or []
            if not items:
                return _empty("API call successful but no daily reports found.")
            return _success(
                response, f"Retrieved {len(items)} daily reports", count=len(items)
            )
        except Exception as e:
            return Response.from_error(e)

    async def get_daily_report(self, daily_report_no: str) -> Response:
        """Get one daily report; per-ride GPS metrics are dropped"""
        try:
            report = await api.get_daily_report(self.client, daily_report_no)
            report = {
                **report,
                "rides": [
                    {key: value for key, value in ride.items() if key != "metrics"}
                    for ride in report.get("rides") or []
                ],
            }
            return _success(
                report,
                f"Retrieved daily report {daily_report_no}",
                daily_report_no=daily_report_no,
            )
        except Exception as e:
            return Response.from_error(e)

    async def get_realtime(self, device_uids: str) -> Response:
        """Get realtime device snapshots"""
        try:
            uids = split_device_uids(device_uids)
            response = await api.get_device_snapshots(self.client, uids)
            items = response.get("items") or []
            if not items:
                return _empty("API call successful but no realtime data found.")
            return _success(
                response, f"Retrieved {len(items)} device snapshots", count=len(items)
            )
        except Exception as e:
            return Response.from_error(e)

    async def analyze_alcohol_checks(
        self,
        driver_name: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        limit: int | None = None,
    ) -> Response:
        """Analyze alcohol checks of daily reports"""
        try:
            response = await api.get_daily_reports(
                self.client, driver_name, date_from, date_to, limit
            )
            items = response.get("items") or []
            if not items:
                return _empty("API call successful but no daily reports found.")

            reports = [DailyReport.model_validate(item) for item in items]
            summary = analyze_reports(reports, today_in(self.config.timezone))
            return _success(
                summary.model_dump(),
                f"Analyzed alcohol checks of {summary.total_reports} daily reports",
            )
        except Exception as e:
            return Response.from_error(e)

    async def generate_chart_config(
        self,
        chart_type: ChartType,
        labels: list[str],
        datasets: list[ChartDataset],
        title: str | None = None,
        x_axis_label: str | None = None,
        y_axis_label: str | None = None,
    ) -> Response:
        """Generate a Chart.js configuration"""
        try:
            chart = build_chart_config(
                chart_type, labels, datasets, title, x_axis_label, y_axis_label
            )
            return Response(
                status="success",
                message="Chart.js configuration generated",
                data={"chartData": chart},
                suggestions=[
                    "Embed the generated chartData object in your final response"
                ],
            )
        except Exception as e:
            return Response.from_error(e)
