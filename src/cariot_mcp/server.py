"""Cariot MCP server implementation."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from .client import CariotClient
from .config import Config, get_config
from .consts import SERVER_NAME
from .exceptions import ConfigurationError
from .log import setup_logging
from .models import ChartDataset, ChartType, Response
from .tools import Tools
from .utils import en_ja

logger = logging.getLogger("cariot-mcp.server")

DRIVER_NAME_DESCRIPTION = en_ja(
    "Driver name (partial match, put a space between family and given name)",
    "ドライバー名（部分一致。姓と名の間に必ずスペースを入れてください）",
)
DATE_FROM_DESCRIPTION = en_ja("Start date (yyyy-MM-dd)", "開始日 (yyyy-MM-dd)")
DATE_TO_DESCRIPTION = en_ja("End date (yyyy-MM-dd)", "終了日 (yyyy-MM-dd)")


def create_server(client: CariotClient, config: Config) -> FastMCP:
    """Create the MCP server with every tool bound to one shared client.

    Args:
        client: Authenticated Cariot client, closed when the server stops.
        config: Config instance.

    Returns:
        Configured FastMCP instance.
    """
    tools = Tools(client, config)

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await client.aclose()
            logger.info("Client disconnected")

    mcp = FastMCP(
        name=SERVER_NAME,
        instructions="""
        Cariot MCP server.

        This MCP server allows you to:
        1. Look up drivers and vehicles of a Cariot fleet.
        2. Read daily driving reports and analyze their alcohol checks.
        3. Get realtime position and state of devices.
        4. Turn the results into Chart.js configurations.
        """,
        log_level=config.log_level,
        lifespan=lifespan,
    )

    @mcp.tool(
        title=en_ja("Get Drivers", "ドライバー一覧取得"),
        description=en_ja(
            "Retrieves a list of all drivers' information.",
            "全ドライバーの情報をリストで取得します。",
        ),
    )
    async def get_drivers(
        driver_name: Annotated[
            str | None, Field(description=DRIVER_NAME_DESCRIPTION)
        ] = None,
        limit: Annotated[
            int | None,
            Field(
                ge=1,
                le=50,
                description=en_ja(
                    "Number of items to retrieve (default: 20, max: 50)",
                    "取得件数（デフォルト：20、最大：50）",
                ),
            ),
        ] = None,
    ) -> Response:
        logger.info(f"get_drivers called (driver_name={driver_name!r}, limit={limit})")
        return await tools.get_drivers(driver_name, limit)

    @mcp.tool(
        title=en_ja("Get Vehicles", "車両一覧取得"),
        description=en_ja(
            "Retrieves a list of all vehicles' information.",
            "全車両の情報をリストで取得します。",
        ),
    )
    async def get_vehicles(
        vehicle_name: Annotated[
            str | None,
            Field(description=en_ja("Vehicle name (partial match)", "車両名（部分一致）")),
        ] = None,
        limit: Annotated[
            int | None,
            Field(
                ge=1,
                le=50,
                description=en_ja(
                    "Number of items to retrieve (default: 20, max: 50)",
                    "取得件数（デフォルト：20、最大：50）",
                ),
            ),
        ] = None,
    ) -> Response:
        logger.info(
            f"get_vehicles called (vehicle_name={vehicle_name!r}, limit={limit})"
        )
        return await tools.get_vehicles(vehicle_name, limit)

    @mcp.tool(
        title=en_ja("Get Daily Reports", "運転報告一覧取得"),
        description=en_ja(
            "Retrieves a list of daily reports for all drivers within a specified date range.",
            "指定された日付範囲内の全ドライバーの日報をリストで取得します。",
        ),
    )
    async def get_daily_reports(
        driver_name: Annotated[
            str | None, Field(description=DRIVER_NAME_DESCRIPTION)
        ] = None,
        date_from: Annotated[str | None, Field(description=DATE_FROM_DESCRIPTION)] = None,
        date_to: Annotated[str | None, Field(description=DATE_TO_DESCRIPTION)] = None,
        limit: Annotated[
            int | None,
            Field(
                ge=1,
                le=500,
                description=en_ja(
                    "Number of results to retrieve (default: 100, max: 500)",
                    "取得件数 (デフォルト:100, 最大:500)",
                ),
            ),
        ] = None,
    ) -> Response:
        logger.info(
            f"get_daily_reports called (driver_name={driver_name!r}, "
            f"date_from={date_from}, date_to={date_to}, limit={limit})"
        )
        return await tools.get_daily_reports(driver_name, date_from, date_to, limit)

    @mcp.tool(
        title=en_ja("Get Daily Report", "運転報告詳細取得"),
        description=en_ja(
            "Retrieves a detailed daily report for a specific date and driver.",
            "指定された日付とドライバーの日報詳細を取得します。",
        ),
    )
    async def get_daily_report(
        daily_report_no: Annotated[
            str,
            Field(
                min_length=1,
                description=en_ja("Daily report number (required)", "日報番号 (必須)"),
            ),
        ],
    ) -> Response:
        logger.info(f"get_daily_report called for {daily_report_no}")
        return await tools.get_daily_report(daily_report_no)

    @mcp.tool(
        title=en_ja("Get Realtime", "リアルタイム情報取得"),
        description=en_ja(
            "Retrieves real-time information for the specified driver or vehicle.",
            "指定したドライバーまたは車両のリアルタイム情報を取得します。",
        ),
    )
    async def get_realtime(
        device_uids: Annotated[
            str,
            Field(
                description=en_ja(
                    "Comma separated device UID list (required).",
                    "取得するデバイスUIDのカンマ区切りリスト (必須)。",
                ),
            ),
        ],
    ) -> Response:
        logger.info(f"get_realtime called for {device_uids}")
        return await tools.get_realtime(device_uids)

    @mcp.tool(
        title=en_ja("Analyze Alcohol Checks", "アルコールチェック分析"),
        description=en_ja(
            "Analyzes alcohol check results from daily reports. Shows check status "
            "(before/middle/after), violations, check rate, and check statistics for "
            "drivers within a specified date range. Check rate is calculated based on "
            "whether both before and after checks are performed when driving (for past "
            "dates) or at least before check is performed (for current date).",
            "日報からアルコールチェック結果を分析します。指定された日付範囲内のドライバーの"
            "チェック状況(前/中/後)、違反、チェック率、およびチェック統計を表示します。"
            "チェック率は、運転時に乗車前と乗車後の両方のチェックが実施されているか(前日以前)、"
            "または少なくとも乗車前チェックが実施されているか(当日)に基づいて計算されます。",
        ),
    )
    async def analyze_alcohol_checks(
        driver_name: Annotated[
            str | None, Field(description=DRIVER_NAME_DESCRIPTION)
        ] = None,
        date_from: Annotated[str | None, Field(description=DATE_FROM_DESCRIPTION)] = None,
        date_to: Annotated[str | None, Field(description=DATE_TO_DESCRIPTION)] = None,
        limit: Annotated[
            int | None,
            Field(
                ge=1,
                le=100,
                description=en_ja(
                    "Number of results to retrieve (default: 20, max: 100)",
                    "取得件数 (デフォルト:20, 最大:100)",
                ),
            ),
        ] = None,
    ) -> Response:
        logger.info(
            f"analyze_alcohol_checks called (driver_name={driver_name!r}, "
            f"date_from={date_from}, date_to={date_to}, limit={limit})"
        )
        return await tools.analyze_alcohol_checks(
            driver_name, date_from, date_to, limit
        )

    @mcp.tool(
        title=en_ja("Generate Chart.js Configuration", "Chart.js設定データ生成"),
        description=en_ja(
            "Generates Chart.js configuration data based on input data. Supports bar, "
            "line, pie, doughnut, radar, and polarArea chart types. Returns a "
            "ChartConfiguration object that can be used directly with Chart.js. "
            "IMPORTANT: When using this tool, you MUST embed the generated object in "
            "your final response so that the client can use the data.",
            "入力データに基づいてChart.js設定データを生成します。bar、line、pie、doughnut、"
            "radar、polarAreaのグラフタイプをサポートします。Chart.jsで直接使用できる"
            "ChartConfigurationオブジェクトを返します。重要: このツールを使用する場合は、"
            "必ず最終的なレスポンスの中に生成されたオブジェクトを埋め込んでください。"
            "クライアントでそのデータを使用するためです。",
        ),
    )
    async def generate_chart_config(
        chart_type: Annotated[
            ChartType,
            Field(
                description=en_ja(
                    "Chart type (bar, line, pie, doughnut, radar, polarArea)",
                    "グラフタイプ（bar、line、pie、doughnut、radar、polarArea）",
                )
            ),
        ],
        labels: Annotated[
            list[str],
            Field(
                min_length=1,
                description=en_ja("Array of labels for the chart", "グラフのラベル配列"),
            ),
        ],
        datasets: Annotated[
            list[ChartDataset],
            Field(min_length=1, description=en_ja("Array of datasets", "データセット配列")),
        ],
        title: Annotated[
            str | None, Field(description=en_ja("Chart title", "グラフのタイトル"))
        ] = None,
        x_axis_label: Annotated[
            str | None,
            Field(
                description=en_ja(
                    "X-axis label (for bar, line, radar charts)",
                    "X軸ラベル（bar、line、radarグラフ用）",
                )
            ),
        ] = None,
        y_axis_label: Annotated[
            str | None,
            Field(
                description=en_ja(
                    "Y-axis label (for bar, line, radar charts)",
                    "Y軸ラベル（bar、line、radarグラフ用）",
                )
            ),
        ] = None,
    ) -> Response:
        logger.info(f"generate_chart_config called ({chart_type}, {len(labels)} labels)")
        return await tools.generate_chart_config(
            chart_type, labels, datasets, title, x_axis_label, y_axis_label
        )

    logger.info("MCP server created")
    return mcp


def main() -> None:
    """Main entry point."""
    config = get_config()
    setup_logging(config.log_level)

    try:
        client = CariotClient(config)
    except ConfigurationError as e:
        logger.error(f"Fatal error in main(): {e.message}")
        sys.exit(1)

    mcp = create_server(client, config)
    logger.info("Cariot MCP Server running on stdio")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
