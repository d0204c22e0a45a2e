"""High-value constants for the Cariot MCP package."""

# Package metadata
PACKAGE_VERSION = "1.0.0"
SERVER_NAME = "cariot"
USER_AGENT = f"cariot-mcp/{PACKAGE_VERSION}"

# External API contract consts
DEFAULT_BASE_URL = "https://api.cariot.jp/api"
LOGIN_URL_PATH = "/login"
DRIVERS_URL_PATH = "/drivers"
VEHICLES_URL_PATH = "/vehicles"
DAILY_REPORTS_URL_PATH = "/daily_reports"
DAILY_REPORT_URL_PATH = "/daily_reports/report_no/{daily_report_no}"
DEVICE_SNAPSHOTS_URL_PATH = "/device_snapshots"
AUTH_TOKEN_HEADER = "x-auth-token"

# Business logic consts
AUTH_FAILED_MESSAGE = "Failed to authenticate with external API"
DEFAULT_TIMEZONE = "Asia/Tokyo"
NOT_APPLICABLE = "N/A"
