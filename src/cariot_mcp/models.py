from enum import StrEnum
from typing import Annotated, Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .exceptions import CariotMCPError

# =============================================================================
# UNIFIED RESPONSE MODEL
# =============================================================================
# Single response type for all MCP tools


class Response(BaseModel):
    """Unified response type for all MCP tools."""

    status: Literal["success", "error"] = Field(
        ..., description="Response status indicating outcome"
    )
    message: str = Field(..., description="Human-readable summary of the response")
    data: Any | None = Field(
        None,
        description="Response payload - raw API data or a computed result",
    )
    errors: list[str] = Field(
        default_factory=list, description="List of error messages"
    )
    suggestions: list[str] = Field(
        default_factory=list, description="Actionable suggestions for the user"
    )
    metadata: dict[str, Any] | None = Field(
        None, description="Additional context and domain-specific information"
    )

    @classmethod
    def from_error(cls, error: Exception) -> "Response":
        """Create Response from any Exception, with potentially helpful info for recovery.

        HTTP errors keep the original API error text so the LLM can report it.

        Args:
            error: Any Exception instance

        Returns:
            Response object with error details
        """
        if isinstance(error, CariotMCPError):
            return cls(
                status="error",
                message=error.message,
                errors=error.errors,
                suggestions=error.suggestions,
                metadata={**error.context, "exception_type": type(error).__name__},
            )
        elif isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            if status_code >= 500:
                message = f"Cariot server error ({status_code}): {str(error)}"
                suggestions = ["Try again later - the Cariot API may be unavailable"]
            elif status_code == 401:
                message = f"Authentication failed ({status_code}): {str(error)}"
                suggestions = ["Verify the configured Cariot API credentials"]
            elif status_code == 404:
                message = f"Resource not found ({status_code}): {str(error)}"
                suggestions = ["Check the identifier passed to the tool"]
            else:
                message = f"HTTP error ({status_code}): {str(error)}"
                suggestions = ["Check the request parameters and try again"]

            errors = [str(error)]
            body = _response_text(error.response)
            if body:
                errors.append(body)

            return cls(
                status="error",
                message=message,
                errors=errors,
                suggestions=suggestions,
                metadata={
                    "exception_type": type(error).__name__,
                    "status_code": status_code,
                    "url": str(error.response.url),
                },
            )
        elif isinstance(error, httpx.RequestError):
            metadata = {"exception_type": type(error).__name__}
            try:
                metadata["url"] = str(error.request.url)
            except RuntimeError:
                # .request is unset when the error was raised outside a send
                pass

            return cls(
                status="error",
                message=f"Network error: {str(error)}",
                errors=[str(error)],
                suggestions=[
                    "Check your internet connection",
                    "Try again - this may be a temporary network issue",
                ],
                metadata=metadata,
            )
        else:
            return cls(
                status="error",
                message=f"Failed to retrieve data: {str(error)}",
                errors=[str(error)],
                suggestions=["Check server logs for detailed information"],
                metadata={"exception_type": type(error).__name__},
            )


def _response_text(response: httpx.Response) -> str:
    """Best-effort body text of an error response."""
    try:
        text = response.text
    except (httpx.ResponseNotRead, AttributeError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


# =============================================================================
# CREDENTIAL MODELS
# =============================================================================
# Exactly one authentication mode is active per process.


class CredentialKind(StrEnum):
    """Authentication mode used for the login exchange."""

    API_KEY = "api_key"
    ACCESS_TOKEN = "access_token"
    ID_TOKEN = "id_token"


class ApiKeyCredentials(BaseModel):
    """Access key / secret pair, posted as the login body."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CredentialKind.API_KEY] = CredentialKind.API_KEY
    access_key: str
    access_secret: str = Field(..., repr=False)


class AccessTokenCredentials(BaseModel):
    """Bearer access token exchanged at ``/login/access_token``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CredentialKind.ACCESS_TOKEN] = CredentialKind.ACCESS_TOKEN
    token: str = Field(..., repr=False)


class IdTokenCredentials(BaseModel):
    """Identity token exchanged at ``/login/id_token``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CredentialKind.ID_TOKEN] = CredentialKind.ID_TOKEN
    token: str = Field(..., repr=False)


Credentials = Annotated[
    ApiKeyCredentials | AccessTokenCredentials | IdTokenCredentials,
    Field(discriminator="kind"),
]


# =============================================================================
# DAILY REPORT / ALCOHOL CHECK MODELS
# =============================================================================
# Only the fields the alcohol-check analysis reads are declared; everything
# else in the API payload is kept as extra data.


class AlcoholCheckSummary(BaseModel):
    """Before/middle/after alcohol checks attached to a daily report."""

    model_config = ConfigDict(extra="allow")

    before_check_datetime: int | None = None
    before_check_on_alcohol: bool | None = None
    middle_check_datetime: int | None = None
    middle_check_on_alcohol: bool | None = None
    after_check_datetime: int | None = None
    after_check_on_alcohol: bool | None = None


class DailyReport(BaseModel):
    """A row of ``GET /daily_reports``."""

    model_config = ConfigDict(extra="allow")

    daily_report_no: str
    driver_id: str = ""
    driver_name: str = ""
    date: str = ""
    distance: float = 0
    duration: float = 0
    alcohol_checks: AlcoholCheckSummary | None = None

    @field_validator(
        "driver_id", "driver_name", "date", "distance", "duration", mode="before"
    )
    @classmethod
    def null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """The API sends null for fields it has no value for."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class AlcoholCheck(BaseModel):
    """A single performed check."""

    datetime: int
    on_alcohol: bool


class AlcoholCheckAnalysis(BaseModel):
    """Per-report result of the alcohol check analysis."""

    driver_id: str
    driver_name: str
    date: str
    daily_report_no: str
    before_check: AlcoholCheck | None = None
    middle_check: AlcoholCheck | None = None
    after_check: AlcoholCheck | None = None
    has_violation: bool
    has_checked: bool
    has_driven: bool


class AnalysisSummary(BaseModel):
    """Aggregate of an alcohol check analysis over many reports."""

    total_reports: int
    checked_reports: int
    check_rate: str
    total_violations: int
    violation_rate: str
    checks: list[AlcoholCheckAnalysis]


# =============================================================================
# CHART MODELS
# =============================================================================

ChartType = Literal["bar", "line", "pie", "doughnut", "radar", "polarArea"]


class ChartDataset(BaseModel):
    """One Chart.js dataset as supplied by the caller."""

    label: str | None = Field(None, description="Dataset label / データセットのラベル")
    data: list[int | float] = Field(
        ..., min_length=1, description="Array of data values / データ値の配列"
    )
    background_color: str | list[str] | None = Field(
        None,
        description="Background color(s) for the dataset / データセットの背景色",
    )
    border_color: str | list[str] | None = Field(
        None, description="Border color(s) for the dataset / データセットの枠線色"
    )
    border_width: float | None = Field(
        None, description="Border width for the dataset / データセットの枠線幅"
    )
