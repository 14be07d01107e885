"""
FastAPI routes for daily and range reports.
Thin API layer over ReportService; every response uses the
{success, data} / {success, error, message} envelope.
"""
import re
from datetime import date, datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.exceptions import (
    ConfigurationError,
    DailyReportException,
    DataNotFoundError,
    DataSourceError,
    ValidationError,
)
from core.formatting import format_daily_report
from core.logger import setup_logger
from services.report_service import ReportService

logger = setup_logger(__name__)
settings = get_settings()

API_VERSION = "1.0.0"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Status code and error title per exception type, most specific first
ERROR_RESPONSES = [
    (ValidationError, 400, "Invalid request"),
    (DataNotFoundError, 404, "No data"),
    (DataSourceError, 502, "Spreadsheet unavailable"),
    (ConfigurationError, 500, "Service misconfigured"),
]

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Daily attendance, cargo, express and expense totals from the monthly report sheet",
    version=API_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Service instance
report_service = ReportService()


def success(data) -> dict:
    return {"success": True, "data": data}


def parse_date_param(value: str, field: str = "date") -> date:
    """
    Parse a YYYY-MM-DD request parameter.

    Raises:
        ValidationError: If the format or the date itself is invalid
    """
    if not value or not DATE_PATTERN.match(value):
        raise ValidationError(
            "Please use YYYY-MM-DD format (e.g., 2025-08-04)",
            details={field: value}
        )
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            "Please provide a valid date",
            details={field: value}
        )


@app.exception_handler(DailyReportException)
async def report_exception_handler(request: Request, exc: DailyReportException):
    """Map service exceptions to the error envelope."""
    status_code, title = 500, "Failed to generate report"
    for exc_type, code, error_title in ERROR_RESPONSES:
        if isinstance(exc, exc_type):
            status_code, title = code, error_title
            break

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": title, "message": exc.message, "details": exc.details}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Envelope for routing errors (unknown endpoint, wrong method)."""
    if exc.status_code == 404:
        message = f"The endpoint {request.method} {request.url.path} does not exist"
        return JSONResponse(
            status_code=404,
            content={"success": False, "error": "Endpoint not found", "message": message}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail), "message": str(exc.detail)}
    )


@app.get("/")
async def index():
    """API documentation."""
    return {
        "message": settings.app_name,
        "version": API_VERSION,
        "endpoints": {
            "GET /api/health": "Health check",
            "GET /api/report/today": "Get today's daily report",
            "GET /api/report/{date}": "Get daily report for specific date (YYYY-MM-DD format)",
            "GET /api/report/{date}/text": "Get daily report for specific date as plain text",
            "GET /api/report/range?start=&end=": "Get aggregated report for a date range",
            "GET /api/sheets": "List monthly sheets and the detected current sheet",
        },
        "examples": {
            "today": "/api/report/today",
            "specificDate": "/api/report/2025-08-04",
            "range": "/api/report/range?start=2025-08-01&end=2025-08-07",
        }
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "success": True,
        "message": f"{settings.app_name} is running",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/favicon.ico")
async def favicon():
    """Return empty response for favicon to avoid 404 errors."""
    return Response(status_code=204)


@app.get("/api/report/today")
def today_report():
    """Get today's daily report."""
    report = report_service.generate_daily_report(date.today())
    return success(report.to_dict())


@app.get("/api/report/range")
async def range_report(start: str = "", end: str = ""):
    """
    Get the aggregated report of an inclusive date range.

    Args:
        start: First day, YYYY-MM-DD
        end: Last day, YYYY-MM-DD
    """
    start_date = parse_date_param(start, "start")
    end_date = parse_date_param(end, "end")
    logger.info(f"Range report requested: {start_date} - {end_date}")

    report = await report_service.generate_range_report(start_date, end_date)
    return success(report.to_dict())


@app.get("/api/report/{date_param}")
def daily_report(date_param: str):
    """
    Get daily report for a specific date.

    Args:
        date_param: Date in YYYY-MM-DD format
    """
    target_date = parse_date_param(date_param)
    report = report_service.generate_daily_report(target_date)
    return success(report.to_dict())


@app.get("/api/report/{date_param}/text", response_class=PlainTextResponse)
def daily_report_text(date_param: str):
    """Get daily report for a specific date as plain text."""
    target_date = parse_date_param(date_param)
    report = report_service.generate_daily_report(target_date)
    return PlainTextResponse(format_daily_report(report))


@app.get("/api/sheets")
def list_sheets():
    """List monthly sheets and the one detected for today."""
    return success(report_service.list_sheets())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
