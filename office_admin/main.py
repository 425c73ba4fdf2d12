"""
FastAPI backend for the office administration panel
Offices, their working hours and days, time slots and job positions
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from office_admin.api import debug_api, job_positions_api, offices_api, time_slots_api
from office_admin.config import get_settings
from office_admin.services.errors import PayloadValidationError, SchedulingError
from office_admin.services.log_handler import configure_logging

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)

# ========== FASTAPI APP ==========

app = FastAPI(
    title="Office Admin Backend",
    description="Offices, working hours, time slots and job positions",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== ERROR HANDLERS ==========

@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    """Render domain errors as {success, error, detail}"""
    if exc.status_code >= 500:
        logger.error(f"Unhandled scheduling error on {request.url.path}: {exc.message}")
    body = {"success": False, "error": exc.code, "detail": exc.message}
    if isinstance(exc, PayloadValidationError):
        body["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies (wrong JSON types, unknown fields) are client errors too"""
    errors = [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "validation_error", "detail": "Invalid request", "errors": errors},
    )

# ========== ROUTERS ==========

app.include_router(offices_api.router)
app.include_router(time_slots_api.router)
app.include_router(job_positions_api.router)
app.include_router(debug_api.router)


def run():
    logger.info("🏥 Starting Office Admin Backend")
    logger.info(f"   Database: {settings.database_path}")
    logger.info(f"   Listening on http://{settings.host}:{settings.port} (docs at /docs)")
    uvicorn.run(app, host=settings.host, port=settings.port)

# ========== MAIN ==========

if __name__ == "__main__":
    run()
