# evictiontracker/main.py
import time

from fastapi import FastAPI, Request

from evictiontracker.config import settings
from evictiontracker.core.logging_config import logger, setup_logging
from evictiontracker.intake.api.intake import router as intake_router
from evictiontracker.middleware.request_id import RequestIdMiddleware

# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title="EvictionTracker Intake", version="0.1.0")

setup_logging()
logger.info("startup", service="evictiontracker-intake", app_env=settings.app_env)

app.include_router(intake_router)


# ----------------------------------------------------
# Health
# ----------------------------------------------------
@app.get("/health", include_in_schema=True)
def health() -> dict:
    return {"status": "ok"}


# ----------------------------------------------------
# Logging middleware
# ----------------------------------------------------
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    start = time.time()

    request_id = getattr(request.state, "request_id", None) or request.headers.get(
        "X-Request-ID", "unknown"
    )
    client_ip = request.client.host if request.client else "unknown"

    bound_logger = logger.bind(
        request_id=request_id,
        ip=client_ip,
        endpoint=str(request.url.path),
        method=request.method,
    )

    bound_logger.info("request_started")
    response = await call_next(request)
    latency_ms = round((time.time() - start) * 1000, 2)

    bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
        "request_finished"
    )
    return response


# ----------------------------------------------------
# Middleware
# ----------------------------------------------------
app.add_middleware(RequestIdMiddleware)
