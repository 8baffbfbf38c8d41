"""
app/main.py -- FastAPI application entry point.

All routes registered under API_PREFIX (/loyalty/v1).
Host, port and log settings come from app.config.
"""
from __future__ import annotations

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app import config
from app.utils.logger import get_logger
from routes import dashboard as _dashboard_route
from routes import enrich as _enrich_route
from routes import filter as _filter_route
from routes import rewards as _rewards_route
from routes import validator as _validator_route

logger = get_logger(__name__)

# FastAPI app
app = FastAPI(
    title="Loyalty Rewards API",
    version="1.0.0",
    description="Reward points, monthly and total customer rewards for the loyalty dashboard.",
)

# ---------------------------------------------------------------------------
# Custom validation error handler -- return 400 with clean message
# ---------------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        # Pydantic v2 stores the message in "msg"
        msg = errors[0].get("msg", "Validation error")
        # Strip "Value error, " prefix added by Pydantic v2 for ValueError
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
    else:
        msg = "Validation error"
    logger.warning("Rejected %s: %s", request.url.path, msg)
    return JSONResponse(status_code=400, content={"detail": msg})


# ---------------------------------------------------------------------------
# Register routes
# ---------------------------------------------------------------------------

app.include_router(_dashboard_route.router, prefix=config.API_PREFIX)
app.include_router(_rewards_route.router, prefix=config.API_PREFIX)
app.include_router(_enrich_route.router, prefix=config.API_PREFIX)
app.include_router(_filter_route.router, prefix=config.API_PREFIX)
app.include_router(_validator_route.router, prefix=config.API_PREFIX)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run("app.main:app", host=config.HOST, port=config.PORT, reload=False)
