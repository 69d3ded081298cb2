import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .. import __version__
from ..core.config import API_PORT, API_RATE_LIMIT, HOST, configure_logging
from ..core.state import get_composer, shutdown
from ..core.tools import TOOLS, call_tool, list_tools
from ..services.composer import ResponseComposer

# Configure logging for the application
configure_logging()
logger = logging.getLogger(__name__)

# The key function uses the client's IP address to identify them.
limiter = Limiter(key_func=get_remote_address)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    logger.info("Application startup: Red Alert API ready.")
    yield
    logger.info("Application shutdown: Closing upstream transport.")
    await shutdown()


app = FastAPI(
    title="Red Alert Service",
    description="HTTP access to the Pikud Haoref red alert tools: current alerts, history, locations, areas and categories.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add the Rate Limiter middleware
app.state.limiter = limiter


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Handles the exception when a rate limit is exceeded.

    This function is registered as an exception handler for RateLimitExceeded
    and returns a JSON response with a 429 status code.
    """
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests", "error": f"Rate limit exceeded: {exc.detail}"}
    )


app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.get("/", summary="Service Status")
async def root():
    """
    Provides a simple status message to confirm the service is running.
    """
    return {"message": "Welcome to the Red Alert Service"}


@app.get("/health", summary="Health Check")
async def health():
    return {"status": "ok", "service": "red-alert-api", "version": __version__}


@app.get("/api/tools", summary="List Tools")
async def tools():
    """Lists every tool with its description and argument schema."""
    return {"tools": list_tools()}


@app.post("/api/tools/{tool_name}", summary="Call Tool")
@limiter.limit(API_RATE_LIMIT)
async def invoke_tool(
    request: Request,
    tool_name: str,
    arguments: Optional[Dict[str, Any]] = Body(default=None),
    composer: ResponseComposer = Depends(get_composer),
):
    """
    Runs a tool and returns its JSON record.

    The request body holds the tool arguments, e.g. `{"location_name": "שדרות"}`
    for `get_location_info`. Failures are returned as a record with
    `"status": "error"`; unknown tool names get a 404.
    """
    if tool_name not in TOOLS:
        raise HTTPException(status_code=404, detail=f"Unknown operation: {tool_name}")
    return await call_tool(composer, tool_name, arguments)


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=API_PORT)
