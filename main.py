import time
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from doccheck.api.config import router as config_router
from doccheck.api.project import router as project_router
from doccheck.core.config import DEFAULT_HOST, DEFAULT_PORT, LOG_DIR, LOG_LEVEL, get_web_dir
from doccheck.core.exceptions import ConfigError, ProjectPathError
from doccheck.utils.logging_config import setup_logging

setup_logging(level=LOG_LEVEL, log_dir=LOG_DIR)
logger = logging.getLogger("main")

app = FastAPI(title="doccheck API")


# ---------------------------------------------------------------------------
# Logging Middleware
# ---------------------------------------------------------------------------
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                "Request failed: %s %s - Error: %s (%.2fms)",
                request.method, request.url.path, e, process_time,
            )
            raise
        process_time = (time.time() - start_time) * 1000
        logger.info(
            "%s %s - Status: %d - Time: %.2fms",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


app.add_middleware(LoggingMiddleware)

# ---------------------------------------------------------------------------
# CORS: the web app may be served by its own dev server on another port
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# ---------------------------------------------------------------------------
# Error envelopes: every failure body is {"error": "..."}
# ---------------------------------------------------------------------------
def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    logger.warning("Rejected config: %s", exc)
    return _error_json(400, str(exc))


@app.exception_handler(ProjectPathError)
async def project_path_handler(request: Request, exc: ProjectPathError):
    logger.warning("Project unavailable: %s", exc)
    return _error_json(404, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", []))
        messages.append(f"{loc}: {err.get('msg', 'validation error')}")
    return _error_json(400, "Invalid request body: " + "; ".join(messages))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error_json(404, "Not found")
    return _error_json(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def generic_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_json(500, "Internal server error")


# Health endpoint
@app.get("/health")
async def health_check():
    return {"status": "ok"}


# Register routers
app.include_router(project_router)
app.include_router(config_router)

# Built web app, mounted last so /api routes take precedence
_web_dir = get_web_dir()
if _web_dir:
    app.mount("/", StaticFiles(directory=_web_dir, html=True), name="web")
    logger.info("Serving web app from %s", _web_dir)

if __name__ == "__main__":
    uvicorn.run("main:app", host=DEFAULT_HOST, port=DEFAULT_PORT, reload=True)
