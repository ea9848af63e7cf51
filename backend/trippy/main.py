import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trippy.config import settings
from trippy.exceptions import TrippyError

# ─── Logging setup (file + console) ───
_log_level = getattr(logging, os.environ.get("LOG_LEVEL", settings.log_level).upper(), logging.INFO)

_handlers: list[logging.Handler] = [logging.StreamHandler()]
if settings.log_to_file:
    _LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
    _LOG_DIR.mkdir(exist_ok=True)
    _handlers.append(
        RotatingFileHandler(
            _LOG_DIR / "trippy.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
    )

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=_handlers,
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from trippy.routers import activities, budget, consensus, flights, generation, lodging, preferences

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Trippy",
    description="Group-consensus recommendation engine for collaborative trip planning",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrippyError)
async def trippy_error_handler(request: Request, exc: TrippyError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed ({exc.category}): {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.category}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
app.include_router(flights.router, prefix="/api/flights", tags=["flights"])
app.include_router(lodging.router, prefix="/api/lodging", tags=["lodging"])
app.include_router(consensus.router, prefix="/api/consensus", tags=["consensus"])
app.include_router(activities.router, prefix="/api/activities", tags=["activities"])
app.include_router(budget.router, prefix="/api/budget", tags=["budget"])
app.include_router(generation.router, prefix="/api", tags=["generation"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "trippy"}
