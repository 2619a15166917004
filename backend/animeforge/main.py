import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from animeforge.core.config import settings
from animeforge.core.errors import StudioError
from animeforge.core.logging_config import setup_logging
from animeforge.db import init_db
from animeforge.api.routes import (
    auth,
    characters,
    drafts,
    functions,
    health,
    launchpad,
    panels,
    projects,
    provenance,
    studio,
)

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create DB tables on startup (for dev; later replace with Alembic)
init_db()

app = FastAPI(title=settings.PROJECT_NAME)


@app.exception_handler(StudioError)
async def studio_error_handler(request: Request, exc: StudioError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(health.router, prefix=settings.API_V1_PREFIX)
app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(projects.router, prefix=settings.API_V1_PREFIX)
app.include_router(launchpad.router, prefix=settings.API_V1_PREFIX)
app.include_router(studio.router, prefix=settings.API_V1_PREFIX)
app.include_router(characters.router, prefix=settings.API_V1_PREFIX)
app.include_router(panels.router, prefix=settings.API_V1_PREFIX)
app.include_router(functions.router, prefix=settings.API_V1_PREFIX)
app.include_router(provenance.router, prefix=settings.API_V1_PREFIX)
app.include_router(drafts.router, prefix=settings.API_V1_PREFIX)
