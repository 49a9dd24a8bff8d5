from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, markup
from .core.config import settings

logger = logging.getLogger("ginko_markup.backend")
logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s %(message)s")

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(markup.router, prefix="/api")

logger.info("Started %s (%s)", settings.app_name, settings.environment)


__all__ = ["app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ginko_markup.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
