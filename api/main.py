"""Media Browser preset store FastAPI application."""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from api.config import get_settings
from api.routers import presets
from config.logging_config import setup_logging

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Saved search presets and per-context default selections for the media browser",
)


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Middleware marking preset responses as uncacheable."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(NoCacheMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(presets.router, prefix="/api", tags=["Presets"])


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "endpoints": {
            "presets": "/api/presets",
            "defaults": "/api/defaults",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def main():
    """Serve the preset store with uvicorn."""
    setup_logging(log_level="DEBUG" if settings.debug else None)
    uvicorn.run("api.main:app", host="127.0.0.1", port=8000, reload=settings.debug)


if __name__ == "__main__":
    main()
