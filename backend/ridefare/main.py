"""FastAPI application for the ride fare calculator."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ridefare.api.endpoints import router
from ridefare.config import settings
from ridefare.logging_setup import setup_logging

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Service information."""
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ridefare.main:app", host="0.0.0.0", port=8000, reload=True)
