"""
FastAPI application entry point.
"""

import os

from fastapi import FastAPI

from pr_reviewer import __version__
from pr_reviewer.api import webhooks
from pr_reviewer.utils.logging import get_logger, setup_logging

# Configure structured logging
setup_logging(os.getenv("LOG_LEVEL", "INFO"))

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="GitHub PR Reviewer",
    description="AI review comments for GitHub pull requests",
    version=__version__,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "GitHub PR Reviewer API",
        "version": __version__,
        "docs": "/docs",
    }


# Include API routers
app.include_router(webhooks.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
