"""
FastAPI main application module for the storefront sitemap service
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time
import logging

from storefront_sitemap.core.config import settings
from storefront_sitemap.api.api import api_router

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# Create FastAPI application
app = FastAPI(
    title="Storefront Sitemap API",
    description="Search engine sitemaps for the storefront catalog",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response

# Include sitemap routes
app.include_router(api_router)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": VERSION
    }

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "message": "Storefront Sitemap API",
        "version": VERSION,
        "sitemap": "/sitemap.xml",
        "health": "/health"
    }

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred"
        }
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storefront_sitemap.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
