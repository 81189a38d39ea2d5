"""
Main router that includes all endpoint routers
"""

from fastapi import APIRouter

from storefront_sitemap.api.endpoints import sitemap

# Create main router
api_router = APIRouter()

# Sitemaps are served from the site root
api_router.include_router(sitemap.router, tags=["sitemap"])
