"""
Storefront Cart Application

Cart reconciliation and order totals for the storefront, served over a
thin HTTP API. Product and stock snapshots come from the catalog with each
request; carts are kept per identity in the configured storage medium.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

from .core.config import settings
from .routes import cart_router, checkout_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")
    logger.info(f"Cart storage backend: {settings.storage_backend}, currency: {settings.currency}")
    yield
    logger.info(f"{settings.app_name} shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Cart reconciliation and order-total derivation",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "cart": "/api/cart",
            "checkout": "/api/checkout/totals",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "storefront-cart"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront_cart.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
