"""
Main Application Entry Point

This module initializes the FastAPI application, sets up API routes, registers
the error responder, and attaches a fresh in-memory database.

Dependencies:
    - FastAPI for building the API
    - uvicorn for serving it
    - Application-specific modules (books, users, reviews)
"""
import logging

import uvicorn
from fastapi import FastAPI

from app.database import Database
from app.errors import register_error_handlers
from config import HOST, PORT, LOG_LEVEL, LOG_FORMAT, SEED_SAMPLE_DATA
from routes import books, users, reviews
import seed_data

logger = logging.getLogger(__name__)


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger; the level is applied even if a handler is already installed."""
    logging.basicConfig(level = level, format = LOG_FORMAT)
    logging.getLogger().setLevel(level)


setup_logging()


def create_app(seed: bool = False) -> FastAPI:
    """Build an application with its own, empty (or sample-seeded) database."""
    # -----------------------------------
    # FastAPI Application Initialization
    # -----------------------------------
    app = FastAPI(
        title="Book review API",
        description="A simple book review API for managing books, users and their reviews.",
        version="1.0.0"
    )
    app.state.db = Database()
    if seed:
        seed_data.seed(app.state.db)
        logger.info("Loaded sample data")

    register_error_handlers(app)

    # -----------------------------------
    # Register API Routes
    # -----------------------------------
    app.include_router(books.router)   # Book management routes
    app.include_router(users.router)   # User management routes
    app.include_router(reviews.router) # Review management routes

    # -----------------------------------
    # Root Endpoint
    # -----------------------------------
    @app.get("/", tags=["General"])
    def home():
        """Root endpoint that returns a welcome message."""
        return {"message": "Welcome to the Book review system"}

    return app


app = create_app(seed = SEED_SAMPLE_DATA)

if __name__ == "__main__":
    logger.info("App is running on http://localhost:%s", PORT)
    uvicorn.run(app, host = HOST, port = PORT)
