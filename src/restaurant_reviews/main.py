"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn restaurant_reviews.main:app --reload
"""

from restaurant_reviews.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from restaurant_reviews.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "restaurant_reviews.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
