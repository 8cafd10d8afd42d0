"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn storefront_gateway.main:app --reload

    # Production
    uvicorn storefront_gateway.main:app --host 0.0.0.0 --port 3000 --workers 1
"""

from storefront_gateway.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from storefront_gateway.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "storefront_gateway.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
