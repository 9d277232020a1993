"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn shopadmin.main:app --reload

    # Production with gunicorn
    gunicorn shopadmin.main:app -w 4 -k uvicorn.workers.UvicornWorker
"""

from shopadmin.factory import create_app


app = create_app()


def run() -> None:
    """Run the service with uvicorn using the configured host and port."""
    import uvicorn

    from shopadmin.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "shopadmin.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
