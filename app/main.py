import uvicorn

from app.api.application import create_app
from app.config.settings import Settings
from app.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build the app -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(f"Server is running on http://{settings.host}:{settings.port}")
    Log.info(f"Health check: http://{settings.host}:{settings.port}/api/health")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
