from fastapi import FastAPI

from app.api.routes import router
from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.processor import Processor, build_processor


def create_app(settings: Settings, processor: Processor | None = None) -> FastAPI:
    """Build the HTTP application around a single shared Processor."""
    if processor is None:
        processor = build_processor(settings)
    if not processor.is_analysis_configured():
        Log.warning(
            "Missing analysis API key: uploads will fail until ANALYSIS_API_KEY is set"
        )

    app = FastAPI(
        title="CV Analyzer",
        description="Extracts text from an uploaded CV and returns AI feedback",
        version="1.0.0",
    )
    app.state.processor = processor
    app.include_router(router)
    return app
