from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3001

    max_upload_size_bytes: int = 10 * 1024 * 1024
    min_text_length: int = 50
    extraction_timeout_seconds: float | None = None

    pdf_engine: str = "pdfplumber"

    ocr_engine: str = "tesseract"
    ocr_languages: str = "eng+ara+fra"
    ocr_max_concurrency: int = 2
    ocr_timeout_seconds: float | None = None

    analysis_provider: str = "gemini"
    analysis_api_key: str = ""
    analysis_model_name: str = "gemini-2.0-flash"
    analysis_base_url: str = ""
    analysis_temperature: float = 0.7
    analysis_timeout_seconds: float | None = None
