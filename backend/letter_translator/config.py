"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Handwritten Letter Translator"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 3000

    # CORS - built from frontend_port when empty
    cors_origins: list[str] = []

    # Model access. The key is required; its absence is reported as a
    # configuration error before any network call is attempted.
    gemini_api_key: Optional[str] = None
    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 8192

    # Page set limits
    max_pages: int = 5
    max_upload_size_mb: int = 10
    allowed_mime_types: list[str] = ["image/jpeg", "image/png", "image/webp"]

    # PDF export
    export_logo_path: Optional[Path] = None
    # TrueType font with glyphs for the letter scripts (Ge'ez, Telugu, Tamil)
    export_font_path: Optional[Path] = None
    export_attribution: str = "Translated with the Handwritten Letter Translator"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


settings = Settings()
