"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Site settings loaded from environment variables."""

    content_dir: Path = Path("content")
    templates_dir: Path = Path("templates")
    schemes_dir: Path = Path("schemes")
    content_extension: str = ".md"
    allowed_extensions: list[str] = [
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".svg",
        ".webp",
        ".pdf",
    ]
    index_page: str = "index"
    error_page: str = "404"
    languages: list[str] = []
    default_language: str | None = None
    base_uri: str = "/"
    date_format: str = "%Y-%m-%d"
    site_title: str = "Flatwiki"

    model_config = SettingsConfigDict(
        env_prefix="FLATWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
