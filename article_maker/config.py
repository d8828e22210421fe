import os
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent


def _env(name: str, default: Optional[str] = None):
    # set-but-empty counts as unset
    return lambda: os.getenv(name) or default


class Settings(BaseModel):
    # env defaults are strings
    model_config = ConfigDict(validate_default=True)

    articles_dir: Path = Field(default_factory=_env("ARTICLES_DIR", "./articles"))
    static_dir: Path = Field(default_factory=_env("STATIC_DIR", str(PACKAGE_DIR / "static")))
    template_path: Optional[Path] = Field(default_factory=_env("ARTICLE_TEMPLATE_PATH"))
    articles_url_prefix: str = Field(default_factory=_env("ARTICLES_URL_PREFIX", "/articles"))
    host: str = Field(default_factory=_env("HOST", "0.0.0.0"))
    port: int = Field(default_factory=_env("PORT", "8080"))
    allowed_origins: List[str] = Field(
        default_factory=lambda: [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]
    )
    log_level: str = Field(default_factory=_env("LOG_LEVEL", "INFO"))
    app_version: str = Field(default_factory=_env("APP_VERSION", "0.1.0"))


def get_settings() -> Settings:
    return Settings()
