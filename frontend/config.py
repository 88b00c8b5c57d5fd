"""Runtime configuration for the content frontend.

Values are read from environment variables once, on first access, and
treated as immutable for the life of the process.

Environment variables:
    CONTENT_STORE_URL: Base URL of the upstream content store
    CONTENT_STORE_TIMEOUT: Upstream request timeout in seconds (default 4.0)
    DEFAULT_MAX_AGE: Cache lifetime when upstream sends none (default 900)
    DEFAULT_LOCALE: Locale served at the un-suffixed path (default "en")
    AVAILABLE_LOCALES: Comma-separated locale codes accepted in paths
    LOG_LEVEL: Root logging level (default INFO)
    STRATEGIES_FILE / EXPERIMENTS_FILE / TEMPLATES_DIR: Definition overrides
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

_PACKAGE_ROOT: Path = Path(__file__).parent

# Locales the platform publishes translations in
_DEFAULT_LOCALES = (
    "en,ar,az,be,bg,bn,cs,cy,da,de,dr,el,es,es-419,et,fa,fi,fr,gd,he,hi,hr,hu,"
    "hy,id,is,it,ja,ka,kk,ko,lt,lv,ms,mt,nl,no,pl,ps,pt,ro,ru,si,sk,sl,so,sq,"
    "sr,sv,sw,ta,th,tk,tr,uk,ur,uz,vi,zh,zh-hk,zh-tw"
)


class Settings(BaseModel):
    """Process-wide settings, frozen after construction."""

    model_config = {"frozen": True}

    content_store_url: str = "http://content-store.dev.gov.uk"
    content_store_timeout: float = Field(default=4.0, gt=0)
    default_max_age: int = Field(default=900, ge=0)
    default_locale: str = "en"
    available_locales: tuple[str, ...] = tuple(_DEFAULT_LOCALES.split(","))
    log_level: str = "INFO"
    strategies_file: Path = _PACKAGE_ROOT / "strategies" / "definitions" / "strategies.yaml"
    experiments_file: Path = _PACKAGE_ROOT / "experiments" / "definitions" / "experiments.yaml"
    templates_dir: Path = _PACKAGE_ROOT / "rendering" / "templates"
    schema_names_file: Path = _PACKAGE_ROOT / "rendering" / "definitions" / "schema_names.yaml"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, keeping defaults for unset ones."""
        values: dict = {}
        env_map = {
            "CONTENT_STORE_URL": "content_store_url",
            "CONTENT_STORE_TIMEOUT": "content_store_timeout",
            "DEFAULT_MAX_AGE": "default_max_age",
            "DEFAULT_LOCALE": "default_locale",
            "LOG_LEVEL": "log_level",
            "STRATEGIES_FILE": "strategies_file",
            "EXPERIMENTS_FILE": "experiments_file",
            "TEMPLATES_DIR": "templates_dir",
        }
        for env_name, field_name in env_map.items():
            raw = os.environ.get(env_name)
            if raw:
                values[field_name] = raw

        locales = os.environ.get("AVAILABLE_LOCALES")
        if locales:
            values["available_locales"] = tuple(
                code.strip() for code in locales.split(",") if code.strip()
            )

        return cls(**values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
