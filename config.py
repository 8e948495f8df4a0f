"""Storefront application settings."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv


DEFAULT_USER_ID = "mock-user-001"
DEFAULT_CATALOG_API_URL = "https://fakestoreapi.com"


@dataclass
class StorefrontConfig:
    """Settings for the storefront API."""

    secret_key: str
    project_root: Path
    database_url: str
    catalog_api_url: str
    catalog_timeout: float
    default_user_id: str
    log_level: str
    host: str = "0.0.0.0"
    port: int = 5000

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def product_data_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def settings_file(self) -> Path:
        return self.data_dir / "settings.json"

    @classmethod
    def load(cls) -> "StorefrontConfig":
        """Build settings from data/settings.json, falling back to the environment (.env included)."""

        load_dotenv()
        project_root = Path(__file__).resolve().parent
        settings = _load_settings_file(project_root / "data" / "settings.json")

        def pick(key: str, default: Any) -> Any:
            value = settings.get(key)
            if value is None:
                value = os.getenv(key)
            return default if value is None else value

        default_db = f"sqlite:///{project_root / 'data' / 'storefront.db'}"
        return cls(
            secret_key=str(pick("SECRET_KEY", "dev_secret")),
            project_root=project_root,
            database_url=str(pick("DATABASE_URL", default_db)),
            catalog_api_url=str(pick("CATALOG_API_URL", DEFAULT_CATALOG_API_URL)).rstrip("/"),
            catalog_timeout=_positive_float(pick("CATALOG_TIMEOUT", 3.0), "CATALOG_TIMEOUT"),
            default_user_id=str(pick("STOREFRONT_USER_ID", DEFAULT_USER_ID)),
            log_level=str(pick("LOG_LEVEL", "INFO")).upper(),
            host=str(pick("HOST", "0.0.0.0")),
            port=_port(pick("PORT", 5000)),
        )


def _load_settings_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid settings file: {path}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must hold a JSON object: {path}")
    return data


def _positive_float(value: Any, key: str) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {value!r}") from None
    if parsed <= 0:
        raise ValueError(f"{key} must be > 0")
    return parsed


def _port(value: Any) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"PORT must be an integer, got {value!r}") from None
    if not 0 < parsed < 65536:
        raise ValueError("PORT must be between 1 and 65535")
    return parsed
