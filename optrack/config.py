from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel


def _asdict(model: BaseModel) -> Dict[str, Any]:
    """Return model data as a plain ``dict`` for Pydantic v1 or v2."""
    if hasattr(model, "model_dump"):
        return model.model_dump()  # type: ignore[attr-defined]
    return model.dict()


class AppConfig(BaseModel):
    """Typed configuration loaded from YAML or environment."""

    LOG_LEVEL: str = "INFO"
    # Contract multiplier used when a trade string carries none
    DEFAULT_MULTIPLIER: int = 100
    DATE_DISPLAY_FORMAT: str = "%d %b %y"
    CURRENCY_SYMBOL: str = "$"
    TABLE_FORMAT: str = "simple"


_BASE_DIR = Path(__file__).resolve().parent.parent


def _load_env(path: Path) -> Dict[str, Any]:
    """Parse simple KEY=VALUE lines from an .env file."""
    data: Dict[str, Any] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, val = line.split("=", 1)
            data[key.strip()] = val.strip()
    return data


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
    return content or {}


def load_config() -> AppConfig:
    """Load configuration from .env or YAML file."""
    config_path = os.environ.get("OPTRACK_CONFIG")
    if config_path:
        path: Path | None = Path(config_path)
    else:
        candidates = [
            _BASE_DIR / "config.yaml",
            _BASE_DIR / "config.yml",
            _BASE_DIR / ".env",
        ]
        path = next((p for p in candidates if p.exists()), None)

    data: Dict[str, Any] = {}
    if path and path.exists():
        if path.suffix in {".yaml", ".yml"}:
            try:
                data = _load_yaml(path)
            except yaml.YAMLError:
                data = {}
        else:
            data = _load_env(path)

    cfg = {**_asdict(AppConfig()), **data}
    return AppConfig(**cfg)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    """Persist configuration to a YAML file."""
    if path is None:
        env_path = os.environ.get("OPTRACK_CONFIG")
        path = Path(env_path) if env_path else _BASE_DIR / "config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(_asdict(config), f)


CONFIG = load_config()
LOCK = threading.Lock()


def get(name: str, default: Any | None = None) -> Any:
    """Return configuration value for name with optional fallback.

    Both reads and writes are synchronized using ``LOCK`` so concurrent
    access from multiple threads is safe.
    """
    with LOCK:
        return getattr(CONFIG, name, default)


def reload() -> None:
    """Reload configuration from disk into the global CONFIG object."""
    global CONFIG
    with LOCK:
        CONFIG = load_config()


def update(values: Dict[str, Any], path: Path | None = None) -> None:
    """Update global configuration with provided key/value pairs and persist."""
    with LOCK:
        for key, val in values.items():
            if hasattr(CONFIG, key):
                setattr(CONFIG, key, val)
        save_config(CONFIG, path)


__all__ = ["AppConfig", "CONFIG", "get", "load_config", "reload", "save_config", "update"]
