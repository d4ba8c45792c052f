from __future__ import annotations

# roster/config.py
import os
import sys
from dataclasses import dataclass, field

import yaml

APP_NAME = "police-roster"
APP_VERSION = "0.1.0"
API_TITLE = f"{APP_NAME}-api"

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]


def project_root() -> str:
    return _PROJECT_ROOT


def read_config_yaml(path: str | None = None) -> dict:
    """Read config.yaml from the project root; a missing or broken file means no overrides."""
    cfg_path = path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    return cfg


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def is_packaged() -> bool:
    return os.environ.get("APP_ENV") == "production" or bool(getattr(sys, "frozen", False))


def user_data_dir() -> str:
    """Per-user application data directory (same locations a packaged desktop app uses)."""
    if sys.platform == "win32":
        base = os.environ.get("APPDATA") or os.path.expanduser(os.path.join("~", "AppData", "Roaming"))
    elif sys.platform == "darwin":
        base = os.path.expanduser(os.path.join("~", "Library", "Application Support"))
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser(os.path.join("~", ".config"))
    return os.path.join(base, APP_NAME)


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 8765
    ui_url: str = "http://localhost:5173"
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))


def load_settings(cfg: dict | None = None) -> Settings:
    # 优先级：环境变量 > config.yaml > 默认值
    cfg = read_config_yaml() if cfg is None else cfg
    s = Settings()
    host = os.environ.get("ROSTER_HOST") or cfg.get("host")
    if isinstance(host, str) and host.strip():
        s.host = host.strip()
    port = os.environ.get("ROSTER_PORT") or cfg.get("port")
    if port:
        s.port = int(port)
    ui_url = os.environ.get("ROSTER_UI_URL") or cfg.get("ui_url")
    if isinstance(ui_url, str) and ui_url.strip():
        s.ui_url = ui_url.strip().rstrip("/")
    level = os.environ.get("ROSTER_LOG_LEVEL") or cfg.get("log_level")
    if isinstance(level, str) and level.strip():
        s.log_level = level.strip().upper()
    origins = cfg.get("allowed_origins")
    if isinstance(origins, list) and origins:
        s.allowed_origins = [str(o) for o in origins]
    return s
