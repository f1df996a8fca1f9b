"""
Settings loading.

The connection string lives in a JSON settings file read once at startup:

    {
      "ConnectionStrings": {"DataConnection": "sqlite:///data/careercloud.db"},
      "Repository": {"Backend": "orm"},
      "Logging": {"Level": "INFO", "Directory": "logs"}
    }

Only ``ConnectionStrings.DataConnection`` is required.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigurationError

DEFAULT_SETTINGS_FILE = "appsettings.json"
SETTINGS_ENV_VAR = "CAREERCLOUD_SETTINGS"

BACKENDS = ("sql", "orm")


class Settings:
    """Parsed settings file."""

    def __init__(
        self,
        connection_string: str,
        backend: str = "orm",
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        source: Optional[Path] = None,
    ):
        if backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown repository backend {backend!r}; expected one of {', '.join(BACKENDS)}"
            )
        self.connection_string = connection_string
        self.backend = backend
        self.log_level = log_level
        self.log_dir = log_dir
        self.source = source

    def __repr__(self) -> str:
        return f"Settings(backend={self.backend!r}, source={str(self.source)!r})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[Path] = None) -> "Settings":
        if not isinstance(data, dict):
            raise ConfigurationError("Settings root must be a JSON object")

        conn = (data.get("ConnectionStrings") or {}).get("DataConnection")
        if not isinstance(conn, str) or not conn.strip():
            raise ConfigurationError("Missing ConnectionStrings.DataConnection")

        repo = data.get("Repository") or {}
        logging_section = data.get("Logging") or {}
        log_dir = logging_section.get("Directory")

        return cls(
            connection_string=conn.strip(),
            backend=str(repo.get("Backend", "orm")).strip().lower(),
            log_level=str(logging_section.get("Level", "INFO")).upper(),
            log_dir=Path(log_dir) if log_dir else None,
            source=source,
        )


def settings_path(path: Optional[Path] = None) -> Path:
    """Resolve the settings file: explicit path, then $CAREERCLOUD_SETTINGS, then ./appsettings.json."""
    if path is not None:
        return Path(path)
    env_value = os.getenv(SETTINGS_ENV_VAR)
    if env_value:
        return Path(env_value)
    return Path.cwd() / DEFAULT_SETTINGS_FILE


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Read and validate the settings file.

    Args:
        path: Settings file; see settings_path() for the fallbacks

    Returns:
        Settings instance

    Raises:
        ConfigurationError: file absent, malformed JSON, or required values missing
    """
    p = settings_path(path)
    if not p.exists():
        raise ConfigurationError(f"Settings file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Settings file {p} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Settings file {p} could not be read: {e}") from e
    return Settings.from_dict(data, source=p)
