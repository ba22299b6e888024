"""Settings loading: defaults, then an optional YAML file, then environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from mediaforge.errors import InvalidInput
from mediaforge.models.config import Settings
from mediaforge.utils.io import read_yaml

ENV_VARS = {
    "GROQ_API_KEY": "groq_api_key",
    "REPLICATE_API_TOKEN": "replicate_api_token",
    "TRANSCRIPTION_PROVIDER": "transcription_provider",
    "MEDIAFORGE_TEMP_DIR": "temp_dir",
    "MEDIAFORGE_MAX_FILE_SIZE_MB": "max_file_size_mb",
    "MEDIAFORGE_CLEANUP_AFTER_HOURS": "cleanup_after_hours",
    "MEDIAFORGE_LOG_LEVEL": "log_level",
}
CONFIG_PATH_VAR = "MEDIAFORGE_CONFIG"


def load_settings(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings; environment variables win over the YAML file."""
    environ = os.environ if environ is None else environ
    config_path = config_path or environ.get(CONFIG_PATH_VAR)

    data: dict = {}
    if config_path:
        path = Path(config_path)
        if not path.is_file():
            raise InvalidInput(f"Config file not found: {path}")
        data.update(read_yaml(path))

    for var, field in ENV_VARS.items():
        value = environ.get(var)
        if value:
            data[field] = value

    try:
        return Settings(**data)
    except (ValidationError, TypeError) as e:
        raise InvalidInput(
            f"Invalid configuration: {e}",
            suggestion="Check the environment variables and config file values.",
        ) from e
