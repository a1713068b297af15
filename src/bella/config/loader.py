"""Config loader for YAML configuration files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from bella.config.models import BellaSettings
from bella.core.errors import ConfigError

logger = logging.getLogger(__name__)

_SECTIONS = ("loan", "contribution", "vocabulary", "confirmation", "vesting", "logging")


class ConfigLoader:
    """Load BellaSettings from YAML files."""

    @staticmethod
    def load(path: Path | str) -> BellaSettings:
        """Load configuration from YAML.

        Args:
            path: Path to a YAML file, or to a directory holding ``bella.yaml``
                / ``config.yaml`` (or any number of ``*.yaml`` files to merge)

        Returns:
            Parsed BellaSettings instance

        Raises:
            FileNotFoundError: If no config file exists at ``path``
            ConfigError: If the YAML or its content is invalid
        """
        config_path = Path(path)
        data: dict[str, Any] = {}

        if config_path.is_dir():
            yaml_file = config_path / "bella.yaml"
            if not yaml_file.exists():
                yaml_file = config_path / "config.yaml"

            if yaml_file.exists():
                data = _read_yaml(yaml_file)
            else:
                files = sorted(config_path.glob("*.yaml"))
                if not files:
                    raise FileNotFoundError(f"No config files found in {config_path}")

                for fpath in files:
                    chunk = _read_yaml(fpath)
                    for section in _SECTIONS:
                        if isinstance(chunk.get(section), dict):
                            data.setdefault(section, {}).update(chunk[section])
        else:
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
            data = _read_yaml(config_path)

        unknown = set(data) - set(_SECTIONS)
        if unknown:
            logger.warning(f"Ignoring unknown config sections: {sorted(unknown)}")
            data = {k: v for k, v in data.items() if k in _SECTIONS}

        try:
            return BellaSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(
                "Invalid configuration", path=str(config_path), errors=e.error_count()
            ) from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError("Malformed YAML", path=str(path)) from e

    if not isinstance(loaded, dict):
        raise ConfigError("Top-level YAML value must be a mapping", path=str(path))
    return loaded
