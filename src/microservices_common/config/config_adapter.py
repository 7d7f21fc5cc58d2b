"""Config adapters for YAML/JSON files and environment variable overrides."""
import os
from typing import Any, Dict

import yaml


class ConfigAdapter:
    """
    Configuration loading and adaptation between multiple sources.
    """

    @staticmethod
    def read_file(path: str) -> Dict[str, Any]:
        """
        Read a YAML or JSON configuration file into a dictionary.

        Raises:
            ValueError: for unsupported extensions or a non-mapping document
        """
        if not path.lower().endswith(('.yaml', '.yml', '.json')):
            raise ValueError(f"Unsupported config file format: {path}")
        # YAML is a superset of JSON
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return data

    @staticmethod
    def apply_env_overrides(config_dict: Dict[str, Any], env_prefix: str) -> Dict[str, Any]:
        """
        Override values from environment variables.

        Variables follow the format {env_prefix}__{field}__{nested_field}; the
        field path is matched case-insensitively against the config keys.

        Args:
            config_dict: Configuration values, modified in place
            env_prefix: Prefix for environment variables

        Returns:
            The updated dictionary
        """
        marker = f"{env_prefix}__"
        for env_var, value in os.environ.items():
            if not env_var.startswith(marker):
                continue
            parts = env_var[len(marker):].lower().split('__')
            target = config_dict
            for part in parts[:-1]:
                target = target.setdefault(part, {})
            target[parts[-1]] = value
        return config_dict
