"""
Application configuration loading.

Sources, lowest precedence first:

1. defaults declared on the config model
2. ``$CONFIG_DIR/application.yaml``
3. ``$CONFIG_DIR/application-{STAGE}.yaml``
4. ``{CONFIGCLASS}__section__key`` environment variables
5. ``--section.key=value`` process arguments

``${NAME}`` / ``${NAME:default}`` placeholders in file values are resolved
from the environment, and the STAGE variable always decides the stage.
"""
import os
import re
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Type, TypeVar

from dotenv import load_dotenv

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.config.argument_overrides import parse_property_arguments
from microservices_common.config.config_adapter import ConfigAdapter
from microservices_common.logging.bootstrap_logging import get_bootstrap_logger

T = TypeVar('T', bound=BaseApplicationConfig)

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r'\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}')
CONFIG_EXTENSIONS = ("yaml", "yml")
DEFAULT_STAGE = "local"


class ServiceConfigLoader:
    """Builds a validated application config from files, environment and arguments."""

    @staticmethod
    def load_config(
        config_class: Type[T],
        service_name: Optional[str] = None,
        arguments: Sequence[str] = (),
    ) -> T:
        """
        Load and validate the configuration of a service.

        Args:
            config_class: Pydantic model to validate into
            service_name: Service name used for bootstrap logging
            arguments: Process arguments; only ``--a.b=value`` entries are used

        Raises:
            FileNotFoundError: CONFIG_DIR or its application.yaml does not exist
            ValueError: a placeholder without default names an unset variable
            pydantic.ValidationError: the merged values do not fit the model
        """
        ServiceConfigLoader._load_dotenv()

        boot_log = get_bootstrap_logger(service_name or config_class.__name__.lower())
        stage = os.environ.get("STAGE")
        config_dir = os.environ.get("CONFIG_DIR")

        if config_dir:
            values = ServiceConfigLoader._read_config_dir(Path(config_dir), stage, boot_log)
        else:
            boot_log.info("CONFIG_DIR not set; using built-in defaults for %s", config_class.__name__)
            values = {}

        values = resolve_placeholders(values)
        ConfigAdapter.apply_env_overrides(values, env_prefix=config_class.__name__.upper())

        overrides, _ = parse_property_arguments(arguments)
        if overrides:
            merge_into(values, overrides)
            boot_log.info("Command-line overrides applied to: %s", ", ".join(sorted(overrides)))

        if stage:
            values["stage"] = stage

        config = config_class.model_validate(values)
        boot_log.info(
            "Configuration loaded (app=%s, version=%s, stage=%s)",
            config.app_name, config.version, config.stage,
        )
        return config

    @staticmethod
    def _read_config_dir(
        config_dir: Path, stage: Optional[str], boot_log: logging.Logger
    ) -> Dict[str, Any]:
        if not config_dir.is_dir():
            boot_log.error("Configuration directory not found: %s", config_dir)
            raise FileNotFoundError(f"Configuration directory not found: {config_dir}")

        base_file = find_config_file(config_dir, "application")
        if base_file is None:
            boot_log.error("No application.yaml in %s", config_dir)
            raise FileNotFoundError(f"Base configuration file not found: application.yaml in {config_dir}")
        values = ConfigAdapter.read_file(str(base_file))
        boot_log.info("Loaded %s", base_file)

        stage = stage or DEFAULT_STAGE
        stage_file = find_config_file(config_dir, f"application-{stage}")
        if stage_file is not None:
            merge_into(values, ConfigAdapter.read_file(str(stage_file)))
            boot_log.info("Applied stage file %s", stage_file)
        elif stage != DEFAULT_STAGE:
            boot_log.warning("No application-%s.yaml in %s; using base configuration only", stage, config_dir)
        return values

    @staticmethod
    def _load_dotenv() -> None:
        """Load ./.env without overriding variables that are already set."""
        env_file = Path(".env")
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            logger.debug(f"Loaded environment file {env_file.resolve()}")


def find_config_file(config_dir: Path, stem: str) -> Optional[Path]:
    for extension in CONFIG_EXTENSIONS:
        candidate = config_dir / f"{stem}.{extension}"
        if candidate.is_file():
            return candidate
    return None


def merge_into(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Recursively merge `source` into `target`; nested mappings are merged, the rest replaced."""
    for key, value in source.items():
        current = target.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merge_into(current, value)
        else:
            target[key] = value


def resolve_placeholders(value: Any) -> Any:
    """
    Replace ``${NAME}`` and ``${NAME:default}`` in every string of a nested structure.

        port: "${REVIEW_PORT:7003}"   # REVIEW_PORT if set, else "7003"
        token: "${API_TOKEN}"         # required
        suffix: "${SUFFIX:}"          # empty string when unset
    """
    if isinstance(value, dict):
        return {key: resolve_placeholders(item) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve_placeholders(item) for item in value]
    if isinstance(value, str):
        return PLACEHOLDER.sub(_placeholder_value, value)
    return value


def _placeholder_value(match: "re.Match[str]") -> str:
    name, default = match.group("name"), match.group("default")
    resolved = os.environ.get(name, default)
    if resolved is None:
        raise ValueError(f"Required secret '{name}' not found in environment and no default provided")
    return resolved
