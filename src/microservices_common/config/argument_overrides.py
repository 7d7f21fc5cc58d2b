"""
Command-line property overrides.

Process arguments of the form ``--section.key=value`` override configuration
properties, the way a Spring Boot service accepts ``--server.port=7002``.
Anything else is left for the service and ignored here.
"""
from typing import Any, Dict, List, Sequence, Tuple

import yaml

ARGUMENT_PREFIX = "--"


def _coerce(raw: str) -> Any:
    """Interpret scalar values with YAML rules ("7002" -> 7002, "false" -> False)."""
    if raw == "":
        return raw
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return value if isinstance(value, (str, int, float, bool)) or value is None else raw


def parse_property_arguments(arguments: Sequence[str]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Split process arguments into property overrides and remaining arguments.

    Args:
        arguments: Raw process arguments, never modified

    Returns:
        Tuple of (nested override dictionary, arguments that are not overrides)

    Example:
        >>> parse_property_arguments(["--webapi.port=7012", "--verbose"])
        ({'webapi': {'port': 7012}}, ['--verbose'])
    """
    overrides: Dict[str, Any] = {}
    remaining: List[str] = []

    for argument in arguments:
        if not argument.startswith(ARGUMENT_PREFIX) or "=" not in argument:
            remaining.append(argument)
            continue
        key, raw_value = argument[len(ARGUMENT_PREFIX):].split("=", 1)
        path = [part.replace("-", "_") for part in key.split(".")]
        if not all(path):
            remaining.append(argument)
            continue

        target = overrides
        for part in path[:-1]:
            existing = target.get(part)
            if not isinstance(existing, dict):
                existing = {}
                target[part] = existing
            target = existing
        target[path[-1]] = _coerce(raw_value)

    return overrides, remaining
