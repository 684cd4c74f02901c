"""
Optional YAML run configuration for wlscribe.

A config file carries the settings that tend to stay fixed for a project
(where the protocol headers live, the interface prefix, extra includes),
so the command line only has to name the protocol and the role:

    header-path: wayland/protocols
    prefix: zwp_
    includes:
      - wayland-client-core.h
"""

import yaml
from dataclasses import dataclass, field
from typing import List

KNOWN_KEYS = ("header-path", "prefix", "includes")


class ValidationError(Exception):
    """Raised when a config file fails validation."""
    pass


@dataclass
class ScribeConfig:
    """Parsed config file. Empty values mean "not set"."""
    header_path: str = ""
    prefix: str = ""
    includes: List[str] = field(default_factory=list)


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string")
    return value


def parse_config_yaml(yaml_str: str) -> ScribeConfig:
    """Parse a YAML config string into a ScribeConfig.

    An empty document yields the defaults.

    Raises:
        ValidationError: If the YAML is malformed, the root is not a
            mapping, a key is unknown or a value has the wrong type.
    """
    if not yaml_str or not yaml_str.strip():
        return ScribeConfig()

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML: {e}")

    if data is None:
        return ScribeConfig()
    if not isinstance(data, dict):
        raise ValidationError("YAML root must be a mapping")

    for key in data:
        if key not in KNOWN_KEYS:
            raise ValidationError(f"Unknown config key '{key}'")

    includes = data.get("includes")
    if includes is None:
        includes = []
    elif isinstance(includes, str):
        includes = [includes]
    elif not isinstance(includes, list) or not all(isinstance(i, str) for i in includes):
        raise ValidationError("'includes' must be a string or a list of strings")

    return ScribeConfig(
        header_path=_string(data, "header-path"),
        prefix=_string(data, "prefix"),
        includes=list(includes),
    )


def load_config(path: str) -> ScribeConfig:
    """Read and parse a config file.

    Raises:
        ValidationError: If the file cannot be read or fails validation.
    """
    try:
        with open(path) as f:
            text = f.read()
    except OSError as e:
        raise ValidationError(f"Cannot read config file {path}: {e.strerror}")
    return parse_config_yaml(text)
