"""Load the garden configuration from a TOML file."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jdex_garden.core.render.templates import TEMPLATE_NAMES
from jdex_garden.errors import ConfigError

# Environment variable consulted when --config-file is not given.
CONFIG_ENV_VAR: str = "JDEX_CONFIG"

DEFAULT_SEPARATOR: str = "."


@dataclass(frozen=True)
class GardenConfig:
    """A parsed configuration file."""

    system_id: str
    name: str
    base_folder: Path
    hierarchy: str
    reference_folder: Path | None = None
    separator: str = DEFAULT_SEPARATOR
    templates: dict[str, str] = field(default_factory=dict)


def _require_str(data: dict[str, Any], key: str, source: str) -> str:
    value = data.get(key)
    if value is None:
        msg = f"{source}: missing required key {key!r}"
        raise ConfigError(msg)
    if not isinstance(value, str) or not value.strip():
        msg = f"{source}: {key!r} must be a non-empty string"
        raise ConfigError(msg)
    return value


def _parse_templates(data: dict[str, Any], source: str) -> dict[str, str]:
    fmt = data.get("format", {})
    if not isinstance(fmt, dict):
        msg = f"{source}: [format] must be a table"
        raise ConfigError(msg)
    unknown = sorted(set(fmt) - set(TEMPLATE_NAMES))
    if unknown:
        msg = f"{source}: unknown [format] keys {unknown!r}, expected some of {TEMPLATE_NAMES!r}"
        raise ConfigError(msg)
    for key, value in fmt.items():
        if not isinstance(value, str):
            msg = f"{source}: format.{key} must be a string"
            raise ConfigError(msg)
    return dict(fmt)


def parse_config(data: dict[str, Any], *, source: str = "<config>") -> GardenConfig:
    """Validate a decoded TOML document and build a GardenConfig.

    ``~`` in folder paths is expanded. An empty ``reference_folder`` counts as
    not configured.
    """
    reference = data.get("reference_folder")
    if reference is not None and not isinstance(reference, str):
        msg = f"{source}: 'reference_folder' must be a string"
        raise ConfigError(msg)

    separator = data.get("separator", DEFAULT_SEPARATOR)
    if not isinstance(separator, str):
        msg = f"{source}: 'separator' must be a string"
        raise ConfigError(msg)

    return GardenConfig(
        system_id=_require_str(data, "system_id", source).strip(),
        name=_require_str(data, "name", source).strip(),
        base_folder=Path(_require_str(data, "base_folder", source)).expanduser(),
        hierarchy=_require_str(data, "config", source),
        reference_folder=Path(reference).expanduser() if reference else None,
        separator=separator,
        templates=_parse_templates(data, source),
    )


def load_config(path: Path) -> GardenConfig:
    """Read and validate a TOML configuration file.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid UTF-8
            TOML, or lacks required keys.
    """
    path = path.expanduser()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        msg = f"Config file not found: {path}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e.strerror or e}"
        raise ConfigError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})"
        raise ConfigError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"{path}: {e}"
        raise ConfigError(msg) from e
    return parse_config(data, source=str(path))
