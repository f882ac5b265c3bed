import tomllib
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .ir.declarations import DEFAULT_ATTRIBUTE_PATH

CONFIG_FILENAME = "ldmap.toml"

_KNOWN_KEYS = {"attribute_path", "default_generator"}


@dataclass(frozen=True)
class BuildConfig:
    """Build configuration.

    Examples in ldmap.toml:

        [build]
        attribute_path = "ld"
        default_generator = "summary"

    or in pyproject.toml:

        [tool.ldmap]
        attribute_path = "rdf"
    """

    attribute_path: str = DEFAULT_ATTRIBUTE_PATH  # only blocks under this path are parsed
    default_generator: str | None = None


def _config_table(path: Path, data: dict) -> dict:
    if path.name == "pyproject.toml":
        return data.get("tool", {}).get("ldmap", {})
    return data.get("build", {})


def load_config(path: Path) -> BuildConfig:
    """
    Load build configuration from ldmap.toml or pyproject.toml.

    Raises:
        ConfigError: If the file is not valid TOML or has unknown or mistyped keys
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    table = _config_table(path, data)

    unknown = sorted(set(table) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown keys in {path}: {', '.join(unknown)}")

    attribute_path = table.get("attribute_path", DEFAULT_ATTRIBUTE_PATH)
    if not isinstance(attribute_path, str) or not attribute_path:
        raise ConfigError(f"attribute_path in {path} must be a non-empty string")

    default_generator = table.get("default_generator")
    if default_generator is not None and not isinstance(default_generator, str):
        raise ConfigError(f"default_generator in {path} must be a string")

    return BuildConfig(attribute_path=attribute_path, default_generator=default_generator)


def find_config(start: Path) -> BuildConfig:
    """
    Look for ldmap.toml, then pyproject.toml, in `start` and its parents.

    Returns the defaults when neither file is found.
    """
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return load_config(candidate)
        pyproject = directory / "pyproject.toml"
        if pyproject.exists():
            return load_config(pyproject)
    return BuildConfig()
