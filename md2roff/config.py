"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_DIALECT, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LIST_DEPTH

VALID_DIALECTS = ("man", "mdoc", "mm", "mom")


@dataclass
class RoffConfig:
    """Configuration for converting Markdown to roff.

    Attributes:
        dialect: Macro package to target (``man``, ``mdoc``, ``mm`` or ``mom``).
        max_list_depth: Maximum number of nested lists.
        max_file_size: Maximum file size in bytes that will be processed.
        man_section: Manual section used when a document has no title line.
        man_source: Source field used when a document has no title line.
        mom_author: Author written into the mom preamble.
        mom_paper: Paper size written into the mom preamble.
        mom_printstyle: Print style written into the mom preamble.

    Examples:
        RoffConfig(dialect="mdoc", man_section="1")
    """

    dialect: str = DEFAULT_DIALECT

    # Title defaults
    man_section: str = "7"
    man_source: str = "document"
    mom_author: str = "md2roff"
    mom_paper: str = "A4"
    mom_printstyle: str = "TYPESET"

    # Limits
    max_list_depth: int = DEFAULT_MAX_LIST_DEPTH
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`dialect` must be one of: man, mdoc, mm, mom")
    """


def load_config(search_path: Path) -> RoffConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md2roff]`` table from `pyproject.toml` and the ``[md2roff]`` or
    ``[tool.md2roff]`` table from `.md2roff.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RoffConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md2roff")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".md2roff.toml",
            table_paths=[("md2roff",), ("tool", "md2roff")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RoffConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> RoffConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RoffConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return RoffConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return RoffConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RoffConfig) -> None:
    """Validate a `RoffConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the dialect is unknown, a title field is empty or not a
            string, or a numeric limit is not a positive integer.

    Examples:
        validate_config(RoffConfig(dialect="mom"))
    """
    if config.dialect not in VALID_DIALECTS:
        raise ConfigError(f"`dialect` must be one of: {', '.join(VALID_DIALECTS)}")

    for key in ("man_section", "man_source", "mom_author", "mom_paper", "mom_printstyle"):
        value = getattr(config, key)
        if not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")
        if not value.strip():
            raise ConfigError(f"`{key}` must not be empty")

    limits = {
        "max_list_depth": config.max_list_depth,
        "max_file_size": config.max_file_size,
    }
    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: RoffConfig, **overrides: object) -> RoffConfig:
    """Apply override values to a `RoffConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None are ignored.

    Returns:
        RoffConfig: New configuration with the overrides applied, or `config`
        itself when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `RoffConfig`.

    Examples:
        updated = apply_overrides(config, dialect="mdoc")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RoffConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        RoffConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), dialect="mom")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
