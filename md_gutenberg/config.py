"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE

OUTPUT_FORMATS = ("blocks", "json")


@dataclass
class ConvertConfig:
    """Configuration for converting Markdown files to Gutenberg blocks.

    Attributes:
        strip_ai_commentary: Remove assistant preamble and postamble lines.
        enhance: Expand ``<!-- @hint -->`` markers into custom blocks.
        output_format: ``"blocks"`` for raw block markup or ``"json"`` for the
            ``{"content": ...}`` payload served to the tool layer.
        max_file_size: Maximum input file size in bytes.

    Examples:
        ConvertConfig(enhance=True, output_format="json")
    """

    # Pipeline stages
    strip_ai_commentary: bool = False
    enhance: bool = False

    # Output
    output_format: str = "blocks"

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`output_format` must be one of: blocks, json")
    """


def load_config(search_path: Path) -> ConvertConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-gutenberg]`` table from `pyproject.toml` and the
    ``[md-gutenberg]`` or ``[tool.md-gutenberg]`` table from
    `.md-gutenberg.toml`. A `pyproject.toml` without the table does not stop
    the search. TOML files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConvertConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("drafts"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md-gutenberg")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".md-gutenberg.toml",
            table_paths=[("md-gutenberg",), ("tool", "md-gutenberg")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConvertConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ConvertConfig | None:
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
) -> ConvertConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ConvertConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys are conventionally kebab-case
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    known = {field.name for field in fields(ConvertConfig)}
    unknown = sorted(set(normalized) - known)
    if unknown:
        raise ConfigError(
            f"Invalid `[{table_display}]` settings in {config_file}: "
            f"unsupported keys {', '.join(unknown)}"
        )

    return ConvertConfig(**normalized)


def normalize_config(config: ConvertConfig) -> ConvertConfig:
    output_format = config.output_format
    if isinstance(output_format, str):
        output_format = output_format.strip().lower()
    return replace(config, output_format=output_format)


def validate_config(config: ConvertConfig) -> None:
    """Validate a `ConvertConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a flag is not a boolean, the output format is
            unsupported, or the size limit is not a positive integer.

    Examples:
        validate_config(ConvertConfig(output_format="json"))
    """
    config = normalize_config(config)

    _ensure_booleans(
        {
            "strip_ai_commentary": config.strip_ai_commentary,
            "enhance": config.enhance,
        }
    )

    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"`output_format` must be one of: {', '.join(OUTPUT_FORMATS)}")

    _ensure_integers({"max_file_size": config.max_file_size})
    _ensure_positive({"max_file_size": config.max_file_size})


def apply_overrides(config: ConvertConfig, **overrides: object) -> ConvertConfig:
    """Apply override values to a `ConvertConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConvertConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ConvertConfig`.

    Examples:
        updated = apply_overrides(config, enhance=True, output_format=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConvertConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConvertConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), strip_ai_commentary=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
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


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")
