"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class ViewerConfig:
    """Configuration for rendering Markdown documents in the terminal.

    Attributes:
        bullet: Glyph printed in front of bullet list items.
        strip_inline: Whether bold, italic, code and link markup is removed
            from rendered text.
        highlight: Whether code blocks are syntax highlighted.
        pager: Whether output is sent through the system pager.
        rule_width: Width in columns of a rendered horizontal rule.
        code_indent: Number of spaces prefixed to code block lines.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        ViewerConfig(bullet="-", highlight=False)
    """

    # Rendering
    bullet: str = "•"
    strip_inline: bool = True
    highlight: bool = True
    pager: bool = False
    rule_width: int = 40
    code_indent: int = 4

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`rule_width` must be a positive integer")
    """


def load_config(search_path: Path) -> ViewerConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.mdview]`` table from `pyproject.toml` and the ``[mdview]`` or
    ``[tool.mdview]`` table from `.mdview.toml` when present. TOML files that
    cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ViewerConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If a matching table is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "mdview")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".mdview.toml",
            table_paths=[("mdview",), ("tool", "mdview")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ViewerConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ViewerConfig | None:
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
) -> ViewerConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return ViewerConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ViewerConfig) -> None:
    """Validate a `ViewerConfig` instance.

    Raises:
        ConfigError: If the bullet glyph is empty, a flag is not a boolean, or a
            numeric setting is out of range.
    """
    if not isinstance(config.bullet, str) or not config.bullet:
        raise ConfigError("`bullet` must be a non-empty string")

    for key in ("strip_inline", "highlight", "pager"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    _ensure_integers(
        {
            "rule_width": config.rule_width,
            "code_indent": config.code_indent,
            "max_file_size": config.max_file_size,
        }
    )
    _ensure_positive({"rule_width": config.rule_width, "max_file_size": config.max_file_size})
    if config.code_indent < 0:
        raise ConfigError("`code_indent` must not be negative")


def apply_overrides(config: ViewerConfig, **overrides: object) -> ViewerConfig:
    """Apply override values to a `ViewerConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ViewerConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ViewerConfig`.

    Examples:
        updated = apply_overrides(config, bullet="-", highlight=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ViewerConfig:
    """Load, override, and validate configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), pager=True)
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
