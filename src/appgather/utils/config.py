"""Config utility for persistent AppGather settings.

Settings live in ~/.config/appgather/config.toml (or $XDG_CONFIG_HOME). Uses
tomli/tomli-w for TOML parsing and writing. Values resolve with precedence
CLI > environment (APPGATHER_<KEY>) > config file > default.
"""

from pathlib import Path
from typing import Optional, TypeVar, Any, cast
import os

import tomli
import tomli_w

from appgather.models.walk import (
    DEFAULT_APP_ICON,
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_FILES,
    WalkerOptions,
)

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/appgather or $XDG_CONFIG_HOME/appgather
CONFIG_DIR = _xdg_config_home / "appgather"
CONFIG_FILE = CONFIG_DIR / "config.toml"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="walker.app_icon" will attempt
    ``data["walker"]["app_icon"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "APPGATHER_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "walker.app_thinning" -> "APPGATHER_WALKER_APP_THINNING".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce an env/config *value* to the type of *default* where possible."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    return cast(T, value)


def get_setting(key: str) -> Any | None:
    """Return the raw value stored for *key* in config.toml, or None."""
    return _lookup_nested(_read_config_file(), key)


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Args:
        key: Dotted key path, e.g. ``"walker.app_icon"``.
        value: TOML-serialisable value.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    table = data
    for part in parents:
        child = table.get(part)
        if not isinstance(child, dict):
            child = {}
            table[part] = child
        table = child
    table[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"walker.app_icon"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = get_setting(key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default


def resolve_walker_options(
    *,
    app_icon: Optional[str] = None,
    app_thinning: Optional[bool] = None,
    ignore_dirs: Optional[str] = None,
    ignore_files: Optional[str] = None,
) -> WalkerOptions:
    """Build WalkerOptions from CLI values, environment and config.toml.

    Raises:
        pydantic.ValidationError: If a resolved ignore pattern is not a valid
            regular expression.
    """
    return WalkerOptions(
        app_icon=resolve_setting(
            "walker.app_icon", default=DEFAULT_APP_ICON, cli_value=app_icon
        ),
        use_app_thinning=resolve_setting(
            "walker.app_thinning", default=False, cli_value=app_thinning
        ),
        ignore_dirs=resolve_setting(
            "walker.ignore_dirs", default=DEFAULT_IGNORE_DIRS, cli_value=ignore_dirs
        ),
        ignore_files=resolve_setting(
            "walker.ignore_files", default=DEFAULT_IGNORE_FILES, cli_value=ignore_files
        ),
    )
