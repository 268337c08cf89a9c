"""Config utility for persistent MediaScan settings.

Settings live in ``$XDG_CONFIG_HOME/mediascan/config.toml`` (default
``~/.config/mediascan/config.toml``) and are read with tomli / written with
tomli-w. Example::

    [scan]
    media_type = "Audio"
    recursive = false

    [categories]
    audio = [".mka", ".dsf"]
    picture = [".cr2"]

Resolution order for any dotted key is CLI > env var > config file > default,
where the env var for ``scan.media_type`` is ``MEDIASCAN_SCAN_MEDIA_TYPE``.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, Dict, List, TypeVar, cast

import tomli
import tomli_w

from mediascan.models.core import Category

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "mediascan"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "MEDIASCAN_"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="scan.recursive" will attempt
    ``data["scan"]["recursive"]`` returning None if any level is missing.
    """
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "scan.media_type" -> "MEDIASCAN_SCAN_MEDIA_TYPE".
    """
    return prefix + dotted_key.replace(".", "_").upper()


def to_bool(value: Any) -> bool:
    """Interpret *value* as a boolean (true/false, yes/no, on/off, 1/0).

    Raises:
        ValueError: If the value is not one of the recognised words.
    """
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Expected true or false, got {value!r}")


def _coerce(value: Any, default: T) -> T:
    """Coerce a raw env/config *value* to the type of *default*.

    Numbers fall back to *default* when the value cannot be converted;
    booleans must be one of the words :func:`to_bool` accepts.
    """
    if isinstance(default, bool):
        return cast(T, to_bool(value))
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, int(value))
        return default
    if isinstance(default, float):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, float(value))
        return default
    if isinstance(default, str):
        return cast(T, str(value))
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"scan.recursive"``.
        default: Value to fall back to when no overrides found; also decides
            the type env/config values are coerced to.
        cli_value: Value passed from a CLI option (``None`` when not provided).

    Returns:
        The resolved value.

    Raises:
        ValueError: If a boolean setting holds an unrecognised word.
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def get_setting(key: str) -> Any | None:
    """Return the raw value stored for *key* in the config file, if any."""
    return _lookup_nested(_read_config_file(), key)


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Intermediate tables are created as needed. Existing keys are preserved.

    Raises:
        ValueError: If a parent of *key* already holds a non-table value.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    current = data
    for part in parents:
        node = current.setdefault(part, {})
        if not isinstance(node, dict):
            raise ValueError(f"Config key {part!r} is not a table")
        current = node
    current[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def load_category_overrides() -> Dict[Category, List[str]]:
    """Read extra extensions per category from the ``[categories]`` table.

    Table keys are category names, matched case-insensitively.

    Raises:
        ValueError: If a key names no real category or its value is not a
            list of strings.
    """
    table = _read_config_file().get("categories", {})
    if not isinstance(table, dict):
        raise ValueError("[categories] must be a table")

    by_name = {c.value.lower(): c for c in Category.real()}
    overrides: Dict[Category, List[str]] = {}
    for name, extensions in table.items():
        category = by_name.get(str(name).lower())
        if category is None:
            raise ValueError(f"Unknown category in config: {name}")
        if not isinstance(extensions, list) or not all(
            isinstance(e, str) for e in extensions
        ):
            raise ValueError(f"Extensions for {name} must be a list of strings")
        overrides[category] = extensions
    return overrides
