from __future__ import annotations

"""
Configuration Validation Service.

Ensures the configuration dictionary conforms to the expected schema before
it reaches the renderer. Handles type coercion and default value injection;
non-strict mode never raises and reports every correction as a warning.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from rich.errors import StyleSyntaxError
from rich.style import Style

from metatree.domain.config import get_default_config

logger = logging.getLogger(__name__)

_BOOL_FIELDS = (
    "show_file_size",
    "show_directory_size",
    "use_color",
    "list_padding_files",
)

_STYLE_FIELDS = (
    "directory_style",
    "file_style",
)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
        a list of warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        msg = f"Unknown config field '{key}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in _STYLE_FIELDS:
        merged[field] = _as_style(merged.get(field), defaults[field], field, warnings, strict)

    merged["max_entry_size"] = _as_width(
        merged.get("max_entry_size"), "max_entry_size", warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_style(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept only style definitions rich can parse."""
    if value is None:
        return fallback
    if not isinstance(value, str):
        msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    style = value.strip()
    try:
        Style.parse(style)
    except StyleSyntaxError as e:
        msg = f"Invalid style in '{field}': {e}"
        if strict:
            raise ValueError(msg) from e
        warnings.append(f"{msg}. Using fallback.")
        return fallback
    return style


def _as_width(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[int]:
    """Normalize a maximum display width; None means unbounded."""
    if value is None:
        return None

    if isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            value = int(s)

    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using unbounded width.")
        return None

    if value <= 0:
        msg = f"Invalid field '{field}': width must be positive, got {value}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using unbounded width.")
        return None

    return value
