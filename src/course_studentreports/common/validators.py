from __future__ import annotations

import re
from typing import Mapping, Optional

from ..core.exceptions import RequiredParameterError, ValidationError

_FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def required_int(params: Mapping, name: str) -> int:
    value = params.get(name)
    if value is None or str(value).strip() == "":
        raise RequiredParameterError(name)
    return _to_int(value, name)


def optional_int(params: Mapping, name: str, default: Optional[int] = None) -> Optional[int]:
    value = params.get(name)
    if value is None or str(value).strip() == "":
        return default
    return _to_int(value, name)


def optional_alpha(params: Mapping, name: str, default: str = "") -> str:
    """Keep letters only, like the platform's PARAM_ALPHA cleaning."""
    value = params.get(name)
    if value is None:
        return default
    return re.sub(r"[^A-Za-z]", "", str(value))


def _to_int(value, name: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid value for {name}")


def clean_filename(value: str) -> str:
    cleaned = _FILENAME_UNSAFE.sub("_", value.strip())
    return cleaned.strip("_") or "download"


def is_local_url(value: Optional[str]) -> bool:
    """Only same-site absolute paths are allowed as redirect targets."""
    if not value:
        return False
    return value.startswith("/") and not value.startswith("//")
