import math
from typing import Any, List, Optional


def _is_blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, float) and math.isnan(v):
        return True
    return str(v).strip() == "" or str(v).lower() in {"null", "nan", "none"}


def to_int(v, default: Optional[int] = None) -> Optional[int]:
    try:
        if _is_blank(v):
            return default
        return int(float(v))
    except Exception:
        return default


def to_float(v, default: Optional[float] = None) -> Optional[float]:
    try:
        if _is_blank(v):
            return default
        return float(v)
    except Exception:
        return default


def to_str(v, default: str = "") -> str:
    return default if _is_blank(v) else str(v)


def to_bool(v, default: bool = False) -> bool:
    if _is_blank(v):
        return default
    if isinstance(v, str):
        return v.strip().lower() in {"true", "1", "yes", "y", "t"}
    return bool(v)


def to_list(v, sep: str = "|") -> List[str]:
    if isinstance(v, (list, tuple)):
        return [str(item) for item in v if not _is_blank(item)]
    if _is_blank(v):
        return []
    return [part.strip() for part in str(v).split(sep) if part.strip()]
