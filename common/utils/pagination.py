import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..errors import InvalidInput


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12


def _parse_positive(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise InvalidInput("Invalid pagination parameters") from None
    if parsed < 1:
        raise InvalidInput("Invalid pagination parameters")
    return parsed


def normalize_paging(page: Optional[Any], limit: Optional[Any]) -> Tuple[int, int]:
    p = _parse_positive(page, DEFAULT_PAGE)
    ps = _parse_positive(limit, DEFAULT_LIMIT)
    return p, ps


def paginate(items: Sequence[Dict], page: int, limit: int) -> Tuple[List[Dict], Dict]:
    total = len(items)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit
    meta = {
        "currentPage": page,
        "totalPages": total_pages,
        "totalProducts": total,
        "hasMore": page < total_pages,
        "limit": limit,
    }
    return list(items[start:start + limit]), meta
