import math
from typing import Dict

from sqlalchemy.orm import Query

from app.exceptions import NotFoundError


def paginate(query: Query, page: int, limit: int) -> Dict:
    """
    Slice a query into one page.

    The caller is responsible for a stable order_by on the query.

    Args:
        query: SQLAlchemy query, already filtered and ordered
        page: Page number (1-indexed)
        limit: Page size

    Returns:
        Dict with result, total, page, pages, limit

    Raises:
        NotFoundError: If the page holds no rows (empty set or page past the end)
    """
    total = query.count()
    pages = math.ceil(total / limit) if limit else 0
    offset = (page - 1) * limit
    items = query.offset(offset).limit(limit).all() if total > offset else []

    if not items:
        raise NotFoundError()

    return {
        "result": items,
        "total": total,
        "page": page,
        "pages": pages,
        "limit": limit,
    }
