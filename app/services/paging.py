"""Offset pagination shared by the list endpoints."""

import math

from sqlalchemy.orm import Query


def page_of(query: Query, page: int, page_size: int) -> tuple[list, int, int]:
    """Return (rows, total, total_pages) for a 1-based page."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()
    return rows, total, math.ceil(total / page_size)
