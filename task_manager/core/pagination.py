"""Pagination metadata for task listings."""

import math

from task_manager.schemas.common import PaginationMeta


def build_pagination_meta(current_page: int, limit: int, total_count: int) -> PaginationMeta:
    """totalPages = ceil(totalCount / limit); next/prev flags derived from the current page."""
    total_pages = math.ceil(total_count / limit)
    return PaginationMeta(
        current_page=current_page,
        total_pages=total_pages,
        total_count=total_count,
        has_next_page=current_page < total_pages,
        has_prev_page=current_page > 1,
        limit=limit,
    )
