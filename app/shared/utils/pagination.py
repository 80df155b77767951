# app/shared/utils/pagination.py

from typing import Any, Dict

from fastapi import Query
from fastapi_pagination import Page, Params

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def pagination_params(
        page: int = Query(1, ge=1, description="Page number, starting at 1"),
        limit: int = Query(
            DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"
        ),
) -> Params:
    return Params(page=page, size=limit)


def pagination_meta(page: Page) -> Dict[str, Any]:
    """Pagination block of list responses: {total, page, limit, pages}."""
    return {
        "total": page.total,
        "page": page.page,
        "limit": page.size,
        "pages": page.pages or 0,
    }
