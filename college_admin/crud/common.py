# college_admin/crud/common.py
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Query

MAX_PAGE_SIZE = 100


def paginate(
    query: Query,
    *,
    search: str | None = None,
    search_columns=(),
    sort: str | None = None,
    sort_columns: dict | None = None,
    default_sort: str | None = None,
    order: str = "asc",
    limit: int = 20,
    offset: int = 0,
):
    """Substring search, whitelisted ordering and limit/offset for list endpoints."""
    if search and search_columns:
        pattern = f"%{search}%"
        query = query.filter(or_(*[column.ilike(pattern) for column in search_columns]))

    if sort_columns:
        column = sort_columns.get(sort) or sort_columns[default_sort]
        query = query.order_by(column.desc() if order == "desc" else column.asc())

    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return query.offset(max(0, offset)).limit(limit).all()


def apply_changes(obj, changes: dict):
    for key, value in changes.items():
        setattr(obj, key, value)
    obj.updated_at = datetime.utcnow()
    return obj
