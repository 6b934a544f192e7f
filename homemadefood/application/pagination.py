import math

from homemadefood.core.exceptions import ValidationError

MAX_PAGE_SIZE = 100


def check_limit(limit: int) -> int:
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
    return limit


def page_offset(page: int, limit: int) -> int:
    """Validated offset for a 1-based page."""
    if page < 1:
        raise ValidationError("Page must be at least 1")
    return (page - 1) * check_limit(limit)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)
