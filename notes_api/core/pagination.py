"""
Pagination Utilities.

Page/limit arithmetic shared by list queries. Pages are 1-based;
anything below 1 is treated as the first page.
"""

from notes_api.core.exceptions import ValidationError

DEFAULT_PAGE = 0
DEFAULT_LIMIT = 50

# Largest OFFSET the database drivers can bind (signed 64-bit)
MAX_OFFSET = 2**63 - 1


def page_offset(page: int, limit: int) -> int:
    """
    Convert a page number into a row offset.

    Args:
        page: 1-based page number (0 and negatives mean the first page)
        limit: Page size

    Returns:
        Number of rows to skip

    Raises:
        ValidationError: If the offset does not fit in MAX_OFFSET
    """
    if page < 1:
        return 0
    offset = (page - 1) * limit
    if offset > MAX_OFFSET:
        raise ValidationError("Invalid page argument")
    return offset
