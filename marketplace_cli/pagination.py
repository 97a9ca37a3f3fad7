"""
Page-by-page request shaping for list endpoints.

The API takes the cursor as a single JSON-encoded query value:
``pagination={"page":1,"pagesize":20}``.
"""

import json
from dataclasses import dataclass
from typing import Dict

from .logging_config import get_logger

logger = get_logger('pagination')


@dataclass
class Pagination:
    """Cursor for an accumulating fetch loop."""
    page: int = 1
    page_size: int = 20
    max_pages: int = 500

    def to_query_value(self) -> str:
        return json.dumps({"page": self.page, "pagesize": self.page_size}, separators=(',', ':'))

    def apply(self, params: Dict[str, str]) -> Dict[str, str]:
        """Return a copy of ``params`` with the pagination value for the current page."""
        paged = dict(params)
        paged['pagination'] = self.to_query_value()
        return paged

    def next_page(self) -> None:
        self.page += 1

    def is_complete(self, collected: int, total: int, last_page_size: int = None) -> bool:
        """
        Decide whether the loop has everything it needs.

        Args:
            collected: Items accumulated so far
            total: Item count most recently reported by the server
            last_page_size: Items in the page just received, if any

        Returns:
            True once ``collected >= total``, after an empty page, or once the
            page bound is reached
        """
        if collected >= total:
            return True
        if last_page_size == 0:
            logger.warning(f"Server reported {total} items but page {self.page} was empty; "
                           f"stopping with {collected}")
            return True
        if self.page >= self.max_pages:
            logger.warning(f"Stopped after {self.max_pages} pages with {collected} of {total} items")
            return True
        return False
