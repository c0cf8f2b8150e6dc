from __future__ import annotations


class Pager:
    """Previous / next controls for the product grid."""

    @staticmethod
    def can_go_previous(page: int) -> bool:
        return page > 1

    @staticmethod
    def can_go_next(page: int, total_pages: int) -> bool:
        return total_pages > 0 and page < total_pages

    @staticmethod
    def previous(page: int) -> int:
        return max(1, page - 1)

    @staticmethod
    def next(page: int, total_pages: int) -> int:
        # total_pages == 0 leaves the page where it is
        return max(1, min(total_pages, page + 1))

    @staticmethod
    def clamp(page: int, total_pages: int) -> int:
        return max(1, min(page, max(1, total_pages)))

    @staticmethod
    def label(page: int, total_pages: int) -> str:
        return f"Page {page} of {'-' if total_pages == 0 else total_pages}"
