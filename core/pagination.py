"""
Core — Pagination

Page-number paginator for reference lists. The modals request whole
lists at once (``page_size=1000``) so ``MAX_PAGE_SIZE`` is sized for
that; the page size actually applied and the page count are reported
next to ``count`` so a client can tell a truncated list from a full one.

@file core/pagination.py
"""

from rest_framework.pagination import PageNumberPagination

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardPagination(PageNumberPagination):
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        response = super().get_paginated_response(data)
        response.data['page_size'] = self.get_page_size(self.request)
        response.data['total_pages'] = self.page.paginator.num_pages
        return response
