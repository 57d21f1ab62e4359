"""Page-number pagination shared by every list endpoint."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """``?page=`` plus a client-chosen ``?page_size=`` capped at 100.

    The default page size comes from ``REST_FRAMEWORK["PAGE_SIZE"]``.
    """

    page_size_query_param = "page_size"
    max_page_size = 100
