# core/pagination.py

from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """
    ?page=<n>&page_size=<n>; page_size is capped at max_page_size.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
