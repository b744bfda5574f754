from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """`page` / `limit` pagination returning items, total and page count."""
    page_size = settings.PAGE_SIZE
    page_query_param = 'page'
    page_size_query_param = 'limit'
    max_page_size = settings.MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            'results': data,
            'pagination': {
                'page': self.page.number,
                'limit': self.get_page_size(self.request),
                'total': self.page.paginator.count,
                'pages': self.page.paginator.num_pages,
            },
        })


def int_param(request, name, default, maximum=None):
    """Read a positive integer query parameter, falling back to the default."""
    try:
        value = int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    if maximum is not None:
        value = min(value, maximum)
    return value
