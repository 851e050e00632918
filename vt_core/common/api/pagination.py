from __future__ import annotations

import math

from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500


def _positive_int(raw, name: str, *, default: int) -> int:
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError({name: "Must be a positive integer."})
    if value < 1:
        raise ValidationError({name: "Must be a positive integer."})
    return value


class DefaultPagination(PageNumberPagination):
    """
    Offset pagination driven by ?page= and ?limit=.

    Unlike DRF's PageNumberPagination, a page past the end is not an error:
    it yields an empty `items` list with the real `total`.
    """
    page_size = DEFAULT_PAGE_SIZE
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = MAX_PAGE_SIZE

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.page_number = _positive_int(request.query_params.get(self.page_query_param), "page", default=1)
        self.limit = min(
            _positive_int(request.query_params.get(self.page_size_query_param), "limit", default=self.page_size),
            self.max_page_size,
        )
        self.total = queryset.count()

        offset = (self.page_number - 1) * self.limit
        if offset >= self.total:
            return []
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                "items": data,
                "total": self.total,
                "page": self.page_number,
                "limit": self.limit,
                "totalPages": math.ceil(self.total / self.limit) if self.total else 0,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["items", "total", "page", "limit", "totalPages"],
            "properties": {
                "items": schema,
                "total": {"type": "integer", "example": 123},
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": DEFAULT_PAGE_SIZE},
                "totalPages": {"type": "integer", "example": 3},
            },
        }


def paginate(request, queryset, serializer_class, *, paginator: PageNumberPagination | None = None) -> Response:
    """
    Shared pagination helper to enforce a stable contract:
      { items, total, page, limit, totalPages }
    """
    p = paginator or DefaultPagination()
    page = p.paginate_queryset(queryset, request)
    ser = serializer_class(page, many=True)
    return p.get_paginated_response(ser.data)
