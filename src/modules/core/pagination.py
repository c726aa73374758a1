from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination reporting ``page`` / ``pages`` / ``total``.

    Clients choose the page size with ``?limit=`` (capped at 100).
    """

    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data) -> Response:
        return Response(
            {
                "results": data,
                "page": self.page.number,
                "pages": self.page.paginator.num_pages,
                "total": self.page.paginator.count,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["results", "page", "pages", "total"],
            "properties": {
                "results": schema,
                "page": {"type": "integer"},
                "pages": {"type": "integer"},
                "total": {"type": "integer"},
                "next": {"type": "string", "nullable": True, "format": "uri"},
                "previous": {"type": "string", "nullable": True, "format": "uri"},
            },
        }
