"""Successful Graph API response and pagination helpers."""

from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from fbgraph.graph_object import GraphObject
from fbgraph.url_utils import parse_query

if TYPE_CHECKING:
    from fbgraph.request import FacebookRequest


class FacebookResponse:
    def __init__(self, request: "FacebookRequest", response_data: Any, raw_response: str):
        self.request = request
        self.response = response_data
        self.raw_response = raw_response

    def __repr__(self) -> str:
        return f"<FacebookResponse for {self.request!r}>"

    def get_graph_object(self, cls: type[GraphObject] = GraphObject) -> GraphObject:
        return cls(self.response)

    def get_graph_object_list(self, cls: type[GraphObject] = GraphObject) -> list[GraphObject]:
        data = self.response.get("data") if isinstance(self.response, dict) else None
        if not isinstance(data, list):
            return []
        return [cls(item) for item in data]

    def get_request_for_next_page(self) -> "FacebookRequest | None":
        return self._handle_pagination("next")

    def get_request_for_previous_page(self) -> "FacebookRequest | None":
        return self._handle_pagination("previous")

    def _handle_pagination(self, direction: str) -> "FacebookRequest | None":
        """Build the request for the page Graph API linked under ``paging``.

        The new request keeps this request's session, method and path and
        takes its params from the paging URL's query string.
        """
        from fbgraph.request import FacebookRequest

        paging = self.response.get("paging") if isinstance(self.response, dict) else None
        if not isinstance(paging, dict) or not paging.get(direction):
            return None

        params = parse_query(urlsplit(paging[direction]).query)
        return FacebookRequest(
            self.request.session,
            self.request.method,
            self.request.path,
            params,
            self.request.version,
        )
