"""Media types accepted by GraphQL endpoints.

A request whose Content-Type is ``application/graphql`` carries the raw query
document as its body; anything else (normally ``application/json``) carries a
structured payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from starlette.datastructures import Headers

GRAPHQL_MEDIA_TYPE = "application/graphql"
APPLICATION_JSON = "application/json"

ACCEPTABLE_MEDIA_TYPES: tuple[str, ...] = (GRAPHQL_MEDIA_TYPE, APPLICATION_JSON)

CONTENT_TYPE_HEADER = "content-type"


@dataclass(frozen=True, slots=True)
class MediaType:
    """A parsed ``type/subtype; key=value`` media type, lowercased."""

    type: str
    subtype: str
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def essence(self) -> str:
        return f"{self.type}/{self.subtype}"

    def includes(self, other: MediaType) -> bool:
        """Whether ``other`` falls within this type, ``*`` acting as a wildcard."""
        if self.type != "*" and self.type != other.type:
            return False
        return self.subtype == "*" or self.subtype == other.subtype


def parse_media_type(value: str | None) -> MediaType | None:
    """Parse a Content-Type value; None when missing or malformed."""
    if not value:
        return None
    essence, *raw_params = value.split(";")
    type_, sep, subtype = essence.strip().lower().partition("/")
    if not sep or not type_ or not subtype or "/" in subtype:
        return None

    parameters: dict[str, str] = {}
    for raw in raw_params:
        key, eq, val = raw.strip().partition("=")
        if eq and key:
            parameters[key.strip().lower()] = val.strip().strip('"')
    return MediaType(type_, subtype, parameters)


_GRAPHQL = MediaType("application", "graphql")


def is_application_graphql(headers: Headers | Mapping[str, str]) -> bool:
    """True if the request body is a raw GraphQL document."""
    if isinstance(headers, Headers):
        value = headers.get(CONTENT_TYPE_HEADER)
    else:
        # Plain mappings are not latin-1 encoded the way Headers(...) would
        value = next(
            (v for k, v in headers.items() if k.lower() == CONTENT_TYPE_HEADER),
            None,
        )
    content_type = parse_media_type(value)
    if content_type is None:
        return False
    return _GRAPHQL.includes(content_type)
