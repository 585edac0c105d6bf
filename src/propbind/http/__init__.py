"""HTTP helpers for GraphQL request dispatch."""

from propbind.http.media_types import (
    ACCEPTABLE_MEDIA_TYPES,
    APPLICATION_JSON,
    GRAPHQL_MEDIA_TYPE,
    MediaType,
    is_application_graphql,
    parse_media_type,
)

__all__ = [
    "ACCEPTABLE_MEDIA_TYPES",
    "APPLICATION_JSON",
    "GRAPHQL_MEDIA_TYPE",
    "MediaType",
    "is_application_graphql",
    "parse_media_type",
]
