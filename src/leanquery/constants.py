"""
Wire-level constants shared by the query builder and the REST transport.
"""

from enum import Enum


class DistanceUnit(str, Enum):
    """Units accepted by the `$minDistanceIn<Unit>` / `$maxDistanceIn<Unit>` operators."""

    KILOMETERS = "Kilometers"
    MILES = "Miles"
    RADIANS = "Radians"


class HTTPMethod:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ConstraintKind:
    """Discriminator values of the constraint models."""

    INCLUDED = "included"
    SELECTED = "selected"
    EXISTED = "existed"
    NOT_EXISTED = "not_existed"

    EQUAL_TO = "equal_to"
    NOT_EQUAL_TO = "not_equal_to"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL_TO = "less_than_or_equal_to"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL_TO = "greater_than_or_equal_to"

    CONTAINED_IN = "contained_in"
    NOT_CONTAINED_IN = "not_contained_in"
    CONTAINED_ALL_IN = "contained_all_in"
    EQUAL_TO_SIZE = "equal_to_size"

    NEARBY_POINT = "nearby_point"
    NEARBY_POINT_WITH_RANGE = "nearby_point_with_range"
    NEARBY_POINT_WITH_RECTANGLE = "nearby_point_with_rectangle"

    MATCHED_QUERY = "matched_query"
    NOT_MATCHED_QUERY = "not_matched_query"
    MATCHED_QUERY_AND_KEY = "matched_query_and_key"
    NOT_MATCHED_QUERY_AND_KEY = "not_matched_query_and_key"

    MATCHED_PATTERN = "matched_pattern"
    MATCHED_SUBSTRING = "matched_substring"
    PREFIXED_BY = "prefixed_by"
    SUFFIXED_BY = "suffixed_by"

    ASCENDING = "ascending"
    DESCENDING = "descending"


# Special classes served from their own REST endpoints
CLASS_ENDPOINTS = {
    "_User": "users",
    "_Role": "roles",
    "_Installation": "installations",
}
