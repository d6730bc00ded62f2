"""
This __init__.py file makes leanquery a Python package and exposes the
`Query` builder, the constraint models and the transport for easy access.
"""

from .client import HTTPTransport, Response, Transport
from .constants import DistanceUnit
from .query import Query
from .querydsl.constraints import (
    Ascending,
    ContainedAllIn,
    ContainedIn,
    Descending,
    EqualTo,
    EqualToSize,
    Existed,
    GreaterThan,
    GreaterThanOrEqualTo,
    Included,
    LessThan,
    LessThanOrEqualTo,
    MatchedPattern,
    MatchedQuery,
    MatchedQueryAndKey,
    MatchedSubstring,
    NearbyPoint,
    NearbyPointWithRange,
    NearbyPointWithRectangle,
    NotContainedIn,
    NotEqualTo,
    NotExisted,
    NotMatchedQuery,
    NotMatchedQueryAndKey,
    PrefixedBy,
    Selected,
    SuffixedBy,
)
from .registry import ObjectRegistry, registry
from .schema import Distance, GeoPoint, LCObject

__version__ = "0.1.0"

__all__ = [
    "Query",
    "LCObject",
    "GeoPoint",
    "Distance",
    "DistanceUnit",
    "ObjectRegistry",
    "registry",
    "Transport",
    "HTTPTransport",
    "Response",
    "Included",
    "Selected",
    "Existed",
    "NotExisted",
    "EqualTo",
    "NotEqualTo",
    "LessThan",
    "LessThanOrEqualTo",
    "GreaterThan",
    "GreaterThanOrEqualTo",
    "ContainedIn",
    "NotContainedIn",
    "ContainedAllIn",
    "EqualToSize",
    "NearbyPoint",
    "NearbyPointWithRange",
    "NearbyPointWithRectangle",
    "MatchedQuery",
    "NotMatchedQuery",
    "MatchedQueryAndKey",
    "NotMatchedQueryAndKey",
    "MatchedPattern",
    "MatchedSubstring",
    "PrefixedBy",
    "SuffixedBy",
    "Ascending",
    "Descending",
]
