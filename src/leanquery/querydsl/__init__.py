"""Query DSL module.

Exports the constraint models accepted by `Query.where_key`, the
`field__lookup` translation used by `Query.filter`, and the compiler that
turns a query into request parameters.
"""

from .compiler import QueryCompiler, query_compiler
from .constraints import (
    Ascending,
    Constraint,
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
from .lookups import parse_lookups

__all__ = (
    "QueryCompiler",
    "query_compiler",
    "parse_lookups",
    "Constraint",
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
)
