"""Django-style lookups.

Translates `field__lookup=value` keyword arguments into constraint models,
so that

    query.filter(age__gte=18, name__startswith="Al", tags__all=["a", "b"])

is shorthand for the equivalent `where_key` calls. `__` inside the field
part becomes `.` for nested keys; a key without a recognised lookup means
equality on the whole key.
"""

from typing import Any, Callable, Dict, List, Tuple

from .constraints import (
    ContainedAllIn,
    ContainedIn,
    EqualTo,
    EqualToSize,
    Existed,
    GreaterThan,
    GreaterThanOrEqualTo,
    LessThan,
    LessThanOrEqualTo,
    MatchedPattern,
    MatchedQuery,
    MatchedSubstring,
    NearbyPoint,
    NotContainedIn,
    NotEqualTo,
    NotExisted,
    NotMatchedQuery,
    PrefixedBy,
    SuffixedBy,
)

__all__ = (
    "LOOKUP_MAP",
    "parse_lookups",
)

LOOKUP_MAP: Dict[str, Callable[[Any], Any]] = {
    "eq": lambda v: EqualTo(value=v),
    "ne": lambda v: NotEqualTo(value=v),
    "gt": lambda v: GreaterThan(value=v),
    "gte": lambda v: GreaterThanOrEqualTo(value=v),
    "lt": lambda v: LessThan(value=v),
    "lte": lambda v: LessThanOrEqualTo(value=v),
    "in": lambda v: ContainedIn(array=v),
    "nin": lambda v: NotContainedIn(array=v),
    "all": lambda v: ContainedAllIn(array=v),
    "size": lambda v: EqualToSize(size=v),
    "exists": lambda v: Existed() if v else NotExisted(),
    "regex": lambda v: MatchedPattern(pattern=v),
    "contains": lambda v: MatchedSubstring(string=v),
    "startswith": lambda v: PrefixedBy(string=v),
    "endswith": lambda v: SuffixedBy(string=v),
    "near": lambda v: NearbyPoint(point=v),
    "inquery": lambda v: MatchedQuery(query=v),
    "notinquery": lambda v: NotMatchedQuery(query=v),
}


def _field_to_key(field: str) -> str:
    return field.replace("__", ".")


def parse_lookups(**lookups: Any) -> List[Tuple[str, Any]]:
    """Return `(key, constraint)` pairs for `field__lookup=value` arguments, in order."""
    result: List[Tuple[str, Any]] = []
    for name, value in lookups.items():
        if "__" in name:
            # Split from the right: "author__name__eq" -> field="author__name", lookup="eq"
            field, lookup = name.rsplit("__", 1)
            factory = LOOKUP_MAP.get(lookup)
            if factory is not None:
                result.append((_field_to_key(field), factory(value)))
                continue
        result.append((_field_to_key(name), EqualTo(value=value)))
    return result
