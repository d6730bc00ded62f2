"""Constraint models.

Each constraint kind is a small frozen pydantic model tagged by a `kind`
literal. Together they form the `Constraint` discriminated union that
`Query.where_key` accepts. Sub-query operands are kept by reference, so an
embedded query is recompiled with its current state every time the outer
query compiles.
"""

import re
from typing import Annotated, Any, Callable, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..constants import ConstraintKind as K
from ..exceptions import InvalidConstraintError
from ..schema import Distance, GeoPoint

__all__ = (
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
    "build_predicate",
    "parse_constraint",
)


class _BaseConstraint(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class _QueryOperand(_BaseConstraint):
    query: Any = Field(..., description="Sub-query, held by reference.")

    @field_validator("query")
    @classmethod
    def _check_query(cls, value: Any) -> Any:
        if not callable(getattr(value, "to_json", None)):
            raise ValueError(f"expected a Query, got {type(value).__name__}")
        return value


# Key annotations
class Included(_BaseConstraint):
    kind: Literal["included"] = K.INCLUDED


class Selected(_BaseConstraint):
    kind: Literal["selected"] = K.SELECTED


class Existed(_BaseConstraint):
    kind: Literal["existed"] = K.EXISTED


class NotExisted(_BaseConstraint):
    kind: Literal["not_existed"] = K.NOT_EXISTED


# Equality and comparison
class EqualTo(_BaseConstraint):
    kind: Literal["equal_to"] = K.EQUAL_TO
    value: Any


class NotEqualTo(_BaseConstraint):
    kind: Literal["not_equal_to"] = K.NOT_EQUAL_TO
    value: Any


class LessThan(_BaseConstraint):
    kind: Literal["less_than"] = K.LESS_THAN
    value: Any


class LessThanOrEqualTo(_BaseConstraint):
    kind: Literal["less_than_or_equal_to"] = K.LESS_THAN_OR_EQUAL_TO
    value: Any


class GreaterThan(_BaseConstraint):
    kind: Literal["greater_than"] = K.GREATER_THAN
    value: Any


class GreaterThanOrEqualTo(_BaseConstraint):
    kind: Literal["greater_than_or_equal_to"] = K.GREATER_THAN_OR_EQUAL_TO
    value: Any


# Arrays
class ContainedIn(_BaseConstraint):
    kind: Literal["contained_in"] = K.CONTAINED_IN
    array: List[Any]


class NotContainedIn(_BaseConstraint):
    kind: Literal["not_contained_in"] = K.NOT_CONTAINED_IN
    array: List[Any]


class ContainedAllIn(_BaseConstraint):
    kind: Literal["contained_all_in"] = K.CONTAINED_ALL_IN
    array: List[Any]


class EqualToSize(_BaseConstraint):
    kind: Literal["equal_to_size"] = K.EQUAL_TO_SIZE
    size: int = Field(..., ge=0)


# Geography
class NearbyPoint(_BaseConstraint):
    kind: Literal["nearby_point"] = K.NEARBY_POINT
    point: GeoPoint


class NearbyPointWithRange(_BaseConstraint):
    kind: Literal["nearby_point_with_range"] = K.NEARBY_POINT_WITH_RANGE
    point: GeoPoint
    min_distance: Optional[Distance] = None
    max_distance: Optional[Distance] = None


class NearbyPointWithRectangle(_BaseConstraint):
    kind: Literal["nearby_point_with_rectangle"] = K.NEARBY_POINT_WITH_RECTANGLE
    southwest: GeoPoint
    northeast: GeoPoint


# Sub-queries
class MatchedQuery(_QueryOperand):
    kind: Literal["matched_query"] = K.MATCHED_QUERY


class NotMatchedQuery(_QueryOperand):
    kind: Literal["not_matched_query"] = K.NOT_MATCHED_QUERY


class MatchedQueryAndKey(_QueryOperand):
    kind: Literal["matched_query_and_key"] = K.MATCHED_QUERY_AND_KEY
    key: str


class NotMatchedQueryAndKey(_QueryOperand):
    kind: Literal["not_matched_query_and_key"] = K.NOT_MATCHED_QUERY_AND_KEY
    key: str


# Strings
class MatchedPattern(_BaseConstraint):
    kind: Literal["matched_pattern"] = K.MATCHED_PATTERN
    pattern: str
    option: Optional[str] = None


class MatchedSubstring(_BaseConstraint):
    kind: Literal["matched_substring"] = K.MATCHED_SUBSTRING
    string: str


class PrefixedBy(_BaseConstraint):
    kind: Literal["prefixed_by"] = K.PREFIXED_BY
    string: str


class SuffixedBy(_BaseConstraint):
    kind: Literal["suffixed_by"] = K.SUFFIXED_BY
    string: str


# Ordering
class Ascending(_BaseConstraint):
    kind: Literal["ascending"] = K.ASCENDING


class Descending(_BaseConstraint):
    kind: Literal["descending"] = K.DESCENDING


Constraint = Annotated[
    Union[
        Included,
        Selected,
        Existed,
        NotExisted,
        EqualTo,
        NotEqualTo,
        LessThan,
        LessThanOrEqualTo,
        GreaterThan,
        GreaterThanOrEqualTo,
        ContainedIn,
        NotContainedIn,
        ContainedAllIn,
        EqualToSize,
        NearbyPoint,
        NearbyPointWithRange,
        NearbyPointWithRectangle,
        MatchedQuery,
        NotMatchedQuery,
        MatchedQueryAndKey,
        NotMatchedQueryAndKey,
        MatchedPattern,
        MatchedSubstring,
        PrefixedBy,
        SuffixedBy,
        Ascending,
        Descending,
    ],
    Field(discriminator="kind"),
]

_constraint_adapter = TypeAdapter(Constraint)

# Kinds compiled to a single `{operator: operand}` predicate
_COMPARISON_OPS = {
    K.NOT_EQUAL_TO: "$ne",
    K.LESS_THAN: "$lt",
    K.LESS_THAN_OR_EQUAL_TO: "$lte",
    K.GREATER_THAN: "$gt",
    K.GREATER_THAN_OR_EQUAL_TO: "$gte",
}

_ARRAY_OPS = {
    K.CONTAINED_IN: "$in",
    K.NOT_CONTAINED_IN: "$nin",
    K.CONTAINED_ALL_IN: "$all",
}

_QUERY_OPS = {
    K.MATCHED_QUERY: "$inQuery",
    K.NOT_MATCHED_QUERY: "$notInQuery",
}

_QUERY_KEY_OPS = {
    K.MATCHED_QUERY_AND_KEY: "$select",
    K.NOT_MATCHED_QUERY_AND_KEY: "$dontSelect",
}


def _nearby_with_range(c: NearbyPointWithRange) -> Dict[str, Any]:
    predicate: Dict[str, Any] = {"$nearSphere": c.point}
    if c.min_distance is not None:
        predicate[f"$minDistanceIn{c.min_distance.unit.value}"] = c.min_distance.value
    if c.max_distance is not None:
        predicate[f"$maxDistanceIn{c.max_distance.unit.value}"] = c.max_distance.value
    return predicate


_PREDICATE_BUILDERS: Dict[str, Callable[[Any], Dict[str, Any]]] = {
    K.EXISTED: lambda c: {"$exists": True},
    K.NOT_EXISTED: lambda c: {"$exists": False},
    K.EQUAL_TO_SIZE: lambda c: {"$size": c.size},
    K.NEARBY_POINT: lambda c: {"$nearSphere": c.point},
    K.NEARBY_POINT_WITH_RANGE: _nearby_with_range,
    K.NEARBY_POINT_WITH_RECTANGLE: lambda c: {"$within": {"$box": [c.southwest, c.northeast]}},
    K.MATCHED_PATTERN: lambda c: {"$regex": c.pattern, "option": c.option or ""},
    K.MATCHED_SUBSTRING: lambda c: {"$regex": re.escape(c.string)},
    K.PREFIXED_BY: lambda c: {"$regex": "^" + re.escape(c.string)},
    K.SUFFIXED_BY: lambda c: {"$regex": re.escape(c.string) + "$"},
}


def build_predicate(constraint: Constraint) -> Optional[Dict[str, Any]]:
    """Return the per-key predicate for `constraint`.

    Returns None for kinds that do not produce a predicate (key
    annotations, equality and ordering); those update query state instead.
    """
    kind = constraint.kind
    if kind in _COMPARISON_OPS:
        return {_COMPARISON_OPS[kind]: constraint.value}
    if kind in _ARRAY_OPS:
        return {_ARRAY_OPS[kind]: list(constraint.array)}
    if kind in _QUERY_OPS:
        return {_QUERY_OPS[kind]: constraint.query}
    if kind in _QUERY_KEY_OPS:
        return {_QUERY_KEY_OPS[kind]: {"query": constraint.query, "key": constraint.key}}
    builder = _PREDICATE_BUILDERS.get(kind)
    if builder is None:
        return None
    return builder(constraint)


def parse_constraint(value: Any) -> Constraint:
    """Return `value` as a constraint model.

    Accepts a constraint model or a mapping carrying a `kind` tag, e.g.
    `{"kind": "greater_than", "value": 18}`.

    Raises:
        InvalidConstraintError: If `value` is not a valid constraint
    """
    if isinstance(value, _BaseConstraint):
        return value
    if not isinstance(value, Mapping):
        raise InvalidConstraintError("Expected a constraint or a mapping", type=type(value).__name__)
    try:
        return _constraint_adapter.validate_python(dict(value))
    except PydanticValidationError as e:
        raise InvalidConstraintError("Invalid constraint", kind=value.get("kind"), errors=e.errors()) from e
