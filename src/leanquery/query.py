"""
Query builder and executor.

A `Query` accumulates constraints against one class, compiles them into
request parameters and runs them through a `Transport`, materializing
the returned rows as `LCObject` instances.

Typical usage:

    query = Query("Todo")
    query.where_key("priority", GreaterThanOrEqualTo(value=2))
    query.where_key("createdAt", Descending())
    query.limit = 10
    response, todos = query.find()
"""

from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from .client import Response, Transport, get_default_transport
from .constants import ConstraintKind as K
from .constants import HTTPMethod
from .exceptions import InvalidFieldError, SerializationError
from .logger import get_logger
from .querydsl.compiler import QueryCompiler, query_compiler
from .querydsl.constraints import Ascending, Constraint, Descending, Included, Selected, build_predicate, parse_constraint
from .querydsl.lookups import parse_lookups
from .registry import ObjectRegistry, registry as default_registry
from .schema import LCObject
from .types import JSONObject, Parameters

__all__ = ("Query",)


class Query:
    """Mutable query against a single class.

    Constraint state:
        - included / selected keys are sets
        - equality constraints accumulate in an insertion-ordered table and
          are re-projected in full as one `$and` array on every addition
        - any other predicate replaces the previous predicate of its key
        - ordering keys are concatenated in call order

    Sub-queries embedded through `MatchedQuery` and friends are held by
    reference and recompiled each time this query compiles. A query must not
    embed itself, directly or transitively.

    Attributes:
        limit: Maximum number of rows to return, None for the server default
        skip: Number of rows to skip, None for the server default
    """

    def __init__(
        self,
        class_name: str,
        *,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
        transport: Optional[Transport] = None,
        registry: Optional[ObjectRegistry] = None,
        compiler: Optional[QueryCompiler] = None,
    ) -> None:
        """Initialize a query.

        Args:
            class_name: Class (collection) to query
            limit: Maximum number of rows to return
            skip: Number of rows to skip
            transport: Transport for `find`; defaults to the process default transport
            registry: Object registry for materialization and endpoint lookup
            compiler: Compiler producing request parameters
        """
        if not class_name:
            raise InvalidFieldError("Class name is required", field="class_name", value=class_name)
        self._class_name = class_name
        self.limit = limit
        self.skip = skip

        self._included_keys: Set[str] = set()
        self._selected_keys: Set[str] = set()
        self._equality_table: Dict[str, Any] = {}
        self._ordered_keys: Optional[str] = None
        self._constraints: Dict[str, Any] = {}

        self._transport = transport
        self._registry = registry or default_registry
        self._compiler = compiler or query_compiler
        self.logger = get_logger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def included_keys(self) -> FrozenSet[str]:
        return frozenset(self._included_keys)

    @property
    def selected_keys(self) -> FrozenSet[str]:
        return frozenset(self._selected_keys)

    @property
    def equality_table(self) -> Dict[str, Any]:
        return dict(self._equality_table)

    @property
    def ordered_keys(self) -> Optional[str]:
        return self._ordered_keys

    @property
    def constraints(self) -> Dict[str, Any]:
        """Snapshot of the per-key constraint dictionary (values are not copied)."""
        return dict(self._constraints)

    @property
    def endpoint(self) -> str:
        return self._registry.class_endpoint(self._class_name)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            return get_default_transport()
        return self._transport

    # ------------------------------------------------------------------
    # Constraint building
    # ------------------------------------------------------------------
    def where_key(self, key: str, constraint: Constraint) -> "Query":
        """Add `constraint` on `key` and return the query.

        `constraint` is a constraint model or a mapping with a `kind` tag.

        Raises:
            InvalidConstraintError: If `constraint` cannot be parsed
        """
        constraint = parse_constraint(constraint)
        kind = constraint.kind

        if kind == K.INCLUDED:
            self._included_keys.add(key)
        elif kind == K.SELECTED:
            self._selected_keys.add(key)
        elif kind == K.EQUAL_TO:
            self._equality_table[key] = constraint.value
            self._constraints["$and"] = self._equality_pairs()
        elif kind == K.ASCENDING:
            self.append_ordered_key(key)
        elif kind == K.DESCENDING:
            self.append_ordered_key(f"-{key}")
        else:
            predicate = build_predicate(constraint)
            if predicate is not None:
                self.add_constraint(key, predicate)
        return self

    def add_constraint(self, key: str, predicate: Dict[str, Any]) -> None:
        """Set the predicate of `key`, replacing any previous one."""
        self._constraints[key] = predicate

    def append_ordered_key(self, ordered_key: str) -> None:
        """Append `ordered_key` (optionally `-`-prefixed) to the ordering clause."""
        if self._ordered_keys is None:
            self._ordered_keys = ordered_key
        else:
            self._ordered_keys += ordered_key

    def _equality_pairs(self) -> List[Dict[str, Any]]:
        return [{key: value} for key, value in self._equality_table.items()]

    # Convenience builders
    def filter(self, **lookups: Any) -> "Query":
        """Add constraints from `field__lookup=value` keyword arguments."""
        for key, constraint in parse_lookups(**lookups):
            self.where_key(key, constraint)
        return self

    def include(self, *keys: str) -> "Query":
        for key in keys:
            self.where_key(key, Included())
        return self

    def select(self, *keys: str) -> "Query":
        for key in keys:
            self.where_key(key, Selected())
        return self

    def order_by(self, *keys: str) -> "Query":
        """Add ordering keys; a leading `-` means descending."""
        for key in keys:
            if key.startswith("-"):
                self.where_key(key[1:], Descending())
            else:
                self.where_key(key, Ascending())
        return self

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------
    def to_json(self) -> Dict[str, Any]:
        """Compile the current state into request parameters.

        Raises:
            SerializationError: If a constraint operand has no JSON form
        """
        params = self._compiler.compile(self)
        self.logger.debug("Compiled %s query: %s", self._class_name, params)
        return params

    def to_json_value(self) -> Dict[str, Any]:
        """JSON value of this query when embedded in another query."""
        return self.to_json()

    def to_expr(self) -> str:
        return self._compiler.to_expr(self)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def process_results(self, results: Sequence[JSONObject], class_name: Optional[str] = None) -> List[LCObject]:
        """Materialize raw result rows as objects of `class_name` (default: this query's class)."""
        name = class_name or self._class_name
        objects: List[LCObject] = []
        for raw in results:
            obj = self._registry.new_object(name)
            self._registry.update_object(obj, raw)
            objects.append(obj)
        return objects

    def find(self) -> Tuple[Response, List[LCObject]]:
        """Run the query.

        Returns:
            The response and the materialized objects. A failed response
            comes with an empty list; transport failures are never raised.

        Raises:
            SerializationError: If the query cannot be compiled
        """
        response = self._get(self.to_json())
        objects: List[LCObject] = []

        if response.is_success:
            response, objects = self._materialize(response)

        if response.is_success:
            self.logger.message("Found %d %s object(s)", len(objects), self._class_name)
        else:
            self.logger.warning("Query on %s failed: %s", self._class_name, response.error)

        return response, objects

    def get_first(self) -> Tuple[Response, Optional[LCObject]]:
        """Run the query limited to one row, without changing `limit`."""
        params = self.to_json()
        params["limit"] = 1
        response = self._get(params)

        obj: Optional[LCObject] = None
        if response.is_success:
            response, objects = self._materialize(response, limit=1)
            if objects:
                obj = objects[0]
        return response, obj

    def count(self) -> Tuple[Response, int]:
        """Count matching rows without fetching them."""
        params = self.to_json()
        params["count"] = 1
        params["limit"] = 0
        response = self._get(params)

        count = 0
        if response.is_success:
            value = (response.value or {}).get("count")
            if isinstance(value, int) and not isinstance(value, bool):
                count = value
        return response, count

    def _materialize(self, response: Response, limit: Optional[int] = None) -> Tuple[Response, List[LCObject]]:
        """Materialize the `results` of a successful response.

        Missing or non-list `results` and non-object rows are ignored. A row that
        cannot be decoded turns the response into a failed one with no objects.
        """
        value = response.value or {}
        results = value.get("results")
        if not isinstance(results, list):
            return response, []

        rows = [row for row in results if isinstance(row, dict)]
        if limit is not None:
            rows = rows[:limit]
        class_name = value.get("className")
        try:
            objects = self.process_results(rows, class_name if isinstance(class_name, str) else None)
        except SerializationError as e:
            return response.model_copy(update={"error": f"Malformed result: {e}"}), []
        return response, objects

    def _get(self, params: Parameters) -> Response:
        return self.transport.request(HTTPMethod.GET, self.endpoint, parameters=params)

    def __repr__(self) -> str:
        return f"<Query: {self._class_name} {self._constraints}>"
