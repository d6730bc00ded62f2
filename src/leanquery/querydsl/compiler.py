"""Query compiler.

Flattens the accumulated state of a `Query` into the flat parameter map
sent with a find request:

    {"className": ..., "where": "<JSON string>", "include": "a,b",
     "keys": "a,b", "order": "...", "limit": n, "skip": n}

Optional keys are omitted, never null. `where` is itself a JSON string
because request parameters are a flat string-keyed map. Embedded
sub-queries are compiled recursively into the same dict form before the
outer `where` string is produced.
"""

import json
from typing import TYPE_CHECKING, Any, Dict, Iterable

from ..serializer import dumps

if TYPE_CHECKING:
    from ..query import Query

__all__ = (
    "QueryCompiler",
    "query_compiler",
)


class QueryCompiler:
    """Compile `Query` objects into request parameters.

    Compilation is a pure function of the query's current state and may be
    repeated; it raises `SerializationError` if a constraint operand has no
    JSON form. `include` and `keys` are joined in sorted order.
    """

    # Separator for `include` and `keys`
    KEY_SEPARATOR = ","

    def compile(self, query: "Query") -> Dict[str, Any]:
        params: Dict[str, Any] = {"className": query.class_name}

        constraints = query.constraints
        if constraints:
            params["where"] = self.to_where(constraints)
        if query.included_keys:
            params["include"] = self._join_keys(query.included_keys)
        if query.selected_keys:
            params["keys"] = self._join_keys(query.selected_keys)
        if query.ordered_keys is not None:
            params["order"] = query.ordered_keys
        if query.limit is not None:
            params["limit"] = query.limit
        if query.skip is not None:
            params["skip"] = query.skip
        return params

    def to_where(self, constraints: Dict[str, Any]) -> str:
        """Serialize a constraint dictionary into the `where` JSON string."""
        return dumps(constraints)

    def to_expr(self, query: "Query") -> str:
        """Human-readable form of the compiled request, `where` expanded."""
        params = self.compile(query)
        if "where" in params:
            params["where"] = json.loads(params["where"])
        return json.dumps(params, indent=2, sort_keys=True, ensure_ascii=False)

    def _join_keys(self, keys: Iterable[str]) -> str:
        return self.KEY_SEPARATOR.join(sorted(keys))


query_compiler = QueryCompiler()
