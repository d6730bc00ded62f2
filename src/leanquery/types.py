"""Type aliases for the leanquery package.

Reusable type definitions shared by the query builder, the serializer and
the transport.
"""

from typing import Any, Callable, Dict, List, Union

# JSON-safe values as produced by `leanquery.serializer.to_json_value`
JSONObject = Dict[str, Any]
JSONArray = List[Any]
JSONValue = Union[None, bool, int, float, str, JSONArray, JSONObject]

# Flat request parameters (GET query string or POST body)
Parameters = Dict[str, Any]

# Builds a populated domain object from a class name and a raw JSON object
ObjectFactory = Callable[[str, JSONObject], Any]
