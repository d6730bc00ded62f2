"""Object construction and endpoint resolution.

Maps class names to `LCObject` subclasses, builds and populates objects
from raw result rows, and resolves the REST endpoint of a class.
"""

from typing import Any, Dict, Type

from .constants import CLASS_ENDPOINTS
from .exceptions import ClassAlreadyRegisteredError, InvalidFieldError, SerializationError
from .schema import LCObject
from .serializer import from_json_value, parse_date
from .types import JSONObject

__all__ = (
    "ObjectRegistry",
    "registry",
)

# Keys describing the payload itself rather than an attribute
_META_KEYS = {"__type", "className"}


class ObjectRegistry:
    """Registry of `LCObject` subclasses indexed by class name.

    Unregistered class names materialize as plain `LCObject` instances.
    """

    def __init__(self) -> None:
        self._classes: Dict[str, Type[LCObject]] = {}

    def register(self, cls: Type[LCObject]) -> Type[LCObject]:
        """Register `cls` under its `CLASS_NAME`. Usable as a class decorator.

        Raises:
            InvalidFieldError: If `cls` does not define `CLASS_NAME`
            ClassAlreadyRegisteredError: If another class owns the name
        """
        name = cls.CLASS_NAME
        if not name:
            raise InvalidFieldError("CLASS_NAME must be set to register a class", field="CLASS_NAME", cls=cls.__name__)
        existing = self._classes.get(name)
        if existing is not None and existing is not cls:
            raise ClassAlreadyRegisteredError(
                "Class name already registered", class_name=name, registered=existing.__name__
            )
        self._classes[name] = cls
        return cls

    def unregister(self, class_name: str) -> None:
        self._classes.pop(class_name, None)

    def object_class(self, class_name: str) -> Type[LCObject]:
        return self._classes.get(class_name, LCObject)

    def new_object(self, class_name: str) -> LCObject:
        """Construct an empty object of the class registered for `class_name`."""
        return self.object_class(class_name)(class_name=class_name)

    def update_object(self, obj: LCObject, data: JSONObject) -> LCObject:
        """Populate `obj` from a raw JSON object.

        Server-managed fields go to their attributes; everything else is
        decoded with `from_json_value`, nested pointers included.

        Raises:
            SerializationError: If `data` is not an object or holds a malformed typed value
        """
        if not isinstance(data, dict):
            raise SerializationError("Result row must be an object", type=type(data).__name__)
        for key, value in data.items():
            if key in _META_KEYS:
                continue
            if key == "objectId":
                obj.object_id = value
            elif key in ("createdAt", "updatedAt"):
                parsed = parse_date(value) if isinstance(value, str) else from_json_value(value)
                if key == "createdAt":
                    obj.created_at = parsed
                else:
                    obj.updated_at = parsed
            else:
                obj[key] = from_json_value(value, self._decode_object)
        return obj

    def _decode_object(self, class_name: str, data: Dict[str, Any]) -> LCObject:
        return self.update_object(self.new_object(class_name), data)

    def class_endpoint(self, class_name: str) -> str:
        """Return the REST endpoint path for `class_name`."""
        return CLASS_ENDPOINTS.get(class_name, f"classes/{class_name}")


registry = ObjectRegistry()
