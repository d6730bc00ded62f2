"""Domain types used as constraint operands and query results."""

from datetime import datetime
from typing import Any, ClassVar, Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import DistanceUnit
from .exceptions import InvalidFieldError, SerializationError


class GeoPoint(BaseModel):
    """A point on the globe, in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees.")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees.")

    def to_json_value(self) -> Dict[str, Any]:
        return {"__type": "GeoPoint", "latitude": self.latitude, "longitude": self.longitude}


class Distance(BaseModel):
    """A distance bound for `NearbyPointWithRange`.

    The unit name is interpolated into the operator key, e.g.
    `Distance(value=5, unit=DistanceUnit.KILOMETERS)` as a lower bound
    compiles to `"$minDistanceInKilometers": 5.0`.
    """

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., ge=0.0, description="Distance in `unit`.")
    unit: DistanceUnit = Field(DistanceUnit.KILOMETERS, description="Distance unit.")

    def to_json_value(self) -> float:
        return self.value


class LCObject:
    """A row of a class, as returned by a query.

    Subclasses bind themselves to a class name through `CLASS_NAME` and are
    made known to queries with `ObjectRegistry.register`:

        @registry.register
        class Todo(LCObject):
            CLASS_NAME = "Todo"

    Attributes:
        object_id: Server-assigned identifier, None until saved
        created_at: Creation time reported by the server
        updated_at: Last update time reported by the server
    """

    CLASS_NAME: ClassVar[Optional[str]] = None

    def __init__(self, class_name: Optional[str] = None, object_id: Optional[str] = None, **attributes: Any) -> None:
        name = class_name or self.CLASS_NAME
        if not name:
            raise InvalidFieldError("Class name is required", field="class_name")
        self._class_name = name
        self.object_id = object_id
        self.created_at: Optional[datetime] = None
        self.updated_at: Optional[datetime] = None
        self._attributes: Dict[str, Any] = dict(attributes)

    @property
    def class_name(self) -> str:
        return self._class_name

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def keys(self) -> Iterator[str]:
        return iter(self._attributes)

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def __delitem__(self, key: str) -> None:
        del self._attributes[key]

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def to_dict(self) -> Dict[str, Any]:
        """Return the attributes together with the server-managed fields that are set."""
        out: Dict[str, Any] = {}
        if self.object_id is not None:
            out["objectId"] = self.object_id
        if self.created_at is not None:
            out["createdAt"] = self.created_at
        if self.updated_at is not None:
            out["updatedAt"] = self.updated_at
        out.update(self._attributes)
        return out

    def to_json_value(self) -> Dict[str, Any]:
        """Pointer form used when an object is a constraint operand."""
        if self.object_id is None:
            raise SerializationError("Cannot reference an object without objectId", class_name=self._class_name)
        return {"__type": "Pointer", "className": self._class_name, "objectId": self.object_id}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LCObject):
            return NotImplemented
        return (
            self._class_name == other._class_name
            and self.object_id == other.object_id
            and self._attributes == other._attributes
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self._class_name} objectId={self.object_id!r}>"
