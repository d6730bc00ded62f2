"""Tests for domain types."""

import pytest
from pydantic import ValidationError

from leanquery.constants import DistanceUnit
from leanquery.exceptions import InvalidFieldError
from leanquery.schema import Distance, GeoPoint, LCObject


class TestGeoPoint:
    def test_valid(self):
        point = GeoPoint(latitude=-90, longitude=180)
        assert point.to_json_value() == {"__type": "GeoPoint", "latitude": -90.0, "longitude": 180.0}

    @pytest.mark.parametrize("lat,lng", [(90.1, 0), (-91, 0), (0, 180.5), (0, -181)])
    def test_out_of_range(self, lat, lng):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=lat, longitude=lng)


class TestDistance:
    def test_default_unit(self):
        assert Distance(value=2).unit == DistanceUnit.KILOMETERS

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            Distance(value=-1)

    def test_unit_from_string(self):
        assert Distance(value=1, unit="Miles").unit == DistanceUnit.MILES


class TestLCObject:
    def test_requires_class_name(self):
        with pytest.raises(InvalidFieldError):
            LCObject()

    def test_item_access(self):
        obj = LCObject("Todo", object_id="t1", title="x")
        obj["done"] = True
        assert obj["title"] == "x"
        assert obj.get("missing", 1) == 1
        assert "done" in obj
        assert sorted(obj.keys()) == ["done", "title"]
        del obj["done"]
        assert "done" not in obj

    def test_to_dict(self):
        obj = LCObject("Todo", object_id="t1", title="x")
        assert obj.to_dict() == {"objectId": "t1", "title": "x"}

    def test_equality(self):
        assert LCObject("Todo", object_id="t1", a=1) == LCObject("Todo", object_id="t1", a=1)
        assert LCObject("Todo", object_id="t1") != LCObject("Todo", object_id="t2")
        assert LCObject("Todo") != "Todo"

    def test_repr(self):
        assert "t1" in repr(LCObject("Todo", object_id="t1"))
