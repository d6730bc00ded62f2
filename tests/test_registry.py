"""Tests for the object registry."""

from datetime import datetime, timezone

import pytest

from leanquery.exceptions import ClassAlreadyRegisteredError, InvalidFieldError, SerializationError
from leanquery.registry import ObjectRegistry, registry
from leanquery.schema import GeoPoint, LCObject


class Post(LCObject):
    CLASS_NAME = "Post"


class OtherPost(LCObject):
    CLASS_NAME = "Post"


class Nameless(LCObject):
    pass


def test_register_and_new_object(object_registry):
    assert object_registry.register(Post) is Post
    obj = object_registry.new_object("Post")
    assert isinstance(obj, Post)
    assert obj.class_name == "Post"


def test_register_twice_same_class(object_registry):
    object_registry.register(Post)
    object_registry.register(Post)
    assert object_registry.object_class("Post") is Post


def test_register_conflict(object_registry):
    object_registry.register(Post)
    with pytest.raises(ClassAlreadyRegisteredError):
        object_registry.register(OtherPost)


def test_register_requires_class_name(object_registry):
    with pytest.raises(InvalidFieldError):
        object_registry.register(Nameless)


def test_unregistered_falls_back_to_lcobject(object_registry):
    obj = object_registry.new_object("Anything")
    assert type(obj) is LCObject
    assert obj.class_name == "Anything"


def test_unregister(object_registry):
    object_registry.register(Post)
    object_registry.unregister("Post")
    assert object_registry.object_class("Post") is LCObject


def test_update_object(object_registry):
    object_registry.register(Post)
    obj = object_registry.new_object("Comment")
    object_registry.update_object(
        obj,
        {
            "__type": "Object",
            "className": "Comment",
            "objectId": "c1",
            "createdAt": "2016-04-19T08:30:00.000Z",
            "updatedAt": {"__type": "Date", "iso": "2016-04-20T08:30:00.000Z"},
            "text": "hello",
            "location": {"__type": "GeoPoint", "latitude": 1, "longitude": 2},
            "post": {"__type": "Pointer", "className": "Post", "objectId": "p1"},
        },
    )
    assert obj.object_id == "c1"
    assert obj.created_at == datetime(2016, 4, 19, 8, 30, tzinfo=timezone.utc)
    assert obj.updated_at == datetime(2016, 4, 20, 8, 30, tzinfo=timezone.utc)
    assert obj["text"] == "hello"
    assert obj["location"] == GeoPoint(latitude=1, longitude=2)
    assert isinstance(obj["post"], Post)
    assert obj["post"].object_id == "p1"
    assert "className" not in obj
    assert "__type" not in obj


@pytest.mark.parametrize("data", [1, "x", None, [{"objectId": "c1"}]])
def test_update_object_rejects_non_object(object_registry, data):
    obj = object_registry.new_object("Comment")
    with pytest.raises(SerializationError):
        object_registry.update_object(obj, data)
    assert obj.object_id is None

@pytest.mark.parametrize(
    "class_name,endpoint",
    [("_User", "users"), ("_Role", "roles"), ("_Installation", "installations"), ("Todo", "classes/Todo")],
)
def test_class_endpoint(class_name, endpoint):
    assert registry.class_endpoint(class_name) == endpoint


def test_fresh_registry_is_empty():
    assert ObjectRegistry().object_class("Post") is LCObject
