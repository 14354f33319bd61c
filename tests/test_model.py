from __future__ import annotations

from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from justmodel import (
    UNDEFINED,
    ErrorPolicy,
    FrozenMap,
    Model,
    ModelSettings,
    PropertyMissingError,
    UpdateOutcome,
    ValidationError,
    define_schema,
    extend_schema,
)


class MetaObject(BaseModel):
    key: str | None = None


class Meta(BaseModel):
    abcd: str | None = None
    meta_object: MetaObject = Field(default_factory=MetaObject)


class User(BaseModel):
    username: Annotated[str, Field(min_length=4)]
    password: Annotated[str, Field(min_length=8)]
    meta: Meta = Field(default_factory=Meta)
    tags: list[str] = Field(default_factory=list)


class UserModel(Model):
    schema = User


def _loaded() -> UserModel:
    return UserModel.load({"username": "user", "password": "password"})


def test_model_is_instantiable() -> None:
    model = Model()

    assert isinstance(model, Model)
    assert not model.has()
    assert not model.has_changed()


def test_create_valid_model() -> None:
    model = UserModel.create({"username": "user", "password": "password"})

    assert model.get("username") == "user"
    assert model.has_changed("username")
    assert model.has_changed("password")
    assert model.has_changed()
    assert model.get_old("username") is UNDEFINED


def test_create_invalid_model_raises() -> None:
    with pytest.raises(ValidationError) as excinfo:
        UserModel.create({"username": "abc", "password": "abc"})

    assert excinfo.value.model == "UserModel"
    assert excinfo.value.data["username"] == "abc"
    assert len(excinfo.value.details) == 2


def test_create_merge_precedence() -> None:
    model = Model.create({"a": 1, "nested": {"x": 1, "y": 1}}, {"a": 2, "nested": {"y": 2}})

    assert model.get("a") == 2
    assert model.value()["nested"] == {"x": 1, "y": 2}


def test_update_replaces_lists_wholesale() -> None:
    model = UserModel.load({"username": "user", "password": "password", "tags": ["a", "b"]})

    updated = model.update({"tags": ["c"]})

    assert updated.value()["tags"] == ["c"]
    assert model.value()["tags"] == ["a", "b"]


def test_load_applies_defaults() -> None:
    model = _loaded()

    assert model.value()["meta"] == {"abcd": None, "meta_object": {"key": None}}


def test_load_propagates_validation_errors() -> None:
    with pytest.raises(ValidationError):
        UserModel.load({"username": "user"})


def test_load_round_trip() -> None:
    data = {
        "username": "user",
        "password": "password",
        "meta": {"abcd": "x", "meta_object": {"key": "value"}},
        "tags": ["a"],
    }

    assert UserModel.load(data).value() == data


def test_load_has_no_changes() -> None:
    model = _loaded()

    assert not model.has_changed()
    assert not model.has_changed("username")
    assert not model.has_changed("meta")
    assert not model.has_changed("meta.meta_object.key")
    assert not model.has_changed("missing")


def test_get_and_has() -> None:
    model = UserModel.load(
        {"username": "user", "password": "password", "meta": {"meta_object": {"key": "value"}}}
    )

    assert model.get("meta.meta_object.key") == "value"
    assert model.get(["meta", "meta_object", "key"]) == "value"
    assert isinstance(model.get("meta"), FrozenMap)
    assert model.get() is model.current
    assert model.has("username")
    assert model.has_old("username")
    assert model.has()
    assert model.has_old()
    assert not model.has("meta.unknown")


def test_get_missing_property_raises() -> None:
    model = Model.load({"username": "user"})

    with pytest.raises(PropertyMissingError) as excinfo:
        model.get("password")

    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.model == "Model"
    assert excinfo.value.path == ("password",)
    assert excinfo.value.code == "property_missing"


def test_get_old_never_raises() -> None:
    model = _loaded()

    assert model.get_old("nope.deeper") is UNDEFINED
    assert model.get_old() is model.original


def test_update_is_immutable() -> None:
    model = _loaded()

    updated = model.update({"username": "newuser"})

    assert updated is not model
    assert updated.get("username") == "newuser"
    assert updated.get_old("username") == "user"
    assert updated.has_changed()
    assert updated.has_changed("username")
    assert not updated.has_changed("password")
    assert model.get("username") == "user"
    assert not model.has_changed()
    assert updated.original is model.original
    assert updated.get("meta") == model.get("meta")


def test_update_in_place_mutates_receiver() -> None:
    model = _loaded()
    clone = model.clone()

    result = model.update_in_place({"username": "newuser"})

    assert result is model
    assert model.get("username") == "newuser"
    assert model.has_changed()
    assert model.get_old("username") == "user"
    assert clone.get("username") == "user"
    assert not clone.has_changed()


def test_update_nested_fields_merge() -> None:
    model = UserModel.load(
        {"username": "user", "password": "password", "meta": {"abcd": "a"}}
    )

    updated = model.update({"meta": {"meta_object": {"key": "k"}}})

    assert updated.get("meta.abcd") == "a"
    assert updated.get("meta.meta_object.key") == "k"
    assert updated.has_changed("meta")
    assert updated.has_changed("meta.meta_object.key")
    assert not updated.has_changed("meta.abcd")


def test_update_with_explicit_schema() -> None:
    relaxed = extend_schema(User, "RelaxedUser", password=(str, ...))
    model = _loaded()

    updated = model.update({"password": "short"}, schema=relaxed)

    assert updated.get("password") == "short"
    with pytest.raises(ValidationError):
        model.update({"password": "short"})


def test_failed_update_is_atomic() -> None:
    model = _loaded()
    current, original = model.current, model.original

    with pytest.raises(ValidationError):
        model.update({"username": "abc"})
    with pytest.raises(ValidationError):
        model.update_in_place({"username": "abc"}, {"password": "password"})

    assert model.current is current
    assert model.original is original
    assert model.get("username") == "user"


def test_commit_resets_baseline() -> None:
    model = _loaded()

    committed = model.update({"username": "newuser"}).commit()

    assert not committed.has_changed()
    assert committed.get_old("username") == "newuser"

    same = model.update_in_place({"username": "newuser"}).commit_in_place()

    assert same is model
    assert not model.has_changed()


def test_equals_ignores_original() -> None:
    loaded = _loaded()
    created = UserModel.create({"username": "user", "password": "password"})

    assert loaded.equals(loaded)
    assert loaded.equals(created)
    assert not loaded.equals(loaded.update({"username": "other"}))
    assert not loaded.equals("user")  # type: ignore[arg-type]


def test_clone_is_distinct_instance() -> None:
    model = _loaded().update({"username": "newuser"})

    clone = model.clone()

    assert clone is not model
    assert clone.equals(model)
    assert clone.current is model.current
    assert clone.original is model.original
    assert clone.has_changed("username")


def test_value_is_plain_data() -> None:
    value = _loaded().value()

    value["username"] = "changed"
    value["meta"]["abcd"] = "changed"

    assert isinstance(value, dict)
    assert _loaded().get("username") == "user"


def test_schema_variants_per_lifecycle() -> None:
    class Article(Model):
        schema = define_schema("Article", title=(str, ...), body=(str, ""))
        load_schema = define_schema("LoadedArticle", extra="allow", title=(str, ...))

    loaded = Article.load({"title": "t", "legacy": True})

    assert loaded.get("legacy") is True
    with pytest.raises(ValidationError):
        Article.create({"title": "t", "legacy": True})
    assert Article.create({"title": "t"}).get("body") == ""


def test_schema_variants_are_inherited() -> None:
    class Base(Model):
        schema = define_schema("Base", name=(str, ...))
        create_schema = define_schema("BaseCreate", name=(str, "unnamed"))

    class Child(Base):
        pass

    assert Child.schemas.create is Base.schemas.create
    assert Child.create().get("name") == "unnamed"


def test_return_error_policy() -> None:
    class LenientUser(Model):
        schema = User
        error_policy = ErrorPolicy.RETURN

    outcome = LenientUser.create({"username": "abc", "password": "abc"})

    assert isinstance(outcome, UpdateOutcome)
    assert isinstance(outcome.error, ValidationError)

    model = LenientUser.load({"username": "user", "password": "password"})
    failed = model.update_in_place({"username": "abc"})

    assert isinstance(failed, UpdateOutcome)
    assert model.get("username") == "user"
    assert isinstance(LenientUser.load({}), UpdateOutcome)
    assert model.update({"username": "valid"}).get("username") == "valid"


def test_custom_path_separator() -> None:
    class SlashModel(Model):
        settings = ModelSettings(path_separator="/")

    model = SlashModel.load({"a": {"b.c": 1}})

    assert model.get("a/b.c") == 1
    assert model.has_changed("a/b.c") is False


def test_indexed_paths_into_lists() -> None:
    model = _loaded().update({"tags": ["x", "y"]})

    assert model.get("tags.1") == "y"
    assert model.has_changed("tags.0")
    assert model.get_old("tags.0") is UNDEFINED


def test_username_password_lifecycle() -> None:
    with pytest.raises(ValidationError):
        UserModel.create({"username": "abc", "password": "abc"})

    created = UserModel.create({"username": "user", "password": "password"})
    assert created.has_changed("username")

    updated = _loaded().update({"username": "newuser"})
    assert updated.get_old("username") == "user"
    assert updated.get("username") == "newuser"


def test_repr_shows_value() -> None:
    assert repr(Model.load({"a": 1})) == "Model({'a': 1})"


def test_bool_replacing_number_is_a_change() -> None:
    model = Model.load({"a": 1, "n": {"b": 0}})

    updated = model.update({"a": True, "n": {"b": False}})

    assert updated.value() == {"a": True, "n": {"b": False}}
    assert updated.has_changed("a")
    assert updated.has_changed("n")
    assert updated.has_changed("n.b")
    assert updated.has_changed()
    assert not updated.equals(model)


def test_value_does_not_expose_snapshot_sets() -> None:
    model = Model.load({"s": {1}})

    model.value()["s"].add(2)

    assert model.get("s") == frozenset({1})
    assert not model.has_changed()
