"""
Tests for the name-keyed resolvers.

Tests cover:
- LazyClassResolver round trips and failures
- Uncached, never-empty, non-iterable resolvers
- StaticsResolver and EnumsResolver views
"""

import logging

import pytest

import sample_types
from typemodels import (
    AttributeView,
    EnumsResolver,
    LazyClassResolver,
    MappingTypeLoader,
    ObjectModel,
    ResolutionError,
    StaticsResolver,
    TypeLoadError,
    TypeModel,
)


class TestLazyClassResolver:
    """name -> model for loadable classes."""

    def test_round_trip(self, classes):
        """Resolving a class name yields a model of that class."""
        model = classes["sample_types.Widget"]
        assert isinstance(model, TypeModel)
        assert model.unwrap() is sample_types.Widget
        assert str(model) == "sample_types.Widget"
        assert set(model["declaredFields"]) == {"a", "b"}

    def test_get_is_resolve(self, classes):
        assert classes.get("sample_types.Gadget").unwrap() is sample_types.Gadget
        assert classes.resolve("sample_types.Gadget").unwrap() is sample_types.Gadget

    def test_not_cached(self, classes):
        """Each lookup builds a new model."""
        first = classes["sample_types.Widget"]
        second = classes["sample_types.Widget"]
        assert first is not second
        assert first == second

    @pytest.mark.parametrize("name", ["sample_types.DoesNotExist", "pkg.DoesNotExist"])
    def test_unknown_name(self, classes, name):
        """Unloadable names raise ResolutionError carrying the name and cause."""
        with pytest.raises(ResolutionError) as exc_info:
            classes[name]
        error = exc_info.value
        assert error.name == name
        assert isinstance(error.cause, TypeLoadError)
        assert error.__cause__ is error.cause
        assert name in error.message
        assert error.code == "MODEL_RESOLUTION"

    def test_non_string_name(self, classes):
        with pytest.raises(ResolutionError):
            classes.resolve(42)

    def test_not_a_type(self, classes):
        with pytest.raises(ResolutionError):
            classes["sample_types.NOT_A_TYPE"]

    def test_module_raising_on_import(self, classes, tmp_path, monkeypatch):
        """A module failing at import time is a resolution error for the name."""
        (tmp_path / "failing_typemodels_fixture.py").write_text("raise RuntimeError(\"static init\")\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(ResolutionError) as exc_info:
            classes["failing_typemodels_fixture.Widget"]
        assert exc_info.value.name == "failing_typemodels_fixture.Widget"
        assert isinstance(exc_info.value.cause.__cause__, RuntimeError)

    def test_contains(self, classes):
        assert "sample_types.Widget" in classes
        assert "sample_types.DoesNotExist" not in classes
        assert 42 not in classes

    def test_never_empty(self, classes):
        assert classes.is_empty() is False
        assert bool(classes) is True

    def test_not_iterable(self, classes):
        with pytest.raises(TypeError):
            iter(classes)

    def test_uses_registry_loader(self, registry):
        loader = MappingTypeLoader({"W": sample_types.Widget})
        resolver = LazyClassResolver(registry, loader)
        assert resolver["W"].unwrap() is sample_types.Widget
        assert resolver.unwrap() is loader
        with pytest.raises(ResolutionError):
            resolver["sample_types.Widget"]

    def test_custom_metaclass_class(self, classes):
        """Classes of unregistered metaclasses resolve to object views."""
        model = classes["sample_types.WithMeta"]
        assert isinstance(model, ObjectModel)
        assert not isinstance(model, TypeModel)

    def test_debug_log(self, classes, caplog):
        with caplog.at_level(logging.DEBUG, logger="typemodels"):
            classes["sample_types.Widget"]
        assert any("Resolving class sample_types.Widget" in r.getMessage() for r in caplog.records)


class TestStaticsResolver:
    """name -> class-level attribute view."""

    def test_class_attributes(self, registry):
        statics = StaticsResolver(registry)
        view = statics["sample_types.Widget"]
        assert isinstance(view, ObjectModel)
        assert view["a"] == 1
        assert view["build"]().unwrap().__class__ is sample_types.Widget

    def test_view_is_generic_even_for_classes(self, registry):
        """Statics views are object views, not type models."""
        view = StaticsResolver(registry)["sample_types.Outer"]
        assert not isinstance(view, TypeModel)
        assert view["Inner"]["depth"] == 2

    def test_unknown(self, registry):
        with pytest.raises(ResolutionError):
            StaticsResolver(registry)["sample_types.Missing"]


class TestEnumsResolver:
    """name -> enum member view."""

    def test_members(self, registry):
        view = EnumsResolver(registry)["sample_types.Color"]
        assert isinstance(view, AttributeView)
        assert list(view) == ["RED", "GREEN"]
        assert view["RED"].unwrap() is sample_types.Color.RED
        assert view["GREEN"]["value"] == 2

    def test_not_an_enum(self, registry):
        with pytest.raises(ResolutionError) as exc_info:
            EnumsResolver(registry)["sample_types.Widget"]
        assert "not an Enum" in exc_info.value.message
