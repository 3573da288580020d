"""Tests for type loading by dotted name."""

import collections
import decimal

import pytest

import sample_types
from typemodels import ImportTypeLoader, MappingTypeLoader, TypeLoader, TypeLoadError
from typemodels.loader import load_type


class TestImportTypeLoader:
    """Longest importable module prefix, then attribute walk."""

    def test_module_level_class(self):
        assert ImportTypeLoader().load("sample_types.Widget") is sample_types.Widget

    def test_nested_class(self):
        assert ImportTypeLoader().load("sample_types.Outer.Inner") is sample_types.Outer.Inner

    def test_package_module(self):
        assert ImportTypeLoader().load("collections.abc.Mapping") is collections.abc.Mapping
        assert load_type("decimal.Decimal") is decimal.Decimal

    def test_builtin_name(self):
        """A bare name is looked up in builtins."""
        assert ImportTypeLoader().load("int") is int
        assert ImportTypeLoader().load("builtins.str") is str

    def test_missing_attribute(self):
        with pytest.raises(TypeLoadError) as exc_info:
            ImportTypeLoader().load("sample_types.DoesNotExist")
        assert exc_info.value.name == "sample_types.DoesNotExist"

    def test_missing_module(self):
        with pytest.raises(TypeLoadError) as exc_info:
            ImportTypeLoader().load("pkg.DoesNotExist")
        assert "no importable module prefix" in str(exc_info.value)

    def test_not_a_type(self):
        with pytest.raises(TypeLoadError) as exc_info:
            ImportTypeLoader().load("sample_types.NOT_A_TYPE")
        assert "not a type" in exc_info.value.reason

    @pytest.mark.parametrize("name", ["", ".Widget", "sample_types.", "a..b", None, 3])
    def test_invalid_names(self, name):
        with pytest.raises(TypeLoadError):
            ImportTypeLoader().load(name)

    def test_broken_module_is_reported(self, tmp_path, monkeypatch):
        """An import error inside a module is not mistaken for a missing module."""
        (tmp_path / "broken_typemodels_fixture.py").write_text("import no_such_dependency_xyz\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(TypeLoadError) as exc_info:
            ImportTypeLoader().load("broken_typemodels_fixture.Thing")
        assert "importing broken_typemodels_fixture failed" in str(exc_info.value)

    def test_module_raising_on_import(self, tmp_path, monkeypatch):
        """Errors raised by module code carry the requested name."""
        (tmp_path / "raising_typemodels_fixture.py").write_text("raise RuntimeError(\"static init\")\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(TypeLoadError) as exc_info:
            ImportTypeLoader().load("raising_typemodels_fixture.Thing")
        assert exc_info.value.name == "raising_typemodels_fixture.Thing"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "static init" in exc_info.value.reason

    def test_is_a_type_loader(self):
        assert isinstance(ImportTypeLoader(), TypeLoader)


class TestMappingTypeLoader:
    def test_registered_name(self):
        loader = MappingTypeLoader({"Widget": sample_types.Widget})
        assert loader.load("Widget") is sample_types.Widget
        assert isinstance(loader, TypeLoader)

    def test_unregistered_name(self):
        with pytest.raises(TypeLoadError):
            MappingTypeLoader().load("Widget")

    def test_non_type_value(self):
        loader = MappingTypeLoader({"answer": 42})
        with pytest.raises(TypeLoadError):
            loader.load("answer")
