"""Tests for the generic models produced by DefaultAdapter."""

import pytest

import sample_types
from typemodels import ObjectModel, TypeModel
from typemodels.models import MappingModel, MethodModel, SequenceModel, unwrap_model


class TestObjectModel:
    """Bean-style views of arbitrary objects."""

    def test_attribute_access(self, registry):
        model = registry.adapt(sample_types.Gadget())
        assert model["a"] == 1
        assert model["c"] == 0.5

    def test_bound_method_is_callable(self, registry):
        """Methods are callable and their results are adapted."""
        model = registry.adapt(sample_types.Gadget())
        size = model["size"]
        assert isinstance(size, MethodModel)
        assert size() == 2
        assert isinstance(model["build"](), ObjectModel)

    def test_call_unwraps_arguments(self, registry):
        """Model arguments are unwrapped before the call."""
        model = registry.adapt(sample_types.Gadget())
        amount = registry.adapt(3)
        assert model["extra"](amount, scale=registry.adapt(2.0)) == 6.0

    def test_private_hidden(self, registry):
        model = registry.adapt(sample_types.Gadget())
        with pytest.raises(KeyError):
            model["_secret"]
        assert "_secret" not in list(model)

    def test_private_exposed(self, private_registry):
        model = private_registry.adapt(sample_types.Gadget())
        assert model["_secret"] == "s"
        assert "_secret" in list(model)

    def test_missing_attribute(self, registry):
        model = registry.adapt(sample_types.Empty())
        with pytest.raises(KeyError):
            model["missing"]

    def test_dunders_readable_not_listed(self, registry):
        model = registry.adapt(sample_types.Widget())
        assert isinstance(model["__class__"], TypeModel)
        assert "__class__" not in list(model)

    def test_str_and_unwrap(self, registry):
        value = sample_types.Point(3, 4)
        model = registry.adapt(value)
        assert model.unwrap() is value
        assert str(model) == str(value)
        assert model["norm"] == 5.0
        assert unwrap_model(model) is value

    def test_equality_uses_wrapped_value(self, registry):
        assert registry.adapt(sample_types.Widget) == sample_types.Widget
        assert registry.adapt(sample_types.Widget) == registry.adapt(sample_types.Widget)


class TestContainerModels:
    """Containers adapt their items when read."""

    def test_mapping(self, registry):
        model = registry.adapt({"cls": sample_types.Widget, "n": 1})
        assert isinstance(model, MappingModel)
        assert isinstance(model["cls"], TypeModel)
        assert model["n"] == 1
        assert list(model) == ["cls", "n"]

    def test_empty_mapping_is_empty(self, registry):
        model = registry.adapt({})
        assert model.is_empty() is True
        assert bool(model) is False

    def test_sequence(self, registry):
        model = registry.adapt([sample_types.Widget, 2, 3])
        assert isinstance(model, SequenceModel)
        assert isinstance(model[0], TypeModel)
        assert list(model[1:]) == [2, 3]
        assert isinstance(model[1:], SequenceModel)

    def test_sequence_contains_unwraps(self, registry):
        model = registry.adapt([sample_types.Widget])
        assert registry.adapt(sample_types.Widget) in model

    def test_set_is_frozen(self, registry):
        model = registry.adapt(frozenset({1}))
        assert len(model) == 1
        assert model[0] == 1
        assert model.unwrap() == frozenset({1})


class TestHashing:
    """Models can be put in sets whatever they wrap."""

    def test_hashable_value(self, registry):
        assert hash(registry.adapt(sample_types.Widget)) == hash(sample_types.Widget)

    def test_unhashable_value(self, registry):
        """A descriptor with a list default still hashes."""
        view = registry.adapt(sample_types.Basket)["declaredFields"]
        items = view["items"]
        assert hash(items) == hash(view["items"])
        assert len({items, view["items"], view["label"]}) == 2
