import pytest

from modelwidgets.components.attributes import AttributeResolver, ComponentDefinition
from modelwidgets.components.data_adapters import DjangoModelAdapter
from modelwidgets.components.exceptions import ConfigurationError, RecordNotFound, ResolutionError
from modelwidgets.library.models import Book


@pytest.fixture
def adapter():
    return DjangoModelAdapter(Book)


def make_read_only(c):
    c.read_only = True


def relabel(c):
    c.label = "Declared"
    c.column_config = {"width": 200}


class TestComponentDefinition:
    def test_attribute_registration(self):
        definition = ComponentDefinition()
        definition.attribute("title", make_read_only)

        @definition.attribute("price")
        def price_attribute(c):
            c.format = "0.00"

        assert definition.declared_attribute_names == ["title", "price"]
        assert price_attribute.__name__ == "price_attribute"

    def test_derive_does_not_touch_parent(self):
        parent = ComponentDefinition({"title": make_read_only})
        child = parent.derive()
        child.attribute("price", relabel)
        assert parent.declared_attribute_names == ["title"]
        assert child.declared_attribute_names == ["title", "price"]


class TestAttributeResolver:
    def test_author_name_and_title(self, adapter):
        resolved = AttributeResolver(adapter, ["author__name", "title"]).attribute_overrides
        assert list(resolved) == ["author__name", "title"]

        author_name, title = resolved.values()
        assert (author_name.label, author_name.type, author_name.read_only) == ("Author name", "string", False)
        assert (title.label, title.type, title.read_only) == ("Title", "string", False)

    def test_defaults_to_model_attributes(self, adapter):
        resolved = AttributeResolver(adapter).attribute_overrides
        assert list(resolved) == adapter.model_attributes()

    def test_duplicate_names_are_dropped(self, adapter):
        resolved = AttributeResolver(adapter, ["title", "title", "price"]).attribute_overrides
        assert list(resolved) == ["title", "price"]

    def test_declared_attributes_are_always_resolved(self, adapter):
        definition = ComponentDefinition({"price": make_read_only})
        resolver = AttributeResolver(adapter, ["title"], definition=definition)
        resolved = resolver.attribute_overrides
        assert list(resolved) == ["title", "price"]
        assert resolved["price"].read_only is True

    def test_declared_attributes_are_not_shown_unless_listed(self, adapter):
        definition = ComponentDefinition({"price": make_read_only})
        resolver = AttributeResolver(adapter, ["title"], definition=definition)
        assert [c.name for c in resolver.rendered_attributes()] == ["title"]
        assert [c.name for c in resolver.data_attributes()] == ["title"]

    def test_declarations_win_over_adapter_defaults(self, adapter):
        definition = ComponentDefinition({"title": relabel})
        resolved = AttributeResolver(adapter, ["title"], definition=definition).attribute_overrides
        assert resolved["title"].label == "Declared"
        assert resolved["title"].type == "string"

    def test_instance_overrides_win_over_declarations(self, adapter):
        definition = ComponentDefinition({"title": relabel})
        overrides = {"title": {"label": "Overridden", "column_config": {"hidden": True}}}
        resolved = AttributeResolver(adapter, ["title"], definition=definition, overrides=overrides)
        title = resolved.attribute_overrides["title"]
        assert title.label == "Overridden"
        assert title.column_config == {"width": 200, "hidden": True}

    def test_overrides_for_unlisted_attributes_are_ignored(self, adapter):
        resolver = AttributeResolver(adapter, ["title"], overrides={"price": {"excluded": True}})
        assert list(resolver.attribute_overrides) == ["title"]

    def test_unknown_override_option(self, adapter):
        resolver = AttributeResolver(adapter, ["title"], overrides={"title": {"width": 100}})
        with pytest.raises(ConfigurationError):
            resolver.attribute_overrides

    def test_excluded_and_meta(self, adapter):
        overrides = {"price": {"excluded": True}, "exemplars": {"meta": True}}
        resolver = AttributeResolver(adapter, ["title", "exemplars", "price"], overrides=overrides)

        assert list(resolver.attribute_overrides) == ["title", "exemplars", "price"]
        assert [c.name for c in resolver.rendered_attributes()] == ["title"]
        assert [c.name for c in resolver.data_attributes()] == ["title", "exemplars"]

    def test_resolution_is_deterministic(self, adapter):
        definition = ComponentDefinition({"title": relabel})
        first = AttributeResolver(adapter, ["author__name", "title"], definition=definition)
        second = AttributeResolver(adapter, ["author__name", "title"], definition=definition)
        assert first.attribute_overrides == second.attribute_overrides

    def test_resolution_is_memoized_and_frozen(self, adapter):
        resolver = AttributeResolver(adapter, ["title"])
        assert resolver.attribute_overrides is resolver.attribute_overrides
        with pytest.raises(AttributeError):
            resolver.attribute_overrides["title"].label = "Changed"

    def test_resolved_nested_configs_are_read_only(self, adapter):
        overrides = {"title": {"column_config": {"width": 200}}}
        resolver = AttributeResolver(adapter, ["title"], overrides=overrides)
        with pytest.raises(TypeError):
            resolver.attribute_overrides["title"].column_config["width"] = 5
        assert resolver.attribute_overrides["title"].column_config == {"width": 200}

        overrides["title"]["column_config"]["width"] = 5
        assert resolver.attribute_overrides["title"].column_config == {"width": 200}

    @pytest.mark.parametrize("name", ["publisher__name", "author__nickname"])
    def test_invalid_association_path(self, adapter, name):
        resolver = AttributeResolver(adapter, ["title", name])
        with pytest.raises(ResolutionError) as excinfo:
            resolver.attribute_overrides
        assert excinfo.value.attribute_name == name

    def test_custom_augment(self, adapter):
        def augment(c):
            c.set_defaults()
            c.read_only = c.name == "price"

        resolved = AttributeResolver(adapter, ["title", "price"], augment=augment).attribute_overrides
        assert resolved["title"].read_only is False
        assert resolved["price"].read_only is True


@pytest.mark.django_db
class TestAssociationValueDefaults:
    def test_association_defaults(self, adapter, hesse):
        overrides = {"author__name": {"default_value": hesse.pk}, "title": {"default_value": "Untitled"}}
        resolver = AttributeResolver(adapter, ["author__name", "author__last_name", "title"], overrides=overrides)
        assert resolver.association_value_defaults() == {"author__name": "Herman Hesse"}

    def test_missing_default_record(self, adapter):
        resolver = AttributeResolver(adapter, ["author__name"], overrides={"author__name": {"default_value": 9999}})
        with pytest.raises(RecordNotFound) as excinfo:
            resolver.association_value_defaults()
        assert excinfo.value.attribute_name == "author__name"

    def test_defaults_are_memoized(self, adapter, hesse, django_assert_num_queries):
        resolver = AttributeResolver(adapter, ["author__name"], overrides={"author__name": {"default_value": hesse.pk}})
        first = resolver.association_value_defaults()
        with django_assert_num_queries(0):
            assert resolver.association_value_defaults() is first
