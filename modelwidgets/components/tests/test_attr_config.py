import pytest

from modelwidgets.components.attr_config import AttrConfig
from modelwidgets.components.data_adapters import DjangoModelAdapter
from modelwidgets.components.exceptions import ConfigurationError
from modelwidgets.library.models import Book


@pytest.fixture
def adapter():
    return DjangoModelAdapter(Book)


class TestAttrConfig:
    def test_association_helpers(self, adapter):
        c = AttrConfig("author__name", adapter)
        assert c.is_association
        assert c.association_name == "author"
        assert c.association_attribute == "name"

        plain = AttrConfig("title", adapter)
        assert not plain.is_association
        assert plain.association_name is None

    def test_set_defaults(self, adapter):
        c = AttrConfig("published_on", adapter)
        c.set_defaults()
        assert c.type == "date"
        assert c.label == "Published on"
        assert c.read_only is False
        assert c.format == "Y-m-d"

    def test_set_defaults_keeps_explicit_values(self, adapter):
        c = AttrConfig("title", adapter, label="Book title", read_only=True)
        c.set_defaults()
        assert c.label == "Book title"
        assert c.read_only is True
        assert c.type == "string"

    def test_primary_key_is_read_only(self, adapter):
        c = AttrConfig("id", adapter)
        c.set_defaults()
        assert c.read_only is True
        assert c.type == "integer"

    def test_virtual_attribute_with_setter_is_editable(self, adapter):
        c = AttrConfig("summary", adapter, setter=lambda r, v: None)
        c.set_defaults()
        assert c.read_only is False
        assert c.type == "string"
        assert c.label == "Summary"

    def test_merge_deep_merges_nested_configs(self, adapter):
        c = AttrConfig("title", adapter, column_config={"width": 200, "attrs": {"td": {"class": "a"}}})
        c.merge({"label": "Name", "column_config": {"attrs": {"th": {"class": "b"}}}})
        assert c.label == "Name"
        assert c.column_config == {"width": 200, "attrs": {"td": {"class": "a"}, "th": {"class": "b"}}}

    def test_merge_unknown_option(self, adapter):
        with pytest.raises(ConfigurationError):
            AttrConfig("title", adapter).merge({"colour": "red"})

    @pytest.mark.parametrize(
        "options,rendered,in_data",
        [
            ({}, True, True),
            ({"meta": True}, False, True),
            ({"excluded": True}, False, False),
            ({"meta": True, "excluded": True}, False, False),
        ],
    )
    def test_visibility(self, adapter, options, rendered, in_data):
        c = AttrConfig("title", adapter, **options)
        assert c.is_rendered is rendered
        assert c.in_data is in_data

    def test_blank_line(self, adapter):
        assert AttrConfig("author__name", adapter).blank_line == "---"
        assert AttrConfig("author__name", adapter, editor_config={"blank_line": False}).blank_line is False

    def test_freeze(self, adapter):
        c = AttrConfig("title", adapter).freeze()
        with pytest.raises(AttributeError):
            c.label = "Other"

    def test_freeze_nested_configs(self, adapter):
        c = AttrConfig("title", adapter, column_config={"width": 200, "attrs": {"td": {"class": "a"}}}).freeze()
        with pytest.raises(TypeError):
            c.column_config["width"] = 5
        with pytest.raises(TypeError):
            c.column_config["attrs"]["td"] = {}
        with pytest.raises(TypeError):
            c.editor_config["blank_line"] = False
        assert c.column_config == {"width": 200, "attrs": {"td": {"class": "a"}}}

    def test_to_dict_returns_plain_dicts(self, adapter):
        c = AttrConfig("title", adapter, field_config={"widget_attrs": {"rows": 3}}).freeze()
        data = c.to_dict()
        data["field_config"]["widget_attrs"]["rows"] = 5
        assert c.field_config["widget_attrs"]["rows"] == 3

    def test_to_dict_skips_callables_and_empty_values(self, adapter):
        c = AttrConfig("title", adapter, label="Title", getter=lambda r: r.title, column_config={})
        assert c.to_dict() == {"name": "title", "label": "Title", "excluded": False, "meta": False}
