"""
Attribute descriptors.

An `AttrConfig` holds the resolved configuration for one model attribute as it is
exposed to grid columns and form fields. The following options are available:

label
    Column title / field label. Defaults to the model's verbose name for the
    attribute (for association paths, the association's verbose name followed by
    the attribute's).

read_only
    Whether the attribute may be edited through a grid or a form.

getter
    A callable receiving a record and returning the value shown in the cell or
    field, e.g. ``lambda r: f"{r.first_name} {r.last_name}"``. For association
    paths the last record of the path is passed, so for ``author__name`` the
    getter receives the author.

setter
    A callable receiving a record and the submitted value, expected to update
    the record accordingly.

scope
    A callable or a dict used to narrow down the options of an association
    editor. A callable receives the queryset, a dict is passed to ``filter()``.

filter_association_with
    A callable receiving the queryset and the value to filter by, e.g.
    ``lambda qs, value: qs.filter(author__last_name__icontains=value)``.

sorting_scope
    A callable receiving the queryset and the direction ("ASC" or "DESC"),
    used when the attribute cannot be sorted on directly.

format
    Display format for date and datetime attributes (Django date format syntax).

excluded
    The attribute is not used at all: no column, no field, no data.

meta
    The attribute's data is sent along with the records, but no column or field
    is created for it.

type
    Needed for virtual attributes so editors get configured properly.

escape_html
    HTML-escape the value before it leaves the server.

default_value
    Value used for new records. For association paths this is the id of the
    associated record.

column_config, field_config
    Extra configuration for the grid column / form field only.

editor_config
    Configuration shared by the column editor and the form field. Besides
    field options, it understands ``blank_line`` (the empty choice label for
    association editors, ``False`` to leave it out), ``date_format`` and
    ``time_format``.
"""
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from modelwidgets.components import settings as widget_settings
from modelwidgets.components.exceptions import ConfigurationError
from modelwidgets.utils.dicts import deep_merge, freeze_mapping, thaw

logger = logging.getLogger(__name__)

ASSOCIATION_SEPARATOR = "__"

DICT_OPTIONS = ("column_config", "field_config", "editor_config")


@dataclass
class AttrConfig:
    name: str
    model_adapter: Any = field(default=None, repr=False, compare=False)
    label: str | None = None
    read_only: bool | None = None
    type: str | None = None
    getter: Callable | None = None
    setter: Callable | None = None
    scope: Callable | dict | None = None
    filter_association_with: Callable | None = None
    sorting_scope: Callable | None = None
    format: str | None = None
    excluded: bool = False
    meta: bool = False
    escape_html: bool | None = None
    default_value: Any = None
    column_config: Mapping = field(default_factory=dict)
    field_config: Mapping = field(default_factory=dict)
    editor_config: Mapping = field(default_factory=dict)

    def __setattr__(self, key, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Attribute config '{self.name}' can't be changed once resolved")
        super().__setattr__(key, value)

    @classmethod
    def option_names(cls):
        return [f.name for f in fields(cls) if f.name not in ("name", "model_adapter")]

    @property
    def is_association(self):
        return ASSOCIATION_SEPARATOR in self.name

    @property
    def association_name(self):
        if not self.is_association:
            return None
        return self.name.split(ASSOCIATION_SEPARATOR, 1)[0]

    @property
    def association_attribute(self):
        if not self.is_association:
            return None
        return self.name.split(ASSOCIATION_SEPARATOR, 1)[1]

    @property
    def is_rendered(self):
        return not (self.excluded or self.meta)

    @property
    def in_data(self):
        return not self.excluded

    @property
    def blank_line(self):
        return self.editor_config.get("blank_line", widget_settings.get_blank_line())

    def set_defaults(self):
        """Fill type, label and read_only from the model adapter where still unset."""
        adapter = self.model_adapter
        if self.type is None:
            self.type = adapter.attr_type(self.name)
        if self.label is None:
            self.label = adapter.human_attribute_name(self.name)
        if self.read_only is None:
            self.read_only = self.setter is None and not adapter.is_editable(self.name)
        if self.format is None:
            if self.type == "date":
                self.format = widget_settings.get_date_format()
            elif self.type == "datetime":
                self.format = widget_settings.get_datetime_format()

    def merge(self, overrides):
        option_names = self.option_names()
        for key, value in overrides.items():
            if key not in option_names:
                raise ConfigurationError(f"Unknown option '{key}' for attribute '{self.name}'")
            if key in DICT_OPTIONS:
                value = deep_merge(getattr(self, key), value)
            setattr(self, key, value)
        return self

    def freeze(self):
        for option in DICT_OPTIONS:
            setattr(self, option, freeze_mapping(getattr(self, option)))
        self._frozen = True
        return self

    def to_dict(self):
        result = {"name": self.name}
        for option in self.option_names():
            value = getattr(self, option)
            if value is None or value == {} or callable(value):
                continue
            result[option] = thaw(value)
        return result
