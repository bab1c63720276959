import logging
from functools import cached_property

from crispy_forms.helper import FormHelper
from crispy_forms.layout import Field, Layout, Submit
from django import forms
from django.core.exceptions import ValidationError

from modelwidgets.components.attributes import Attributes
from modelwidgets.components.base import ModelComponent
from modelwidgets.components.data_adapters import AbstractAdapter
from modelwidgets.utils.dicts import thaw
from modelwidgets.utils.forms import DATE_INPUT, DATETIME_INPUT, TIME_INPUT, widget_css_class

logger = logging.getLogger(__name__)

FIELD_CLASSES = {
    "integer": forms.IntegerField,
    "float": forms.FloatField,
    "decimal": forms.DecimalField,
    "boolean": forms.BooleanField,
    "date": forms.DateField,
    "datetime": forms.DateTimeField,
    "time": forms.TimeField,
    "json": forms.JSONField,
}

WIDGETS = {
    "date": DATE_INPUT,
    "datetime": DATETIME_INPUT,
    "time": TIME_INPUT,
    "text": forms.Textarea,
}


class Form(Attributes, ModelComponent):
    """Form editing a single record.

    Options: ``model``, ``attributes``, ``attribute_overrides``, ``record_id``
    (loads that record) and ``submit_label``.
    """

    def form_attributes(self):
        return self.attribute_resolver.rendered_attributes()

    def association_queryset(self, c):
        target = self.model_adapter.class_for(c.association_name)
        return AbstractAdapter.for_model(target).get_relation(c.scope)

    def build_field(self, c):
        kwargs = {"label": c.label, "required": not c.read_only and self.model_adapter.is_required(c.name)}
        editor_config = c.editor_config

        if c.is_association and not c.read_only:
            blank_line = c.blank_line
            kwargs["queryset"] = self.association_queryset(c)
            kwargs["empty_label"] = blank_line if blank_line is not False else None
            field_class = forms.ModelChoiceField
        else:
            field_class = FIELD_CLASSES.get(c.type, forms.CharField)
            if c.type == "boolean":
                kwargs["required"] = False
            if c.type in WIDGETS:
                kwargs["widget"] = WIDGETS[c.type]
            if c.type == "date" and editor_config.get("date_format"):
                kwargs["input_formats"] = [editor_config["date_format"]]
            if c.type == "time" and editor_config.get("time_format"):
                kwargs["input_formats"] = [editor_config["time_format"]]
            if c.type == "datetime" and editor_config.get("date_format") and editor_config.get("time_format"):
                kwargs["input_formats"] = [f"{editor_config['date_format']} {editor_config['time_format']}"]

        if c.read_only:
            kwargs["disabled"] = True
        kwargs.update(thaw(c.field_config))

        form_field = field_class(**kwargs)
        form_field.widget.attrs.setdefault("class", widget_css_class(form_field.widget))
        return form_field

    @cached_property
    def form_class(self):
        form_fields = {c.name: self.build_field(c) for c in self.form_attributes()}
        return type(f"{type(self).__name__}Form", (forms.Form,), form_fields)

    def helper(self):
        helper = FormHelper()
        helper.form_tag = False
        helper.layout = Layout(
            *[Field(c.name) for c in self.form_attributes()],
            Submit("submit", self.config.extra.get("submit_label", "Submit"), css_class="button button-md primary-dark"),
        )
        return helper

    @cached_property
    def record(self):
        record_id = self.config.extra.get("record_id")
        if record_id is None:
            return None
        return self.model_adapter.find_record(record_id)

    def values_for(self, record):
        values = {}
        for c in self.form_attributes():
            if c.is_association and not c.read_only and c.getter is None:
                values[c.name] = self.model_adapter.association_pk(record, c)
            else:
                values[c.name] = self.model_adapter.record_value_for_attribute(record, c)
        return values

    def initial(self):
        if self.record is not None:
            return self.values_for(self.record)
        return {c.name: c.default_value for c in self.form_attributes() if c.default_value is not None}

    def get_form(self, data=None):
        form = self.form_class(data=data, initial=self.initial())
        form.helper = self.helper()
        return form

    def submit(self, data, record=None):
        record = record or self.record or self.model_adapter.new_record()
        form = self.get_form(data)
        if not form.is_valid():
            return {"success": False, "record": None, "errors": form.errors.get_json_data()}

        columns = self.attribute_overrides()
        for name, value in form.cleaned_data.items():
            c = columns[name]
            if c.read_only:
                continue
            self.model_adapter.set_record_value_for_attribute(record, c, value)

        try:
            self.model_adapter.save_record(record)
        except ValidationError as e:
            logger.info("%s failed to save %s: %s", self.js_id, self.model.__name__, e)
            return {"success": False, "record": None, "errors": {"__all__": self.model_adapter.errors_array(e)}}
        return {"success": True, "record": self.values_for(record), "errors": {}}

    def client_config(self):
        config = super().client_config()
        config.update(
            {
                "model": self.model._meta.label,
                "fields": [c.to_dict() for c in self.form_attributes()],
                "values": self.initial(),
            }
        )
        return config
