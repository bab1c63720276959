import django_tables2 as tables

from modelwidgets.utils.dicts import thaw
from modelwidgets.utils.tables import EMPTY_VALUE, NUMBER_ATTR, TEXT_CENTER_ATTR, ModelWidgetsTable, merge_attrs

COLUMN_CLASSES = {
    "boolean": tables.BooleanColumn,
    "date": tables.DateColumn,
    "datetime": tables.DateTimeColumn,
}

NUMERIC_TYPES = ("integer", "float", "decimal")

# column_config keys passed straight to the django-tables2 column
COLUMN_OPTIONS = ("visible", "orderable", "footer", "linkify", "default", "localize")


def _column_attrs(c):
    attrs = {}
    if c.type in NUMERIC_TYPES:
        attrs = NUMBER_ATTR
    elif c.type == "boolean":
        attrs = TEXT_CENTER_ATTR
    return merge_attrs(attrs, c.column_config.get("attrs", {}))


def build_column(c, model_adapter):
    column_class = COLUMN_CLASSES.get(c.type, tables.Column)
    kwargs = {
        "verbose_name": c.label,
        "accessor": c.name,
        "attrs": _column_attrs(c),
        "default": EMPTY_VALUE,
        "orderable": c.sorting_scope is not None or model_adapter.resolve_path(c.name).is_concrete,
    }
    if c.type in ("date", "datetime") and c.format:
        kwargs["format"] = c.format
    if c.getter is not None:
        # the getter receives the whole record, the accessor only has to resolve
        kwargs["accessor"] = tables.A("pk")
        kwargs["empty_values"] = ()
    kwargs.update({key: thaw(value) for key, value in c.column_config.items() if key in COLUMN_OPTIONS})
    return column_class(**kwargs)


def _render_with_getter(c, model_adapter):
    def render(self, record):
        return model_adapter.record_value_for_attribute(record, c)

    return render


def _order_with_sorting_scope(c):
    def order(self, queryset, is_descending):
        return c.sorting_scope(queryset, "DESC" if is_descending else "ASC"), True

    return order


def build_table_class(grid):
    """Build a django-tables2 table class with one column per rendered attribute of `grid`."""
    attrs = {}
    sequence = []
    for c in grid.attribute_resolver.rendered_attributes():
        attrs[c.name] = build_column(c, grid.model_adapter)
        if c.getter is not None:
            attrs[f"render_{c.name}"] = _render_with_getter(c, grid.model_adapter)
        if c.sorting_scope is not None:
            attrs[f"order_{c.name}"] = _order_with_sorting_scope(c)
        sequence.append(c.name)

    attrs["Meta"] = type("Meta", (), {"sequence": sequence})
    return type(f"{type(grid).__name__}Table", (ModelWidgetsTable,), attrs)
