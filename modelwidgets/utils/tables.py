import django_tables2 as tables

from modelwidgets.components import settings as widget_settings

TEXT_CENTER_ATTR = {"td": {"class": "text-center"}}
NUMBER_ATTR = {"td": {"class": "text-end"}}

EMPTY_VALUE = "—"


def merge_attrs(*dicts):
    merged = {}
    for d in dicts:
        for key, val in d.items():
            merged.setdefault(key, {}).update(val)
    return merged


class ModelWidgetsTable(tables.Table):
    """Base class of the tables generated for grids."""

    def __init__(self, *args, **kwargs):
        self.grid_id = kwargs.pop("grid_id", None)
        kwargs.setdefault("empty_text", "No records.")
        super().__init__(*args, **kwargs)


def get_validated_page_size(params):
    try:
        page_size = int(params.get("limit") or widget_settings.get_default_page_size())
    except (ValueError, TypeError):
        return widget_settings.get_default_page_size()
    if page_size in widget_settings.get_page_size_options():
        return page_size
    return widget_settings.get_default_page_size()
