import django_filters

FILTERS = {
    "string": (django_filters.CharFilter, "icontains"),
    "text": (django_filters.CharFilter, "icontains"),
    "integer": (django_filters.NumberFilter, "exact"),
    "float": (django_filters.NumberFilter, "exact"),
    "decimal": (django_filters.NumberFilter, "exact"),
    "boolean": (django_filters.BooleanFilter, "exact"),
    "date": (django_filters.DateFilter, "exact"),
    "datetime": (django_filters.DateTimeFilter, "exact"),
    "time": (django_filters.TimeFilter, "exact"),
}


def _association_filter_method(c):
    def method(queryset, name, value):
        return c.filter_association_with(queryset, value)

    return method


def build_filter(c, model_adapter):
    """Filter for one attribute, or None when the attribute can't be filtered on."""
    if c.filter_association_with is not None:
        return django_filters.CharFilter(label=c.label, method=_association_filter_method(c))
    if c.type not in FILTERS or not model_adapter.resolve_path(c.name).is_concrete:
        return None
    filter_class, lookup_expr = FILTERS[c.type]
    return filter_class(field_name=c.name, lookup_expr=lookup_expr, label=c.label)


def build_filterset_class(grid):
    filters = {}
    for c in grid.attribute_resolver.rendered_attributes():
        attribute_filter = build_filter(c, grid.model_adapter)
        if attribute_filter is not None:
            filters[c.name] = attribute_filter

    meta = type("Meta", (), {"model": grid.model, "fields": []})
    return type(f"{type(grid).__name__}FilterSet", (django_filters.FilterSet,), {**filters, "Meta": meta})
