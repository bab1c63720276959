import logging
from functools import cached_property

from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.utils.html import escape

from modelwidgets.components.attributes import Attributes
from modelwidgets.components.base import ModelComponent
from modelwidgets.components.exceptions import RecordNotFound
from modelwidgets.grid.filters import build_filterset_class
from modelwidgets.grid.tables import build_table_class
from modelwidgets.utils.dicts import deep_merge
from modelwidgets.utils.tables import get_validated_page_size

logger = logging.getLogger(__name__)

PERSISTENCE_KEY_PREFIX = "modelwidgets:grid"


class Grid(Attributes, ModelComponent):
    """Grid over a model's records.

    Options: ``model``, ``attributes`` (``columns`` is accepted as an alias),
    ``attribute_overrides``, ``scope``, ``paging``, ``persistence``,
    ``store_config`` (``{"sorters": ...}`` for the initial sorting).
    """

    def attributes(self):
        if self.config.attributes is not None:
            return self.config.attributes
        if self.config.columns is not None:
            return self.config.columns
        return self.model_adapter.model_attributes()

    def column_config(self, c):
        column = {
            "name": c.name,
            "label": c.label,
            "type": c.type,
            "read_only": c.read_only,
        }
        if c.format:
            column["format"] = c.format
        if c.escape_html is not None:
            column["escape_html"] = c.escape_html
        return deep_merge(column, c.column_config)

    def columns(self):
        return [self.column_config(c) for c in self.attribute_resolver.rendered_attributes()]

    @cached_property
    def table_class(self):
        return build_table_class(self)

    @cached_property
    def filterset_class(self):
        return build_filterset_class(self)

    # persistence

    @property
    def persistence_key(self):
        return f"{PERSISTENCE_KEY_PREFIX}:{self.js_id}"

    @property
    def state(self):
        if not self.config.persistence:
            return {}
        return cache.get(self.persistence_key) or {}

    def store_state(self, key, value):
        if not self.config.persistence:
            return
        state = self.state
        state[key] = value
        cache.set(self.persistence_key, state, timeout=None)

    # data

    def sorters(self, params):
        sorters = params.get("sorters")
        if sorters:
            self.store_state("sorters", sorters)
            return sorters
        return self.state.get("sorters") or self.config.store_config.get("sorters")

    def page(self, params):
        """Requested page, falling back to the last one shown when persistence is on."""
        page = params.get("page")
        if page:
            self.store_state("page", int(page))
            return int(page)
        return self.state.get("page", 1)

    def get_relation(self, params):
        relation = self.model_adapter.get_relation(self.config.scope)
        filters = params.get("filters")
        if filters:
            relation = self.filterset_class(data=filters, queryset=relation).qs
        return relation

    def record_to_row(self, record):
        row = {self.model_adapter.primary_key: record.pk}
        for c in self.attribute_resolver.data_attributes():
            value = self.model_adapter.record_value_for_attribute(record, c)
            if c.escape_html and isinstance(value, str):
                value = escape(value)
            row[c.name] = value
        return row

    def read(self, params=None):
        """Records for the grid's store: one row per record covering every non-excluded attribute."""
        params = dict(params or {})
        params["sorters"] = self.sorters(params)
        relation = self.get_relation(params)
        columns = self.attribute_overrides()

        total = self.model_adapter.count_records(params, columns, relation=relation)
        if self.config.paging:
            params["limit"] = get_validated_page_size(params)
            if not params.get("start"):
                params["start"] = (self.page(params) - 1) * params["limit"]

        records = self.model_adapter.get_records(params, columns, relation=relation)
        return {"data": [self.record_to_row(record) for record in records], "total": total}

    def table(self, params=None):
        params = dict(params or {})
        relation = self.model_adapter.apply_sorting(
            self.get_relation(params), self.sorters(params), self.attribute_overrides()
        )
        table = self.table_class(relation, grid_id=self.js_id)
        if self.config.paging:
            table.paginate(page=self.page(params), per_page=get_validated_page_size(params))
        return table

    def default_values(self):
        return {
            c.name: c.default_value
            for c in self.attribute_resolver.data_attributes()
            if c.default_value is not None
        }

    def new_record_defaults(self):
        """Values a new record starts with, as shown to the user."""
        defaults = {
            c.name: c.default_value
            for c in self.attribute_resolver.data_attributes()
            if c.default_value is not None and not self.association_attr(c)
        }
        defaults.update(self.association_value_defaults())
        return defaults

    def _assign(self, record, values):
        columns = {c.name: c for c in self.attribute_resolver.data_attributes()}
        for name, value in values.items():
            c = columns.get(name)
            if c is None or c.read_only:
                logger.debug("Skipping non-editable attribute %s of %s", name, self.js_id)
                continue
            self.model_adapter.set_record_value_for_attribute(record, c, value)

    def _save(self, record, values, result):
        self._assign(record, values)
        try:
            self.model_adapter.save_record(record)
        except ValidationError as e:
            result["errors"].extend(self.model_adapter.errors_array(e))
        else:
            result["records"].append(self.record_to_row(record))

    def create(self, rows):
        result = {"records": [], "errors": []}
        for row in rows:
            record = self.model_adapter.new_record()
            self._save(record, {**self.default_values(), **row}, result)
        result["success"] = not result["errors"]
        logger.info("Created %s %s record(s) through %s", len(result["records"]), self.model.__name__, self.js_id)
        return result

    def update(self, rows):
        result = {"records": [], "errors": []}
        primary_key = self.model_adapter.primary_key
        for row in rows:
            values = dict(row)
            try:
                record = self.model_adapter.find_record(values.pop(primary_key, None))
            except RecordNotFound as e:
                result["errors"].append(str(e))
                continue
            self._save(record, values, result)
        result["success"] = not result["errors"]
        logger.info("Updated %s %s record(s) through %s", len(result["records"]), self.model.__name__, self.js_id)
        return result

    def destroy(self, ids):
        result = self.model_adapter.destroy(ids)
        result["success"] = not result["errors"]
        logger.info("Deleted %s %s record(s) through %s", len(result["deleted"]), self.model.__name__, self.js_id)
        return result

    def client_config(self):
        config = super().client_config()
        config.update(
            {
                "model": self.model._meta.label,
                "columns": self.columns(),
                "primary_key": self.model_adapter.primary_key,
                "paging": self.config.paging,
                "page_size": get_validated_page_size({}) if self.config.paging else None,
                "page": self.page({}) if self.config.paging else None,
                "persistence": self.config.persistence,
                "store_config": {**self.config.store_config, "sorters": self.sorters({})},
                "new_record_defaults": self.new_record_defaults(),
            }
        )
        return config
