import logging
from dataclasses import dataclass, field
from typing import Any

from django.core.exceptions import FieldDoesNotExist, ValidationError
from django.db import models
from django.db.models import ProtectedError
from django.utils.text import capfirst

from modelwidgets.components.attr_config import ASSOCIATION_SEPARATOR
from modelwidgets.components.exceptions import ConfigurationError, RecordNotFound, ResolutionError

logger = logging.getLogger(__name__)

FIELD_TYPES = {
    "AutoField": "integer",
    "BigAutoField": "integer",
    "SmallAutoField": "integer",
    "IntegerField": "integer",
    "BigIntegerField": "integer",
    "SmallIntegerField": "integer",
    "PositiveIntegerField": "integer",
    "PositiveBigIntegerField": "integer",
    "PositiveSmallIntegerField": "integer",
    "ForeignKey": "integer",
    "OneToOneField": "integer",
    "FloatField": "float",
    "DecimalField": "decimal",
    "BooleanField": "boolean",
    "DateField": "date",
    "DateTimeField": "datetime",
    "TimeField": "time",
    "TextField": "text",
    "JSONField": "json",
}

# attributes tried, in order, when picking what to show for an association
DISPLAY_ATTRIBUTES = ("name", "title", "first_name")


@dataclass
class AttributePath:
    """Result of walking an attribute name through a model's associations."""

    name: str
    model: Any  # model the last segment belongs to
    attribute: str
    model_field: Any = None  # concrete field for the last segment, None for virtual attributes
    relations: list = field(default_factory=list)  # association fields traversed

    @property
    def is_concrete(self):
        return self.model_field is not None


class AbstractAdapter:
    """Translates a data model's schema and records for components.

    Adapters register themselves with `AbstractAdapter.register`; use
    `AbstractAdapter.for_model(model)` to get an adapter for a model class.
    """

    _registry = []

    def __init__(self, model):
        self.model = model

    @classmethod
    def register(cls, adapter_class):
        cls._registry.append(adapter_class)
        return adapter_class

    @classmethod
    def handles(cls, model):
        return False

    @classmethod
    def adapter_class(cls, model):
        for adapter_class in reversed(cls._registry):
            if adapter_class.handles(model):
                return adapter_class
        raise ConfigurationError(f"No data adapter available for {model!r}")

    @classmethod
    def for_model(cls, model):
        return cls.adapter_class(model)(model)

    @property
    def primary_key(self):
        raise NotImplementedError

    def model_attributes(self):
        raise NotImplementedError

    def class_for(self, association_name):
        raise NotImplementedError

    def find_record(self, record_id):
        raise NotImplementedError

    def resolve_path(self, name):
        raise NotImplementedError

    def attr_type(self, name):
        raise NotImplementedError

    def human_attribute_name(self, name):
        raise NotImplementedError

    def is_editable(self, name):
        raise NotImplementedError

    def is_required(self, name):
        raise NotImplementedError

    def get_relation(self, scope=None):
        raise NotImplementedError

    def apply_sorting(self, relation, sorters, columns):
        raise NotImplementedError

    def get_records(self, params, columns, relation=None):
        raise NotImplementedError

    def count_records(self, params, columns, relation=None):
        raise NotImplementedError

    def read_path(self, record, path):
        raise NotImplementedError

    def record_value_for_attribute(self, record, attr):
        raise NotImplementedError

    def set_record_value_for_attribute(self, record, attr, value):
        raise NotImplementedError

    def association_pk(self, record, attr):
        raise NotImplementedError

    def new_record(self, values=None):
        raise NotImplementedError

    def save_record(self, record):
        raise NotImplementedError

    def destroy(self, ids):
        raise NotImplementedError

    @staticmethod
    def errors_array(error):
        if isinstance(error, ValidationError):
            return error.messages
        if isinstance(error, ProtectedError):
            return [str(error.args[0])]
        return [str(error)]


@AbstractAdapter.register
class DjangoModelAdapter(AbstractAdapter):
    @classmethod
    def handles(cls, model):
        return isinstance(model, type) and issubclass(model, models.Model)

    @property
    def primary_key(self):
        return self.model._meta.pk.name

    def model_attributes(self):
        """Concrete fields in declaration order, with foreign keys pointing at a display attribute."""
        names = []
        for model_field in self.model._meta.concrete_fields:
            if model_field.is_relation:
                display = self.display_attribute(model_field.related_model)
                names.append(f"{model_field.name}{ASSOCIATION_SEPARATOR}{display}")
            else:
                names.append(model_field.name)
        return names

    @staticmethod
    def display_attribute(model):
        for candidate in DISPLAY_ATTRIBUTES:
            if hasattr(model, candidate):
                return candidate
        return model._meta.pk.name

    def class_for(self, association_name):
        return self._association_field(self.model, association_name, association_name).related_model

    def find_record(self, record_id):
        try:
            return self.model._default_manager.get(pk=record_id)
        except (self.model.DoesNotExist, ValueError, TypeError, ValidationError):
            raise RecordNotFound(self.model, record_id)

    def resolve_path(self, name):
        segments = name.split(ASSOCIATION_SEPARATOR)
        model = self.model
        relations = []
        for segment in segments[:-1]:
            association = self._association_field(model, segment, name)
            relations.append(association)
            model = association.related_model

        attribute = segments[-1]
        concrete = self._concrete_field(model, attribute)
        if concrete is None and relations and not hasattr(model, attribute):
            raise ResolutionError(f"{model.__name__} has no attribute '{attribute}'", attribute_name=name)
        return AttributePath(name=name, model=model, attribute=attribute, model_field=concrete, relations=relations)

    @staticmethod
    def _association_field(model, segment, name):
        try:
            model_field = model._meta.get_field(segment)
        except FieldDoesNotExist:
            raise ResolutionError(f"{model.__name__} has no association '{segment}'", attribute_name=name)
        if not model_field.is_relation or model_field.related_model is None:
            raise ResolutionError(f"{model.__name__}.{segment} is not an association", attribute_name=name)
        return model_field

    @staticmethod
    def _concrete_field(model, attribute):
        try:
            model_field = model._meta.get_field(attribute)
        except FieldDoesNotExist:
            return None
        return model_field if model_field.concrete else None

    def attr_type(self, name):
        path = self.resolve_path(name)
        if not path.is_concrete:
            return "string"
        return FIELD_TYPES.get(path.model_field.get_internal_type(), "string")

    def human_attribute_name(self, name):
        path = self.resolve_path(name)
        parts = [str(relation.verbose_name) for relation in path.relations]
        if path.is_concrete:
            parts.append(str(path.model_field.verbose_name))
        else:
            parts.append(path.attribute.replace("_", " "))
        return capfirst(" ".join(parts))

    def is_editable(self, name):
        path = self.resolve_path(name)
        if path.relations:
            return len(path.relations) == 1 and path.relations[0].editable
        if path.is_concrete:
            return path.model_field.editable and not path.model_field.primary_key
        return False

    def is_required(self, name):
        path = self.resolve_path(name)
        if path.relations:
            return not path.relations[0].blank
        if path.is_concrete:
            return not path.model_field.blank
        return False

    def get_relation(self, scope=None):
        relation = self.model._default_manager.all()
        if scope is None:
            return relation
        if callable(scope):
            return scope(relation)
        return relation.filter(**scope)

    def apply_sorting(self, relation, sorters, columns):
        if not sorters:
            return relation
        if isinstance(sorters, (str, dict)):
            sorters = [sorters]

        ordering = []
        for sorter in sorters:
            if isinstance(sorter, str):
                sorter = {"property": sorter}
            prop = sorter["property"]
            direction = str(sorter.get("direction", "ASC")).upper()
            attr = (columns or {}).get(prop)
            if attr is not None and attr.sorting_scope is not None:
                relation = attr.sorting_scope(relation, direction)
                continue
            if prop != self.primary_key:
                try:
                    path = self.resolve_path(prop)
                except ResolutionError:
                    logger.warning("Ignoring sorter on unknown attribute %s of %s", prop, self.model.__name__)
                    continue
                if not path.is_concrete:
                    logger.debug("Can't sort %s on virtual attribute %s", self.model.__name__, prop)
                    continue
            ordering.append(f"-{prop}" if direction == "DESC" else prop)

        if ordering:
            relation = relation.order_by(*ordering)
        return relation

    def get_records(self, params, columns, relation=None):
        if relation is None:
            relation = self.get_relation(params.get("scope"))
        relation = self.apply_sorting(relation, params.get("sorters"), columns)
        start = int(params.get("start") or 0)
        limit = params.get("limit")
        if limit:
            return list(relation[start : start + int(limit)])
        return list(relation[start:])

    def count_records(self, params, columns, relation=None):
        if relation is None:
            relation = self.get_relation(params.get("scope"))
        return relation.count()

    def read_path(self, record, path):
        value = record
        for segment in path.split(ASSOCIATION_SEPARATOR):
            if value is None:
                return None
            value = getattr(value, segment)
            if callable(value) and not isinstance(value, models.Manager):
                value = value()
        return value

    def _last_record(self, record, name):
        segments = name.split(ASSOCIATION_SEPARATOR)
        for segment in segments[:-1]:
            if record is None:
                return None
            record = getattr(record, segment)
        return record

    def record_value_for_attribute(self, record, attr):
        if attr.getter is not None:
            target = self._last_record(record, attr.name) if attr.is_association else record
            return attr.getter(target) if target is not None else None
        return self.read_path(record, attr.name)

    def set_record_value_for_attribute(self, record, attr, value):
        if attr.setter is not None:
            attr.setter(record, value)
            return

        path = self.resolve_path(attr.name)
        if path.relations:
            if len(path.relations) > 1:
                raise ResolutionError(f"Nested association '{attr.name}' can't be assigned", attribute_name=attr.name)
            association = path.relations[0]
            if isinstance(value, str) and value and not value.isdigit() and path.is_concrete:
                # the value names the associated record rather than identifying it
                value = association.related_model._default_manager.filter(**{path.attribute: value}).first()
            if value is None or isinstance(value, models.Model):
                setattr(record, association.name, value)
            else:
                setattr(record, association.attname, value or None)
        elif path.is_concrete:
            setattr(record, path.model_field.attname, value)
        else:
            setattr(record, attr.name, value)

    def association_pk(self, record, attr):
        path = self.resolve_path(attr.name)
        if len(path.relations) != 1:
            return None
        return getattr(record, path.relations[0].attname)

    def new_record(self, values=None):
        return self.model(**(values or {}))

    def save_record(self, record):
        record.full_clean()
        record.save()
        return record

    def destroy(self, ids):
        result = {"deleted": [], "errors": []}
        for record_id in ids:
            try:
                record = self.find_record(record_id)
            except RecordNotFound as e:
                result["errors"].append(str(e))
                continue
            try:
                record.delete()
            except (ProtectedError, ValidationError) as e:
                logger.info("Could not delete %s %s: %s", self.model.__name__, record_id, e)
                result["errors"].extend(self.errors_array(e))
            else:
                result["deleted"].append(record_id)
        return result
