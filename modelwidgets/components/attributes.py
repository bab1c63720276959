"""
Attribute resolution for model-backed components (grids and forms).

To change the default configuration of a model attribute (e.g. its label or
whether it is read-only) either declare it on the component class:

    class Users(Grid):
        def configure(self, c):
            super().configure(c)
            c.model = "users.User"

    @Users.definition.attribute("address")
    def address_attribute(c):
        c.read_only = True

or pass ``attribute_overrides`` when instantiating the component, which is
handy when composing components:

    Users(attribute_overrides={"birth_date": {"excluded": True}})

Subclasses may also override ``augment_attribute_config``:

    class Users(Grid):
        def augment_attribute_config(self, c):
            super().augment_attribute_config(c)
            if c.name in ("address", "salary"):
                c.read_only = True

Declared configurators run first, then the adapter fills in whatever is still
unset, then instance overrides are merged on top.
"""
import logging
from collections.abc import Callable
from functools import cached_property

from modelwidgets.components.attr_config import ASSOCIATION_SEPARATOR, AttrConfig
from modelwidgets.components.data_adapters import AbstractAdapter
from modelwidgets.components.exceptions import ResolutionError

logger = logging.getLogger(__name__)


class ComponentDefinition:
    """Class-level declarations of a component: attribute name -> configurator."""

    def __init__(self, declared_attributes=None):
        self.declared_attributes: dict[str, Callable] = dict(declared_attributes or {})

    def derive(self):
        return ComponentDefinition(self.declared_attributes)

    def attribute(self, name, configurator=None):
        """Register a configurator for `name`; usable as a decorator when `configurator` is omitted."""
        if configurator is None:

            def decorator(func):
                self.declared_attributes[name] = func
                return func

            return decorator

        self.declared_attributes[name] = configurator
        return configurator

    @property
    def declared_attribute_names(self):
        return list(self.declared_attributes)

    def apply(self, c):
        configurator = self.declared_attributes.get(c.name)
        if configurator is not None:
            configurator(c)


class AttributeResolver:
    def __init__(self, model_adapter, attribute_names=None, definition=None, overrides=None, augment=None):
        self.model_adapter = model_adapter
        self.attribute_names = attribute_names
        self.definition = definition or ComponentDefinition()
        self.overrides = overrides or {}
        self.augment = augment or self.default_augment
        self._association_value_defaults = None

    def default_augment(self, c):
        self.definition.apply(c)
        c.set_defaults()

    @cached_property
    def requested_names(self):
        """Names the component shows: the explicit list, or every model attribute."""
        base = self.attribute_names if self.attribute_names is not None else self.model_adapter.model_attributes()
        return list(dict.fromkeys(str(name) for name in base))

    def names(self):
        names = list(self.requested_names)
        for declared in self.definition.declared_attribute_names:
            if declared not in names:
                names.append(declared)
        return names

    @cached_property
    def attribute_overrides(self):
        resolved = {}
        for name in self.names():
            c = AttrConfig(name, self.model_adapter)
            try:
                self.augment(c)
            except ResolutionError as e:
                logger.warning("Failed to resolve attribute %s: %s", name, e)
                raise
            override = self.overrides.get(name)
            if override:
                c.merge(override)
            resolved[name] = c.freeze()
        logger.debug("Resolved attributes for %s: %s", self.model_adapter.model.__name__, list(resolved))
        return resolved

    def requested_attributes(self):
        # declared but unlisted attributes stay resolvable without being shown
        return [self.attribute_overrides[name] for name in self.requested_names]

    def rendered_attributes(self):
        return [c for c in self.requested_attributes() if c.is_rendered]

    def data_attributes(self):
        return [c for c in self.requested_attributes() if c.in_data]

    def association_value_defaults(self, attrs=None):
        """Values of association attributes' defaults, used when creating new records.

        Computed once: later calls return the first result whatever `attrs` is.
        """
        if self._association_value_defaults is not None:
            return self._association_value_defaults

        values = {}
        for c in attrs if attrs is not None else self.data_attributes():
            if not c.is_association or c.default_value is None:
                continue
            target = self.model_adapter.class_for(c.association_name)
            target_adapter = AbstractAdapter.for_model(target)
            try:
                record = target_adapter.find_record(c.default_value)
            except ResolutionError as e:
                e.attribute_name = c.name
                logger.warning("Default value for %s points at a missing record: %s", c.name, e)
                raise
            values[c.name] = target_adapter.read_path(record, c.association_attribute)

        logger.debug("Association defaults for %s: %s", self.model_adapter.model.__name__, values)
        self._association_value_defaults = values
        return values


class Attributes:
    """Mixin for components backed by a model; needs `model_adapter`, `config` and `definition`."""

    def attributes(self):
        """The (non-normalized) attribute names to be used. May be overridden."""
        if self.config.attributes is not None:
            return self.config.attributes
        return self.model_adapter.model_attributes()

    @cached_property
    def attribute_resolver(self):
        return AttributeResolver(
            self.model_adapter,
            attribute_names=self.attributes(),
            definition=self.definition,
            overrides=self.config.attribute_overrides,
            augment=self.augment_attribute_config,
        )

    def attribute_overrides(self):
        return self.attribute_resolver.attribute_overrides

    def apply_attribute_dsl(self, c):
        self.definition.apply(c)

    def augment_attribute_config(self, c):
        """Receives a minimal `AttrConfig` and extends it. May be overridden."""
        self.apply_attribute_dsl(c)
        c.set_defaults()

    @staticmethod
    def association_attr(attr):
        name = attr["name"] if isinstance(attr, dict) else attr.name
        return ASSOCIATION_SEPARATOR in str(name)

    def association_value_defaults(self, cols=None):
        return self.attribute_resolver.association_value_defaults(cols)
