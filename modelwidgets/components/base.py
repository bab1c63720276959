import logging
import re
from dataclasses import dataclass, field, fields
from functools import cached_property
from typing import Any

from django.apps import apps

from modelwidgets.components.attributes import ComponentDefinition
from modelwidgets.components.configuration_tool import ConfigurationTool
from modelwidgets.components.data_adapters import AbstractAdapter
from modelwidgets.components.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "__"


@dataclass
class ComponentConfig:
    model: Any = None
    attributes: list | None = None
    columns: list | None = None
    attribute_overrides: dict = field(default_factory=dict)
    paging: bool = False
    persistence: bool = False
    store_config: dict = field(default_factory=dict)
    scope: Any = None
    config_tool: bool = False
    title: Any = None
    item_id: str | None = None
    tools: list = field(default_factory=list)
    items: list = field(default_factory=list)
    extra: dict = field(default_factory=dict)

    @classmethod
    def build(cls, options):
        known = {f.name for f in fields(cls)}
        config = cls(**{key: value for key, value in options.items() if key in known})
        config.extra.update({key: value for key, value in options.items() if key not in known})
        return config


@dataclass
class ComponentSpec:
    """Describes a nested component; instantiated lazily through `Component.component_instance`."""

    klass: Any
    items: list = field(default_factory=list)
    title: Any = None
    lazy: bool = False
    config: dict = field(default_factory=dict)

    def to_dict(self):
        klass = self.klass.__name__ if isinstance(self.klass, type) else str(self.klass)
        return {
            "klass": klass,
            "items": [item.to_dict() if isinstance(item, ComponentSpec) else item for item in self.items],
            "title": self.title,
            "lazy": self.lazy,
            **self.config,
        }


def resolve_model(model):
    if model is None:
        raise ConfigurationError("A model is required")
    if isinstance(model, str):
        try:
            return apps.get_model(model)
        except (LookupError, ValueError) as e:
            raise ConfigurationError(f"Unknown model '{model}'") from e
    return model


def default_item_id(klass):
    return re.sub(r"(?<!^)(?=[A-Z])", "_", klass.__name__).lower()


class Component:
    """Base for all components.

    Subclasses adjust the configuration in `configure`, always calling `super()`:

        class Books(Grid):
            def configure(self, c):
                super().configure(c)
                c.model = "library.Book"
                c.paging = True

    The configuration is computed once, when the component is instantiated.
    """

    definition = ComponentDefinition()
    declared_attributes = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.definition = cls.definition.derive()
        for name, configurator in cls.__dict__.get("declared_attributes", {}).items():
            cls.definition.attribute(name, configurator)

    def __init__(self, parent=None, **options):
        self.parent = parent
        self.config = ComponentConfig.build(options)
        self.configure(self.config)
        self.item_id = self.config.item_id or default_item_id(type(self))
        self.configuration_tool = self._build_configuration_tool()

    def configure(self, c):
        pass

    @property
    def js_id(self):
        if self.parent is None:
            return self.item_id
        return f"{self.parent.js_id}{PATH_SEPARATOR}{self.item_id}"

    @property
    def config_tool_enabled(self):
        return self.configuration_tool is not None

    def _build_configuration_tool(self):
        if not self.config.config_tool:
            return None
        configuration_components = getattr(self, "configuration_components", None)
        if configuration_components is None:
            raise ConfigurationError(
                f"{type(self).__name__} enables the configuration tool but defines no configuration_components"
            )
        logger.debug("Configuration tool enabled for %s", self.js_id)
        return ConfigurationTool(self.js_id, configuration_components())

    def tools(self):
        tools = list(self.config.tools)
        if self.configuration_tool:
            tools = self.configuration_tool.extend_tools(tools)
        return tools

    def components(self):
        components = {}
        if self.configuration_tool:
            components = self.configuration_tool.extend_components(components)
        return components

    def client_properties(self):
        properties = {}
        if self.configuration_tool:
            properties = self.configuration_tool.extend_client_properties(properties)
        return properties

    def component_instance(self, name):
        try:
            spec = self.components()[name]
        except KeyError:
            raise ConfigurationError(f"{type(self).__name__} has no component '{name}'")
        if not (isinstance(spec.klass, type) and issubclass(spec.klass, Component)):
            raise ConfigurationError(f"Component '{name}' of {type(self).__name__} can't be instantiated")
        options = dict(spec.config)
        options.pop("item_id", None)
        if spec.items:
            options["items"] = spec.items
        if spec.title is not None:
            options["title"] = spec.title
        return spec.klass(parent=self, item_id=name, **options)

    def client_config(self):
        return {
            "id": self.js_id,
            "item_id": self.item_id,
            "title": self.config.title,
            "tools": self.tools(),
            "components": {
                name: spec.to_dict() for name, spec in self.components().items() if not spec.lazy
            },
            "lazy_components": [name for name, spec in self.components().items() if spec.lazy],
            "properties": self.client_properties(),
        }


class TabPanel(Component):
    """Container showing each of its `items` (component specs) in a tab."""

    def tab_names(self):
        return [item.config.get("item_id") or f"tab_{index}" for index, item in enumerate(self.config.items)]

    def components(self):
        components = super().components()
        components.update(zip(self.tab_names(), self.config.items))
        return components

    def client_config(self):
        config = super().client_config()
        config["items"] = self.tab_names()
        return config


class ModelComponent(Component):
    """A component backed by a model, resolved through its data adapter."""

    @cached_property
    def model(self):
        return resolve_model(self.config.model)

    @cached_property
    def model_adapter(self):
        return AbstractAdapter.for_model(self.model)
