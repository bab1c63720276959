"""
"Properties" gear tool for components.

A component configured with ``config_tool=True`` gets a gear tool in its header.
The gear opens a modal window that loads the ``properties`` sub-component: a tab
panel holding whatever the component returns from ``configuration_components()``
(which *must* be defined when the tool is enabled). When the window is submitted
the owner reloads the component so that the new configuration takes effect.
"""
import logging

logger = logging.getLogger(__name__)

GEAR_TOOL = "gear"
PROPERTIES_COMPONENT = "properties"

WINDOW_SIZE_RATIO = 0.9


class ConfigurationTool:
    def __init__(self, host_id, configuration_components):
        self.host_id = host_id
        self.configuration_components = list(configuration_components)

    @property
    def endpoint(self):
        return f"{self.host_id}__{PROPERTIES_COMPONENT}__get_component"

    def extend_tools(self, tools):
        return [*tools, GEAR_TOOL]

    def extend_components(self, components):
        from modelwidgets.components.base import ComponentSpec, TabPanel

        extended = dict(components)
        extended[PROPERTIES_COMPONENT] = ComponentSpec(
            klass=TabPanel,
            items=self.configuration_components,
            title=False,
            lazy=True,
        )
        return extended

    def extend_client_properties(self, properties):
        extended = dict(properties)
        extended[GEAR_TOOL] = {
            "window": {
                "title": "Config",
                "layout": "fit",
                "modal": True,
                "width_ratio": WINDOW_SIZE_RATIO,
                "height_ratio": WINDOW_SIZE_RATIO,
                "close_action": "destroy",
                "buttons": [{"text": "Submit", "close_result": "OK"}],
            },
            "load_component": self.endpoint,
            "on_close": {"OK": "reload_owner"},
        }
        return extended
