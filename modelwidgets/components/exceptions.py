class ModelWidgetsError(Exception):
    pass


class ConfigurationError(ModelWidgetsError):
    """Raised when a component is configured with options it cannot honour."""


class ResolutionError(ModelWidgetsError):
    """Raised when an attribute cannot be resolved against its model.

    This covers association paths with an unknown segment, unknown attributes on
    the terminal model, and default values that point at a missing record.
    """

    def __init__(self, message, attribute_name=None):
        super().__init__(message)
        self.attribute_name = attribute_name


class RecordNotFound(ResolutionError):
    def __init__(self, model, record_id, attribute_name=None):
        super().__init__(f"{model.__name__} with id {record_id!r} does not exist", attribute_name=attribute_name)
        self.model = model
        self.record_id = record_id
