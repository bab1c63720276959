from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ComponentsConfig(AppConfig):
    name = "modelwidgets.components"
    label = "modelwidgets"
    verbose_name = _("Model widgets")
