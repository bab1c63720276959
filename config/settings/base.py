"""
Base settings to build other settings files upon.
"""
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve(strict=True).parent.parent.parent
# modelwidgets/
APPS_DIR = BASE_DIR / "modelwidgets"

env = environ.Env()

env.read_env(str(BASE_DIR / ".env"))

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = env.bool("DJANGO_DEBUG", False)
SECRET_KEY = env("DJANGO_SECRET_KEY", default="")
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"
USE_I18N = True
USE_TZ = True

# DATABASES
# ------------------------------------------------------------------------------
DATABASES = {
    "default": env.db(
        "DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
    ),
}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# APPS
# ------------------------------------------------------------------------------
DJANGO_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.forms",
]
THIRD_PARTY_APPS = [
    "crispy_forms",
    "crispy_tailwind",
    "django_filters",
    "django_tables2",
]

LOCAL_APPS = [
    "modelwidgets.components",
    "modelwidgets.library",
]
INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.template.context_processors.i18n",
                "django.template.context_processors.tz",
            ],
        },
    }
]

FORM_RENDERER = "django.forms.renderers.TemplatesSetting"
CRISPY_TEMPLATE_PACK = "tailwind"
CRISPY_ALLOWED_TEMPLATE_PACKS = "tailwind"

# CACHES
# ------------------------------------------------------------------------------
CACHES = {
    "default": env.cache("CACHE_URL", default="locmemcache://"),
}

# LOGGING
# ------------------------------------------------------------------------------
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(levelname)s %(asctime)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "modelwidgets": {
            "handlers": ["console"],
            "level": env("MODELWIDGETS_LOG_LEVEL", default="INFO"),
            "propagate": False,
        },
    },
}

DJANGO_TABLES2_TABLE_ATTRS = {
    "class": "table table-bordered mb-0",
    "thead": {
        "class": "",
    },
    "tfoot": {
        "class": "table-light fw-bold",
    },
}

# ------------------------------------------------------------------------------
# modelwidgets settings...
# ------------------------------------------------------------------------------
MODELWIDGETS_DEFAULT_PAGE_SIZE = env.int("MODELWIDGETS_DEFAULT_PAGE_SIZE", default=25)
MODELWIDGETS_PAGE_SIZE_OPTIONS = [25, 50, 100]
MODELWIDGETS_BLANK_LINE = env("MODELWIDGETS_BLANK_LINE", default="---")
MODELWIDGETS_DATE_FORMAT = "Y-m-d"
MODELWIDGETS_DATETIME_FORMAT = "Y-m-d H:i:s"
