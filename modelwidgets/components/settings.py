from django.conf import settings

DEFAULT_PAGE_SIZE = 25
PAGE_SIZE_OPTIONS = [25, 50, 100]
BLANK_LINE = "---"
DATE_FORMAT = "Y-m-d"
DATETIME_FORMAT = "Y-m-d H:i:s"


def get_default_page_size():
    return getattr(settings, "MODELWIDGETS_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)


def get_page_size_options():
    return getattr(settings, "MODELWIDGETS_PAGE_SIZE_OPTIONS", PAGE_SIZE_OPTIONS)


def get_blank_line():
    return getattr(settings, "MODELWIDGETS_BLANK_LINE", BLANK_LINE)


def get_date_format():
    return getattr(settings, "MODELWIDGETS_DATE_FORMAT", DATE_FORMAT)


def get_datetime_format():
    return getattr(settings, "MODELWIDGETS_DATETIME_FORMAT", DATETIME_FORMAT)
