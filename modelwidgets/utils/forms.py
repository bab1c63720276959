from django import forms

DATE_INPUT = forms.DateInput(format="%Y-%m-%d", attrs={"type": "date"})
DATETIME_INPUT = forms.DateTimeInput(format="%Y-%m-%dT%H:%M", attrs={"type": "datetime-local"})
TIME_INPUT = forms.TimeInput(format="%H:%M", attrs={"type": "time"})

FORM_BASE_STYLE = {
    "textarea": "base-textarea",
    "select": "base-dropdown",
    "checkbox": "simple-toggle",
    "base": "base-input",
}


def widget_css_class(widget):
    if isinstance(widget, forms.Textarea):
        return FORM_BASE_STYLE["textarea"]
    if isinstance(widget, forms.Select):
        return FORM_BASE_STYLE["select"]
    if isinstance(widget, forms.CheckboxInput):
        return FORM_BASE_STYLE["checkbox"]
    return FORM_BASE_STYLE["base"]
