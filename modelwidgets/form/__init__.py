from modelwidgets.form.form import Form

__all__ = ["Form"]
