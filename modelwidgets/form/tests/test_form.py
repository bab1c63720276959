import datetime

import pytest
from django import forms

from modelwidgets.components.exceptions import RecordNotFound
from modelwidgets.form import Form
from modelwidgets.library.components import BookForm
from modelwidgets.library.models import Book


def read_only(c):
    c.read_only = True


class TitleForm(Form):
    declared_attributes = {"price": read_only}

    def configure(self, c):
        super().configure(c)
        c.model = "library.Book"
        c.attributes = ["title"]


class TestFormFields:
    def test_field_names(self):
        assert list(BookForm().form_class.base_fields) == [
            "author__name",
            "title",
            "digitized",
            "notes",
            "published_on",
            "price",
        ]

    def test_field_types(self):
        fields = BookForm().form_class.base_fields
        assert isinstance(fields["title"], forms.CharField)
        assert fields["title"].required is True
        assert isinstance(fields["notes"].widget, forms.Textarea)
        assert isinstance(fields["digitized"], forms.BooleanField)
        assert fields["digitized"].required is False
        assert isinstance(fields["published_on"], forms.DateField)
        assert isinstance(fields["price"], forms.DecimalField)
        assert fields["published_on"].label == "Published on"

    def test_association_field(self):
        field = BookForm().form_class.base_fields["author__name"]
        assert isinstance(field, forms.ModelChoiceField)
        assert field.empty_label == "---"
        assert field.required is False

    def test_association_without_blank_line(self):
        form = BookForm(attribute_overrides={"author__name": {"editor_config": {"blank_line": False}}})
        assert form.form_class.base_fields["author__name"].empty_label is None

    def test_read_only_field_is_disabled(self):
        form = BookForm(attribute_overrides={"title": {"read_only": True}})
        field = form.form_class.base_fields["title"]
        assert field.disabled is True
        assert field.required is False

    def test_read_only_association_is_plain(self):
        form = BookForm(attribute_overrides={"author__name": {"read_only": True}})
        assert not isinstance(form.form_class.base_fields["author__name"], forms.ModelChoiceField)

    def test_field_config(self):
        form = BookForm(attribute_overrides={"title": {"field_config": {"help_text": "As printed on the cover"}}})
        assert form.form_class.base_fields["title"].help_text == "As printed on the cover"

    def test_declared_attribute_without_field(self):
        form = TitleForm()
        assert list(form.form_class.base_fields) == ["title"]
        assert form.attribute_overrides()["price"].read_only is True

    def test_meta_attributes_have_no_field(self):
        form = BookForm(attribute_overrides={"notes": {"meta": True}})
        assert "notes" not in form.form_class.base_fields

    def test_date_input_format(self):
        form = BookForm(attribute_overrides={"published_on": {"editor_config": {"date_format": "%d.%m.%Y"}}})
        assert form.form_class.base_fields["published_on"].input_formats == ["%d.%m.%Y"]

    def test_helper_layout(self):
        helper = BookForm(submit_label="Save").helper()
        assert helper.form_tag is False
        assert [field.fields[0] for field in helper.layout.fields[:-1]] == [
            "author__name",
            "title",
            "digitized",
            "notes",
            "published_on",
            "price",
        ]
        assert helper.layout.fields[-1].value == "Save"


@pytest.mark.django_db
class TestFormSubmit:
    def test_association_choices_follow_scope(self, hesse, castaneda):
        form = BookForm(attribute_overrides={"author__name": {"scope": {"last_name": "Hesse"}}})
        assert list(form.form_class.base_fields["author__name"].queryset) == [hesse]

    def test_create(self, hesse):
        result = BookForm().submit(
            {"author__name": hesse.pk, "title": "Gertrud", "published_on": "1910-01-01", "price": "12.50"}
        )
        assert result["success"]
        assert result["errors"] == {}

        book = Book.objects.get(title="Gertrud")
        assert book.author == hesse
        assert book.published_on == datetime.date(1910, 1, 1)
        assert result["record"]["author__name"] == hesse.pk

    def test_invalid_submit(self, db):
        result = BookForm().submit({"title": ""})
        assert not result["success"]
        assert "title" in result["errors"]
        assert not Book.objects.exists()

    def test_model_validation_errors(self, db):
        result = BookForm(attribute_overrides={"title": {"field_config": {"max_length": 1000}}}).submit(
            {"title": "x" * 300}
        )
        assert not result["success"]
        assert result["errors"]["__all__"]

    def test_initial_values_for_record(self, book, hesse):
        form = BookForm(record_id=book.pk)
        initial = form.initial()
        assert initial["author__name"] == hesse.pk
        assert initial["title"] == "Steppenwolf"

    def test_initial_values_for_new_record(self, db):
        form = BookForm(attribute_overrides={"title": {"default_value": "Untitled"}})
        assert form.initial() == {"title": "Untitled"}

    def test_update_record(self, book, castaneda):
        result = BookForm(record_id=book.pk).submit({"author__name": castaneda.pk, "title": "The Art of Dreaming"})
        assert result["success"]
        book.refresh_from_db()
        assert book.author == castaneda
        assert book.title == "The Art of Dreaming"
        assert Book.objects.count() == 1

    def test_read_only_values_are_kept(self, book):
        form = BookForm(record_id=book.pk, attribute_overrides={"title": {"read_only": True}})
        result = form.submit({"title": "Changed"})
        assert result["success"]
        book.refresh_from_db()
        assert book.title == "Steppenwolf"

    def test_missing_record(self, db):
        with pytest.raises(RecordNotFound):
            BookForm(record_id=9999).initial()

    def test_getter_in_form(self, book):
        form = Form(
            model="library.Book",
            attributes=["title", "author__last_name"],
            attribute_overrides={"author__last_name": {"read_only": True, "getter": lambda author: author.last_name}},
            record_id=book.pk,
        )
        assert form.initial() == {"title": "Steppenwolf", "author__last_name": "Hesse"}

    def test_client_config(self, db):
        config = BookForm().client_config()
        assert config["model"] == "library.Book"
        assert [field["name"] for field in config["fields"]] == [
            "author__name",
            "title",
            "digitized",
            "notes",
            "published_on",
            "price",
        ]
