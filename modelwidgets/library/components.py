from modelwidgets.components.base import ComponentSpec
from modelwidgets.form import Form
from modelwidgets.grid import Grid


def filter_by_author_name(queryset, value):
    return queryset.filter(author__first_name__icontains=value) | queryset.filter(author__last_name__icontains=value)


def sort_by_author_name(queryset, direction):
    prefix = "-" if direction == "DESC" else ""
    return queryset.order_by(f"{prefix}author__first_name", f"{prefix}author__last_name")


def author_name_attribute(c):
    c.filter_association_with = filter_by_author_name
    c.sorting_scope = sort_by_author_name


class BookCrud(Grid):
    def configure(self, c):
        super().configure(c)
        c.model = "library.Book"
        c.columns = ["author__name", "title"]  # do not modify
        c.persistence = True
        c.store_config = {"sorters": {"property": "id"}}


class BookCrudPaging(Grid):
    def configure(self, c):
        super().configure(c)
        c.model = "library.Book"
        c.attributes = ["author__name", "title"]  # do not modify
        c.paging = True
        c.persistence = True
        c.store_config = {"sorters": {"property": "id"}}


class Books(Grid):
    declared_attributes = {"author__name": author_name_attribute}

    def configure(self, c):
        super().configure(c)
        c.model = "library.Book"
        c.attributes = ["author__name", "title", "exemplars", "digitized", "published_on", "last_read_at", "price"]


@Books.definition.attribute("exemplars")
def exemplars_attribute(c):
    c.meta = True


class Authors(Grid):
    def configure(self, c):
        super().configure(c)
        c.model = "library.Author"


class BookForm(Form):
    declared_attributes = {"author__name": author_name_attribute}

    def configure(self, c):
        super().configure(c)
        c.model = "library.Book"
        c.attributes = ["author__name", "title", "digitized", "notes", "published_on", "price"]


class ConfigurableBooks(Books):
    def configure(self, c):
        super().configure(c)
        c.config_tool = True

    def configuration_components(self):
        return [
            ComponentSpec(klass=Authors, title="Authors", config={"item_id": "authors"}),
            ComponentSpec(klass=BookForm, title="New book", config={"item_id": "book_form"}),
        ]
