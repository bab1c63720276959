import pytest
from django.core.cache import cache

from modelwidgets.library.models import Author, Book
from modelwidgets.library.tests.factories import AuthorFactory, BookFactory


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def hesse(db) -> Author:
    return AuthorFactory(first_name="Herman", last_name="Hesse")


@pytest.fixture
def castaneda(db) -> Author:
    return AuthorFactory(first_name="Carlos", last_name="Castaneda")


@pytest.fixture
def book(hesse) -> Book:
    return BookFactory(author=hesse, title="Steppenwolf")


@pytest.fixture
def books(hesse, castaneda) -> list[Book]:
    return [
        BookFactory(author=hesse, title="Siddhartha"),
        BookFactory(author=castaneda, title="Journey to Ixtlan"),
        BookFactory(author=hesse, title="Demian"),
    ]
