import pytest

from book_transformers import Book2Transformer, IDTransformer
from bumblebee import Bumblebee, BumblebeeConfig, Pagination, TransformerAbstract

TITLE = "Harry Potter and the Deathly Hallows"


class NullAuthorTransformer(TransformerAbstract):
    available_includes = ("author",)

    def transform(self, book):
        return {"title": book["title"]}

    def include_author(self, book):
        return self.null()


def test_data_serializer_wraps_every_level(run, book):
    transformed = run(Bumblebee.create()
                      .set_serializer("data")
                      .include("author,characters")
                      .item(book)
                      .transform_with(Book2Transformer)
                      .to_mapping())

    assert transformed == {
        "data": {
            "title": TITLE,
            "author": {"data": {"name": "J. K. Rowling"}},
            "characters": {"data": [{"name": "Harry Potter"}, {"name": "Hermione Granger"}]},
        },
    }


def test_data_serializer_leaves_primitive_includes_unwrapped(run, book):
    transformed = run(Bumblebee.create()
                      .set_serializer("data")
                      .include("school")
                      .item(book)
                      .transform_with(Book2Transformer)
                      .to_mapping())

    assert transformed == {"data": {"title": TITLE, "school": "Hogwarts"}}


def test_data_serializer_collection(run):
    transformed = run(Bumblebee.create()
                      .set_serializer("data")
                      .collection([{"id": 3}, {"id": 7}])
                      .transform_with(IDTransformer)
                      .to_mapping())

    assert transformed == {"data": [{"id": 3}, {"id": 7}]}


def test_data_serializer_null(run, book):
    assert run(Bumblebee.create().set_serializer("data").null().to_mapping()) == {"data": None}

    transformed = run(Bumblebee.create()
                      .set_serializer("data")
                      .include("author")
                      .item(book)
                      .transform_with(NullAuthorTransformer)
                      .to_mapping())

    assert transformed == {"data": {"title": TITLE, "author": {"data": None}}}


def test_sl_data_serializer_wraps_only_the_top_level(run, book):
    transformed = run(Bumblebee.create()
                      .set_serializer("sl-data")
                      .include("author,characters.actor")
                      .item(book)
                      .transform_with(Book2Transformer)
                      .to_mapping())

    assert transformed == {
        "data": {
            "title": TITLE,
            "author": {"name": "J. K. Rowling"},
            "characters": [
                {"name": "Harry Potter", "actor": {"name": "Daniel Radcliffe"}},
                {"name": "Hermione Granger", "actor": {"name": "Emma Watson"}},
            ],
        },
    }


def test_sl_data_serializer_nested_null(run, book):
    transformed = run(Bumblebee.create()
                      .set_serializer("sl-data")
                      .include("author")
                      .item(book)
                      .transform_with(NullAuthorTransformer)
                      .to_mapping())

    assert transformed == {"data": {"title": TITLE, "author": None}}


def test_default_serializer_comes_from_config(run):
    transformed = run(Bumblebee.create(BumblebeeConfig(serializer="data"))
                      .item({"id": 3})
                      .transform_with(IDTransformer)
                      .to_mapping())

    assert transformed == {"data": {"id": 3}}


def test_meta_is_attached_beside_data(run):
    transformed = run(Bumblebee.create()
                      .set_serializer("data")
                      .item({"id": 3})
                      .meta({"version": 2})
                      .transform_with(IDTransformer)
                      .to_mapping())

    assert transformed == {"data": {"id": 3}, "meta": {"version": 2}}


def test_paginate_attaches_pagination(run):
    transformed = run(Bumblebee.create()
                      .set_serializer("data")
                      .paginate([{"id": 3}, {"id": 7}], total=5, per_page=2, page=1)
                      .transform_with(IDTransformer)
                      .to_mapping())

    assert transformed == {
        "data": [{"id": 3}, {"id": 7}],
        "pagination": {
            "total": 5,
            "count": 2,
            "per_page": 2,
            "current_page": 1,
            "total_pages": 3,
        },
    }


def test_paginate_with_plain_serializer_wraps_the_list(run):
    transformed = run(Bumblebee.create()
                      .paginate([{"id": 3}], total=1, per_page=10)
                      .transform_with(IDTransformer)
                      .to_mapping())

    assert transformed["data"] == [{"id": 3}]
    assert transformed["pagination"]["total_pages"] == 1


def test_nested_collection_pagination(run):
    class PagedTransformer(TransformerAbstract):
        default_includes = ("rows",)

        def transform(self, model):
            return {"id": model["id"]}

        def include_rows(self, model):
            page = Pagination(total=4, count=2, per_page=2, current_page=2)
            return self.collection(model["rows"], IDTransformer, pagination=page)

    transformed = run(Bumblebee.create()
                      .set_serializer("sl-data")
                      .item({"id": 1, "rows": [{"id": 3}, {"id": 4}]})
                      .transform_with(PagedTransformer)
                      .to_mapping())

    assert transformed["data"]["rows"]["data"] == [{"id": 3}, {"id": 4}]
    assert transformed["data"]["rows"]["pagination"]["current_page"] == 2


@pytest.mark.parametrize("kwargs", [
    {"total": 1, "count": 1, "per_page": 0, "current_page": 1},
    {"total": 1, "count": 1, "per_page": 1, "current_page": 0},
    {"total": -1, "count": 1, "per_page": 1, "current_page": 1},
])
def test_pagination_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Pagination(**kwargs)
