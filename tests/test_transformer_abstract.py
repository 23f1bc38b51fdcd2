import pytest

from book_transformers import Book2Transformer
from bumblebee import (Bumblebee, InvalidIncludeError, InvalidTransformerError, MissingIncludeHandlerError,
                       TransformerAbstract, TransformerNotSetError, include_handler)

TITLE = "Harry Potter and the Deathly Hallows"


class NoHandlerTransformer(TransformerAbstract):
    available_includes = ("author",)

    def transform(self, book):
        return {"title": book["title"]}


class DecoratedTransformer(TransformerAbstract):
    available_includes = ("writtenBy",)

    def transform(self, book):
        return {"title": book["title"]}

    @include_handler("writtenBy")
    def author(self, book):
        return self.item(book["author"], lambda author: author["n"])


class DefaultIncludeTransformer(TransformerAbstract):
    default_includes = ("author",)
    available_includes = ("school",)

    def transform(self, book):
        return {"title": book["title"]}

    def include_author(self, book):
        return self.item(book["author"], lambda author: {"name": author["n"]})

    def include_school(self, book):
        return "Hogwarts"


def test_missing_handler_is_reported_when_the_include_is_requested(run, book):
    # unrequested includes never need a handler
    assert run(Bumblebee.create().item(book).transform_with(NoHandlerTransformer).to_mapping()) == {"title": TITLE}

    with pytest.raises(MissingIncludeHandlerError) as err:
        run(Bumblebee.create().include("author").item(book).transform_with(NoHandlerTransformer).to_mapping())

    assert "include_author" in str(err.value)
    assert err.value.context == {"transformer": "NoHandlerTransformer", "include": "author"}


def test_include_handler_decorator_binds_a_method(run, book):
    transformed = run(Bumblebee.create()
                      .include("writtenBy")
                      .item(book)
                      .transform_with(DecoratedTransformer)
                      .to_mapping())

    assert transformed == {"title": TITLE, "writtenBy": "J. K. Rowling"}


def test_decorated_handlers_are_inherited(run, book):
    class Child(DecoratedTransformer):
        pass

    transformed = run(Bumblebee.create().include("written_by").item(book).transform_with(Child).to_mapping())

    assert transformed == {"title": TITLE, "writtenBy": "J. K. Rowling"}


def test_default_includes_are_always_resolved_first(run, book):
    transformed = run(Bumblebee.create().item(book).transform_with(DefaultIncludeTransformer).to_mapping())
    assert transformed == {"title": TITLE, "author": {"name": "J. K. Rowling"}}

    transformed = run(Bumblebee.create()
                      .include("school,author")
                      .item(book)
                      .transform_with(DefaultIncludeTransformer)
                      .to_mapping())
    assert list(transformed) == ["title", "author", "school"]


def test_default_includes_receive_requested_sub_paths(run, book):
    class Outer(TransformerAbstract):
        default_includes = ("book",)

        def transform(self, model):
            return {"id": model["id"]}

        def include_book(self, model):
            return self.item(model["book"], DefaultIncludeTransformer)

    transformed = run(Bumblebee.create()
                      .include("book.school")
                      .item({"id": 1, "book": book})
                      .transform_with(Outer)
                      .to_mapping())

    assert transformed == {
        "id": 1,
        "book": {"title": TITLE, "author": {"name": "J. K. Rowling"}, "school": "Hogwarts"},
    }


@pytest.mark.parametrize("declared", ["author.name", "author,school", ""])
def test_invalid_declared_names_are_rejected(run, book, declared):
    class BadTransformer(TransformerAbstract):
        available_includes = (declared,)

        def transform(self, book):
            return {"title": book["title"]}

    with pytest.raises(InvalidIncludeError):
        run(Bumblebee.create().include("author").item(book).transform_with(BadTransformer).to_mapping())


def test_spellings_sharing_a_handler_are_rejected(run, book):
    class BothSpellings(TransformerAbstract):
        available_includes = ("authorName", "author_name")

        def transform(self, book):
            return {"title": book["title"]}

        def include_author_name(self, book):
            return book["author"]["n"]

    with pytest.raises(InvalidIncludeError) as err:
        run(Bumblebee.create().include("author_name").item(book).transform_with(BothSpellings).to_mapping())

    assert err.value.context["conflicts_with"] == "authorName"


def test_default_and_available_spellings_sharing_a_handler_are_rejected(run, book):
    class SplitSpellings(TransformerAbstract):
        default_includes = ("authorName",)
        available_includes = ("author_name",)

        def transform(self, book):
            return {"title": book["title"]}

        def include_author_name(self, book):
            return book["author"]["n"]

    with pytest.raises(InvalidIncludeError):
        run(Bumblebee.create().include("author_name").item(book).transform_with(SplitSpellings).to_mapping())


def test_repeated_declarations_are_allowed(run, book):
    class Repeated(TransformerAbstract):
        available_includes = ("school", "school")

        def transform(self, book):
            return {"title": book["title"]}

        def include_school(self, book):
            return "Hogwarts"

    transformed = run(Bumblebee.create().include("school").item(book).transform_with(Repeated).to_mapping())
    assert transformed == {"title": TITLE, "school": "Hogwarts"}


def test_transform_variant(run, book):
    transformed = run(Bumblebee.create()
                      .item(book)
                      .transform_with(Book2Transformer, variant="summary")
                      .to_mapping())

    assert transformed == {"title": TITLE, "characters": 2}

    transformed = run(Bumblebee.create()
                      .item(book)
                      .transform_with(Book2Transformer)
                      .using_variant("summary")
                      .include("school")
                      .to_mapping())

    assert transformed == {"title": TITLE, "characters": 2, "school": "Hogwarts"}


def test_unknown_variant_is_rejected(run, book):
    with pytest.raises(InvalidTransformerError):
        run(Bumblebee.create().item(book).transform_with(Book2Transformer, variant="missing").to_mapping())


def test_transformer_from_import_string(run, book):
    transformed = run(Bumblebee.create()
                      .item(book)
                      .transform_with("book_transformers:Book2Transformer.summary")
                      .to_mapping())

    assert transformed == {"title": TITLE, "characters": 2}


@pytest.mark.parametrize("target", ["book_transformers", "book_transformers:Missing", "no_such_module:Thing"])
def test_bad_import_strings_are_rejected(run, book, target):
    with pytest.raises(InvalidTransformerError):
        run(Bumblebee.create().item(book).transform_with(target).to_mapping())


def test_non_transformer_classes_are_rejected(run, book):
    with pytest.raises(InvalidTransformerError):
        run(Bumblebee.create().item(book).transform_with(dict).to_mapping())


def test_transformer_instance_is_used_as_is(run, book):
    transformer = Book2Transformer()
    assert run(Bumblebee.create().item(book).transform_with(transformer).to_mapping()) == {"title": TITLE}


def test_missing_transformer(run, book):
    with pytest.raises(TransformerNotSetError):
        run(Bumblebee.create().item(book).to_mapping())


def test_none_item_data_serializes_as_null(run):
    assert run(Bumblebee.create().item(None).transform_with(Book2Transformer).to_mapping()) is None
