import pytest

from bumblebee import InvalidIncludeError, ParsedIncludes, parse_includes


@pytest.mark.parametrize("spec", [None, "", [], ",", " , "])
def test_empty_specs_parse_to_nothing(spec):
    parsed = parse_includes(spec)
    assert len(parsed) == 0
    assert parsed.to_mapping() == {}


def test_string_and_sequence_forms_are_equivalent():
    from_string = parse_includes("author,characters.actor")
    from_sequence = parse_includes(["author", "characters.actor"])

    assert from_string.to_mapping() == from_sequence.to_mapping() == {
        "author": [],
        "characters": ["actor"],
    }


def test_entries_are_stripped():
    parsed = parse_includes(" author , characters.actor ")
    assert list(parsed) == ["author", "characters"]
    assert parsed["characters"] == ("actor",)


def test_path_segments_are_stripped():
    parsed = parse_includes("author, characters . actor . agent")

    assert parsed.to_mapping() == {"author": [], "characters": ["actor.agent"]}
    assert parsed.subpath("characters") == "actor.agent"
    assert parse_includes(["characters .actor", "characters. actor"])["characters"] == ("actor",)


def test_tails_keep_first_seen_order_without_duplicates():
    parsed = parse_includes("characters.house,author,characters.actor,characters.house")

    assert list(parsed) == ["characters", "author"]
    assert parsed["characters"] == ("house", "actor")


def test_deep_paths_keep_their_full_tail():
    parsed = parse_includes("characters.actor.agent")

    assert parsed["characters"] == ("actor.agent",)
    assert parsed.sub_includes("characters").to_mapping() == {"actor": ["agent"]}


def test_subpath_merges_several_names():
    parsed = parse_includes("authorName.books,author_name.agent")

    assert parsed.subpath("authorName", "author_name") == "books,agent"
    assert parsed.subpath("missing") == ""
    assert len(parsed.sub_includes("missing")) == 0


def test_sequence_entries_with_commas_are_rejected():
    with pytest.raises(InvalidIncludeError) as err:
        parse_includes(["author,characters"])

    assert err.value.context["entry"] == "author,characters"


@pytest.mark.parametrize("spec", ["author..name", ".author", "author.", "characters. .actor"])
def test_empty_segments_are_rejected(spec):
    with pytest.raises(InvalidIncludeError):
        parse_includes(spec)


def test_non_string_entries_are_rejected():
    with pytest.raises(InvalidIncludeError):
        parse_includes(["author", 3])


def test_invalid_include_error_is_a_value_error():
    with pytest.raises(ValueError):
        ParsedIncludes.parse(["a,b"])


def test_parsed_includes_is_read_only():
    parsed = parse_includes("author")
    with pytest.raises(TypeError):
        parsed.paths["other"] = ()
