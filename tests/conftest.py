import asyncio
import copy

import pytest

BOOK = {
    "title": "Harry Potter and the Deathly Hallows",
    "author": {
        "n": "J. K. Rowling",
    },
    "characters": [
        {
            "n": "Harry Potter",
            "actor": {"n": "Daniel Radcliffe"},
        },
        {
            "n": "Hermione Granger",
            "actor": {"n": "Emma Watson"},
        },
    ],
}

EXPECTED_BOOK = {
    "title": "Harry Potter and the Deathly Hallows",
    "author": {
        "name": "J. K. Rowling",
    },
    "characters": [
        {
            "name": "Harry Potter",
            "actor": {"name": "Daniel Radcliffe"},
        },
        {
            "name": "Hermione Granger",
            "actor": {"name": "Emma Watson"},
        },
    ],
}


@pytest.fixture
def book():
    return copy.deepcopy(BOOK)


@pytest.fixture
def expected_book():
    return copy.deepcopy(EXPECTED_BOOK)


@pytest.fixture
def run():
    """Drives a coroutine to completion from a synchronous test."""
    return asyncio.run
