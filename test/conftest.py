import itertools
import logging
import logging.handlers
import os
import sys

import pytest
import structlog

# Ensure the repository root is on sys.path when running without an install
HERE = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(HERE, ".."))

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from hephaestus import DFA, NFA


def all_strings(alphabet, max_len=6):
    """Every string over ``alphabet`` up to ``max_len`` symbols."""
    for n in range(max_len + 1):
        for chars in itertools.product(alphabet, repeat=n):
            yield "".join(chars)


@pytest.fixture
def even_length():
    # Accepts binary strings of even length
    return DFA.new(2, ["0", "1"], [(0, "0", 1), (0, "1", 1), (1, "0", 0), (1, "1", 0)], 0, [0])


@pytest.fixture
def zeroes():
    # Accepts strings made only of 0s (including the empty string)
    return DFA.new(2, ["0", "1"], [(0, "0", 0), (0, "1", 1), (1, "0", 1), (1, "1", 1)], 0, [0])


@pytest.fixture
def ones():
    # Accepts strings made only of 1s (including the empty string)
    return DFA.new(2, ["0", "1"], [(0, "0", 1), (0, "1", 0), (1, "0", 1), (1, "1", 1)], 0, [0])


@pytest.fixture
def short_strings():
    # Strings of length <= 2
    return DFA.new(
        4,
        ["0", "1"],
        [(0, "0", 1), (0, "1", 1),
         (1, "0", 2), (1, "1", 2),
         (2, "0", 3), (2, "1", 3),
         (3, "0", 3), (3, "1", 3)],
        0,
        [0, 1, 2],
    )


@pytest.fixture
def even_ones_redundant():
    # Even number of 1s; state 1 duplicates state 0, state 3 is unreachable
    return DFA.new(
        4,
        ["0", "1"],
        [(0, "0", 1), (0, "1", 2),
         (1, "0", 0), (1, "1", 2),
         (2, "0", 2), (2, "1", 0),
         (3, "0", 3), (3, "1", 0)],
        0,
        [0, 1],
    )


@pytest.fixture
def aba_nfa():
    # a b* a b* a
    return NFA.new(
        4,
        ["a", "b"],
        [(0, "a", 1), (1, "b", 1), (1, "a", 2), (2, "b", 2), (2, "a", 3)],
        0,
        [3],
    )


@pytest.fixture
def reset_logging():
    yield
    root = logging.getLogger()
    # only the handlers setup_logging installs; pytest's own capture handlers stay
    for handler in list(root.handlers):
        if type(handler) in (logging.handlers.RotatingFileHandler, logging.StreamHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
    structlog.reset_defaults()
