"""
Structured-filter conventions shared by composite specifications.

Composites only ever wrap their operands' filters; the shape of a leaf
filter belongs to the leaf that produced it.  The wrappers follow the
MongoDB-style dialect used throughout the toolkit::

    {"$and": [left, right]}
    {"$or": [left, right]}
    {"$not": inner}
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

Filter = dict[str, Any]
QueryFn = Callable[[], Filter]

AND_KEY = "$and"
OR_KEY = "$or"
NOT_KEY = "$not"

# Matches every document.
EMPTY_FILTER: Filter = {}
# Never matches in a MongoDB-style backend.  Other dialects must supply
# their own unsatisfiable filter (see ``never(query=...)``).
UNSATISFIABLE_FILTER: Filter = {"$where": "false"}

_REGEX_OPTION_FLAGS: tuple[tuple[re.RegexFlag, str], ...] = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def combine_and(left: Filter, right: Filter) -> Filter:
    return {AND_KEY: [left, right]}


def combine_or(left: Filter, right: Filter) -> Filter:
    return {OR_KEY: [left, right]}


def negate(inner: Filter) -> Filter:
    return {NOT_KEY: inner}


def empty_filter() -> Filter:
    """Return a fresh filter matching everything."""
    return dict(EMPTY_FILTER)


def unsatisfiable_filter() -> Filter:
    """Return a fresh filter matching nothing."""
    return dict(UNSATISFIABLE_FILTER)


def regex_options(flags: int) -> str:
    """Translate Python ``re`` flags into a ``$options`` string (e.g. ``"im"``)."""
    return "".join(letter for flag, letter in _REGEX_OPTION_FLAGS if flags & flag)
