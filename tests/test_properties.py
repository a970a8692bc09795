"""Property tests: one result per request, and repeatable output."""

from __future__ import annotations

import json
from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from graphbatch import Failure, MalformedResponseError, Success, demultiplex

pytestmark = pytest.mark.unit

_scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2**53), max_value=2**53)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=10)
)
_keys = st.sampled_from(["id", "name", "code", "body", "error", "error_msg", "x"])
_json_values = st.recursive(
    _scalars,
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(_keys, children, max_size=4),
    max_leaves=12,
)
_items = st.dictionaries(_keys, _json_values, max_size=4) | _json_values


def _bodies() -> st.SearchStrategy[str]:
    return st.one_of(
        st.text(max_size=40),
        _json_values.map(json.dumps),
        st.lists(_items, max_size=5).map(json.dumps),
    )


@settings(max_examples=200, deadline=None)
@given(body=_bodies(), count=st.integers(min_value=1, max_value=5))
def test_result_count_always_matches_request_count(body: str, count: int) -> None:
    results = demultiplex(body, count)

    assert len(results) == count
    assert all(isinstance(r, Success | Failure) for r in results)


@settings(max_examples=200, deadline=None)
@given(body=_bodies(), count=st.integers(min_value=1, max_value=5))
def test_demultiplex_is_repeatable(body: str, count: int) -> None:
    assert demultiplex(body, count) == demultiplex(body, count)


@settings(deadline=None)
@given(items=st.lists(_items, min_size=2, max_size=6))
def test_batch_slots_match_individual_classification(items: list[Any]) -> None:
    """Each slot depends only on its own item."""
    batch = demultiplex(json.dumps(items), len(items))

    for item, result in zip(items, batch, strict=True):
        (alone,) = demultiplex(json.dumps([item, {}]), 2)[:1]
        assert result == alone


@given(text=st.text(alphabet=" \t\r\n", max_size=20))
def test_blank_bodies_fail_everywhere(text: str) -> None:
    results = demultiplex(text, 3)

    assert all(isinstance(r.error, MalformedResponseError) for r in results)
