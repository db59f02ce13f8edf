"""
Tests for replay determinism.

Critical: replaying the same actions must produce identical state.
"""

from statechunk.chunk import build_store_chunk
from statechunk.core.reducer import combine_reducers
from statechunk.replay import replay
from statechunk.tests.fixtures import EXAMPLE


def _setup():
    chunk = build_store_chunk("example", EXAMPLE)
    return chunk, combine_reducers(chunk.reducers)


def test_replay_empty_is_default_state():
    """Replay of no actions returns the defaults."""
    _, reducer = _setup()
    result = replay(reducer, [])
    assert result.applied == 0
    assert result.state == {
        "example": {
            "nested1": "foo",
            "nested2": {"foo": 0, "bar": ""},
            "nested3": [1, 2, 3],
            "nested4": {
                "innerNested1": "bar",
                "innerNested2": {"innerNested3": "baz"},
            },
            "nested5": {"arrayExample": []},
        }
    }


def test_replay_determinism_100_runs():
    chunk, reducer = _setup()
    actions = [chunk.actions["nested3"]["replace"]([i, i + 1]) for i in range(10)]
    actions.append(chunk.actions["nested2"]["update"]({"foo": 9}))

    results = [replay(reducer, actions).state for _ in range(100)]

    assert all(r == results[0] for r in results)
    assert chunk.selectors["nested3"](results[0]) == [9, 10]
    assert chunk.selectors["nested2"](results[0]) == {"foo": 9, "bar": ""}


def test_replay_counts_actions():
    chunk, reducer = _setup()
    result = replay(reducer, [chunk.actions["nested1"]["reset"]()] * 3)
    assert result.applied == 3


def test_replay_from_existing_state():
    chunk, reducer = _setup()
    start = replay(reducer, [chunk.actions["nested1"]["replace"]("bar")]).state

    result = replay(reducer, [chunk.actions["nested3"]["remove_at_index"](0)], state=start)

    assert chunk.selectors["nested1"](result.state) == "bar"
    assert chunk.selectors["nested3"](result.state) == [2, 3]
    assert chunk.selectors["nested1"](start) == "bar"
    assert chunk.selectors["nested3"](start) == [1, 2, 3]
