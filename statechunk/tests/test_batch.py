"""
Tests for combined actions and reset-all.

Critical: a combined action must produce exactly the state produced by
dispatching its actions one by one.
"""

import pytest

from statechunk.chunk import build_store_chunk
from statechunk.core.actions import Action
from statechunk.core.batch import (
    BATCH_ACTION_TYPE,
    CombinedAction,
    action_from_dict,
    create_combined_action,
    flatten_actions,
)
from statechunk.core.reducer import combine_reducers
from statechunk.replay import replay
from statechunk.tests.fixtures import EXAMPLE, SINGLE


@pytest.fixture
def chunk():
    return build_store_chunk("example", EXAMPLE)


@pytest.fixture
def non_nested_chunk():
    return build_store_chunk("example2", SINGLE)


@pytest.fixture
def reducer(chunk, non_nested_chunk):
    return combine_reducers({**chunk.reducers, **non_nested_chunk.reducers})


def _mixed_actions(chunk, non_nested_chunk):
    return [
        non_nested_chunk.actions["replace"]("bar"),
        chunk.actions["nested2"]["update"]({"foo": 4}),
        chunk.actions["nested2"]["update"]({"bar": "boop!"}),
        chunk.actions["nested3"]["replace"]([4, 5, 6]),
        chunk.actions["nested3"]["remove_at_index"](1),
    ]


def test_create_combined_action():
    a = Action(type="x/REPLACE", payload=1)
    combined = create_combined_action(name="batchUpdate", actions=[a])
    assert combined.type == BATCH_ACTION_TYPE
    assert combined.name == "batchUpdate"
    assert combined.actions == (a,)


def test_combined_action_updates_store(chunk, non_nested_chunk, reducer):
    state = replay(reducer, [
        create_combined_action(
            name="batchUpdateFunsies",
            actions=_mixed_actions(chunk, non_nested_chunk),
        )
    ]).state

    assert non_nested_chunk.selectors(state) == "bar"
    assert chunk.selectors["nested2"](state) == {"foo": 4, "bar": "boop!"}
    assert chunk.selectors["nested3"](state) == [4, 6]


def test_combined_action_equals_sequential_dispatch(chunk, non_nested_chunk, reducer):
    """Batch [A, B, C] yields the same state as dispatching A, B, C."""
    actions = _mixed_actions(chunk, non_nested_chunk) + [
        chunk.actions["nested4"]["innerNested2"]["innerNested3"]["replace"]("qux"),
        chunk.actions["nested3"]["remove_at_index"](0),
        chunk.actions["nested2"]["reset"](),
    ]

    sequential = replay(reducer, actions).state
    batched = replay(reducer, [create_combined_action(name="all", actions=actions)]).state

    assert batched == sequential


def test_combined_action_order_matters(chunk, reducer):
    replace = chunk.actions["nested3"]["replace"]([7, 8, 9])
    remove = chunk.actions["nested3"]["remove_at_index"](0)

    first = replay(reducer, [create_combined_action(name="a", actions=[replace, remove])]).state
    second = replay(reducer, [create_combined_action(name="b", actions=[remove, replace])]).state

    assert chunk.selectors["nested3"](first) == [8, 9]
    assert chunk.selectors["nested3"](second) == [7, 8, 9]


def test_nested_combined_actions_flatten_in_order():
    a, b, c = (Action(type=t) for t in ("a", "b", "c"))
    combined = create_combined_action(
        name="outer",
        actions=[a, create_combined_action(name="inner", actions=[b]), c],
    )
    assert list(flatten_actions(combined)) == [a, b, c]


def test_reset_all_resets_every_leaf(chunk, non_nested_chunk, reducer):
    """Scenario: combined updates followed by reset_all restore every default."""
    state = replay(reducer, [
        create_combined_action(
            name="batchUpdateFunsies",
            actions=[
                chunk.actions["nested2"]["update"]({"foo": 4}),
                chunk.actions["nested2"]["update"]({"bar": "boop!"}),
                chunk.actions["nested3"]["replace"]([4, 5, 6]),
                chunk.actions["nested3"]["remove_at_index"](1),
                chunk.actions["nested4"]["innerNested1"]["replace"]("boop!"),
                non_nested_chunk.actions["replace"]("changed"),
            ],
        ),
        chunk.reset_all(),
    ]).state

    assert chunk.selectors["nested2"](state) == {"foo": 0, "bar": ""}
    assert chunk.selectors["nested3"](state) == [1, 2, 3]
    assert chunk.selectors["nested4"]["innerNested1"](state) == "bar"
    # other chunks are outside the boundary
    assert non_nested_chunk.selectors(state) == "changed"


def test_reset_all_is_scoped_to_its_boundary(chunk):
    """reset_all on one boundary never touches a sibling boundary."""
    boundaries = chunk.boundaries
    assert list(boundaries) == ["example", "example.nested4", "example.nested4.innerNested2"]
    assert boundaries["example"]().type == chunk.reset_all().type

    reducer = combine_reducers(chunk.reducers)
    state = replay(reducer, [
        chunk.actions["nested1"]["replace"]("changed"),
        chunk.actions["nested4"]["innerNested1"]["replace"]("changed"),
        chunk.actions["nested4"]["innerNested2"]["innerNested3"]["replace"]("changed"),
    ]).state

    inner = reducer(state, boundaries["example.nested4.innerNested2"]())
    assert inner["example"]["nested4"]["innerNested2"]["innerNested3"] == "baz"
    assert inner["example"]["nested4"]["innerNested1"] == "changed"
    assert inner["example"]["nested1"] == "changed"

    middle = reducer(state, boundaries["example.nested4"]())
    assert middle["example"]["nested4"] == {
        "innerNested1": "bar",
        "innerNested2": {"innerNested3": "baz"},
    }
    assert middle["example"]["nested1"] == "changed"


def test_non_nested_chunk_has_no_boundaries(non_nested_chunk):
    assert non_nested_chunk.boundaries == {}


def test_reset_all_inside_combined_action(chunk, reducer):
    state = replay(reducer, [
        create_combined_action(name="mixed", actions=[
            chunk.actions["nested1"]["replace"]("before"),
            chunk.reset_all(),
            chunk.actions["nested3"]["replace"]([9]),
        ])
    ]).state

    assert chunk.selectors["nested1"](state) == "foo"
    assert chunk.selectors["nested3"](state) == [9]


def test_combined_action_wire_round_trip(chunk):
    combined = create_combined_action(name="wire", actions=[
        chunk.actions["nested1"]["replace"]("bar"),
        chunk.actions["nested3"]["remove_at_index"](2),
    ])
    parsed = action_from_dict(combined.to_dict())
    assert isinstance(parsed, CombinedAction)
    assert parsed == combined


def test_action_from_dict_rejects_garbage():
    with pytest.raises(ValueError):
        action_from_dict({"payload": 1})
    with pytest.raises(ValueError):
        action_from_dict({"type": BATCH_ACTION_TYPE, "actions": "nope"})


def test_combined_action_of_wire_dicts(chunk, non_nested_chunk, reducer):
    """A batch of plain dicts lands on the same state as dispatching them in turn."""
    wire = [action.to_dict() for action in _mixed_actions(chunk, non_nested_chunk)]

    sequential = replay(reducer, wire).state
    batched = replay(reducer, [create_combined_action(name="wire", actions=wire)]).state

    assert batched == sequential
    assert chunk.selectors["nested3"](batched) == [4, 6]
    assert chunk.selectors["nested2"](batched) == {"foo": 4, "bar": "boop!"}


def test_combined_action_with_wire_dicts_serializes(chunk):
    wire = chunk.actions["nested1"]["replace"]("bar").to_dict()
    combined = create_combined_action(name="mixed", actions=[wire])
    assert combined.to_dict()["actions"] == [wire]
