"""
Structures shared by tests (also importable by the CLI as module:attribute).
"""

from statechunk.core.structure import Types

EXAMPLE = {
    "nested1": Types.reducer(Types.string("foo")),
    "nested2": Types.reducer(
        Types.shape({
            "foo": Types.number(),
            "bar": Types.string(),
        })
    ),
    "nested3": Types.reducer(Types.array_of(Types.number(), [1, 2, 3])),
    "nested4": Types.reducer({
        "innerNested1": Types.reducer(Types.string("bar")),
        "innerNested2": Types.reducer({
            "innerNested3": Types.reducer(Types.string("baz")),
        }),
    }),
    "nested5": Types.reducer(
        Types.shape({
            "arrayExample": Types.array_of(Types.string()),
        })
    ),
}

SINGLE = Types.reducer(Types.string("foo"))

TREE = Types.shape({
    "label": Types.string(),
    "children": Types.array_of(lambda: TREE()),
})

NOT_A_STRUCTURE = 42
