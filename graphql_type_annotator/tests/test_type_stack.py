# Copyright 2020-present Kensho Technologies, LLC.
import unittest

from graphql import GraphQLField, GraphQLObjectType, GraphQLString

from ..exceptions import EmptyTypeStackError
from ..type_stack import TypeStack


def _make_object_type(name: str) -> GraphQLObjectType:
    """Return a minimal object type with the given name."""
    return GraphQLObjectType(name, {"name": GraphQLField(GraphQLString)})


class TypeStackTests(unittest.TestCase):
    def test_push_and_pop(self) -> None:
        stack = TypeStack()
        self.assertEqual(0, stack.depth)

        types_to_push = [_make_object_type(name) for name in ("Query", "User", "Post")]
        for index, type_to_push in enumerate(types_to_push):
            stack.push(type_to_push)

            # After the push:
            # - the stack depth has increased by one;
            self.assertEqual(index + 1, stack.depth)
            # - the current type is referentially equal to the type we just pushed.
            self.assertIs(type_to_push, stack.current())

        for index, expected_type in enumerate(reversed(types_to_push)):
            self.assertIs(expected_type, stack.current())
            self.assertIs(expected_type, stack.pop())
            self.assertEqual(len(types_to_push) - index - 1, stack.depth)

        self.assertEqual(0, stack.depth)

    def test_current_does_not_pop(self) -> None:
        stack = TypeStack()
        query_type = _make_object_type("Query")
        stack.push(query_type)

        self.assertIs(query_type, stack.current())
        self.assertIs(query_type, stack.current())
        self.assertEqual(1, stack.depth)

    def test_same_type_pushed_twice(self) -> None:
        stack = TypeStack()
        user_type = _make_object_type("User")
        stack.push(user_type)
        stack.push(user_type)

        self.assertEqual(2, stack.depth)
        self.assertIs(user_type, stack.pop())
        self.assertIs(user_type, stack.current())

    def test_empty_stack_errors(self) -> None:
        stack = TypeStack()
        with self.assertRaises(EmptyTypeStackError):
            stack.current()
        with self.assertRaises(EmptyTypeStackError):
            stack.pop()

        # Emptying the stack again makes it raise again.
        stack.push(_make_object_type("Query"))
        stack.pop()
        with self.assertRaises(EmptyTypeStackError):
            stack.current()
