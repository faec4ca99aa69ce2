# Copyright 2020-present Kensho Technologies, LLC.
import logging
from typing import List

from graphql import GraphQLObjectType

from .exceptions import EmptyTypeStackError


logger = logging.getLogger(__name__)


class TypeStack:
    """A stack of the object types enclosing the current point of a document traversal.

    The top of the stack is the type against which field selections are currently resolved.
    Every push made when entering a node must be matched by exactly one pop when leaving it.
    """

    def __init__(self) -> None:
        """Create an empty TypeStack."""
        # The last item is the top of the stack.
        self._types: List[GraphQLObjectType] = []

    @property
    def depth(self) -> int:
        """Return the number of types currently on the stack."""
        return len(self._types)

    def push(self, object_type: GraphQLObjectType) -> None:
        """Make the given type the current enclosing type."""
        self._types.append(object_type)
        logger.debug("Pushed type %s, stack depth is now %d.", object_type.name, self.depth)

    def pop(self) -> GraphQLObjectType:
        """Remove and return the current enclosing type."""
        if not self._types:
            raise EmptyTypeStackError(
                "Attempted to pop from an empty type stack. This means a node was left "
                "without having been entered."
            )
        object_type = self._types.pop()
        logger.debug("Popped type %s, stack depth is now %d.", object_type.name, self.depth)
        return object_type

    def current(self) -> GraphQLObjectType:
        """Return the current enclosing type, without removing it."""
        if not self._types:
            raise EmptyTypeStackError(
                "No enclosing type is set: fields can only be resolved inside an operation."
            )
        return self._types[-1]
