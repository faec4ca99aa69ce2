# Copyright 2020-present Kensho Technologies, LLC.
"""Strip the list and non-null wrappers around a type, recording the shape they described.

Both schema types (GraphQLNonNull, GraphQLList) and the syntactic types written in documents
(NonNullTypeNode, ListTypeNode) are supported. Wrappers are stripped in a fixed order:
  - an outer non-null wrapper, which makes the result non-null;
  - then a list wrapper, which makes the result a list;
  - then a non-null wrapper around the list element, which is stripped without being recorded.
Whatever remains should be a named type. Deeper shapes, such as lists of lists, are not supported:
for schema types they are reported as such and the named type is found by stripping every
wrapper, while for types written in documents they are an error.
"""
from typing import NamedTuple

from graphql import (
    GraphQLNamedType,
    GraphQLType,
    get_named_type,
    is_list_type,
    is_named_type,
    is_non_null_type,
)
from graphql.language.ast import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode
from graphql.language.printer import print_ast

from .exceptions import UnsupportedTypeShapeError


class UnwrappedType(NamedTuple):
    """The wrapper shape of a schema type, and the named type it wraps."""

    is_non_null: bool
    is_list: bool
    named_type: GraphQLNamedType

    # False if wrappers remained after the fixed unwrap sequence, e.g. for "[[Int]]".
    is_supported_shape: bool


class UnwrappedTypeNode(NamedTuple):
    """The wrapper shape of a syntactic type in a document, and the named type node it wraps."""

    is_non_null: bool
    is_list: bool
    named_type_node: NamedTypeNode


def unwrap_type(type_: GraphQLType) -> UnwrappedType:
    """Strip the wrappers around the given schema type, in the fixed supported order.

    Args:
        type_: schema type, possibly wrapped in GraphQLNonNull and GraphQLList layers

    Returns:
        UnwrappedType describing whether the type is non-null and whether it is a list,
        together with the named type inside the wrappers. Types that do not reduce to a named
        type, e.g. "[[Int]]", are not an error: they are returned with is_supported_shape=False
        and the innermost named type.
    """
    is_non_null = False
    is_list = False
    current_type = type_

    if is_non_null_type(current_type):
        is_non_null = True
        current_type = current_type.of_type

    if is_list_type(current_type):
        is_list = True
        current_type = current_type.of_type

    if is_non_null_type(current_type):
        current_type = current_type.of_type

    if not is_named_type(current_type):
        return UnwrappedType(is_non_null, is_list, get_named_type(current_type), False)

    return UnwrappedType(is_non_null, is_list, current_type, True)


def unwrap_type_node(type_node: TypeNode) -> UnwrappedTypeNode:
    """Strip the wrappers around a type written in a document, e.g. the type of a variable.

    Args:
        type_node: NamedTypeNode, possibly wrapped in NonNullTypeNode and ListTypeNode layers

    Returns:
        UnwrappedTypeNode describing whether the type is non-null and whether it is a list,
        together with the named type node inside the wrappers

    Raises:
        UnsupportedTypeShapeError if the type does not reduce to a named type, e.g. "[[Int]]"
    """
    is_non_null = False
    is_list = False
    current_node = type_node

    if isinstance(current_node, NonNullTypeNode):
        is_non_null = True
        current_node = current_node.type

    if isinstance(current_node, ListTypeNode):
        is_list = True
        current_node = current_node.type

    if isinstance(current_node, NonNullTypeNode):
        current_node = current_node.type

    if not isinstance(current_node, NamedTypeNode):
        raise UnsupportedTypeShapeError(
            'Type "{}" is not supported: expected a named type with at most one list wrapper, '
            'but found "{}" inside the wrappers.'.format(
                print_ast(type_node), print_ast(current_node)
            )
        )

    return UnwrappedTypeNode(is_non_null, is_list, current_node)
