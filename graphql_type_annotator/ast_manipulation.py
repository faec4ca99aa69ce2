# Copyright 2019-present Kensho Technologies, LLC.
from typing import List, Optional, Union

from graphql.error import GraphQLSyntaxError
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
)
from graphql.language.parser import parse

from .exceptions import GraphQLParsingError


def get_ast_field_name(ast: FieldNode) -> str:
    """Return the field name for the given AST node."""
    return ast.name.value


def safe_parse_graphql(graphql_string: str) -> DocumentNode:
    """Return an AST representation of the given GraphQL input, reraising GraphQL library errors."""
    try:
        ast = parse(graphql_string)
    except GraphQLSyntaxError as e:
        raise GraphQLParsingError(e) from e

    return ast


def get_field_selections(
    ast: Union[FieldNode, OperationDefinitionNode, InlineFragmentNode]
) -> List[FieldNode]:
    """Return the plain field selections directly under the given AST, in document order.

    Fragment spreads and inline fragments are not fields, and are left out.
    """
    selection_set: Optional[SelectionSetNode] = ast.selection_set
    if selection_set is None:
        return []

    return [
        selection_ast
        for selection_ast in selection_set.selections
        if isinstance(selection_ast, FieldNode)
    ]
