# Copyright 2020-present Kensho Technologies, LLC.
from dataclasses import dataclass, field
from enum import Enum, auto, unique
from typing import Dict, List, Optional, Union

from graphql import (
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
)
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    OperationDefinitionNode,
    VariableDefinitionNode,
)


# The object-like types that own typed fields: object types for output fields, and input object
# types for input fields.
ParentType = Union[GraphQLObjectType, GraphQLInputObjectType]


@unique
class TypedFieldKind(Enum):
    """Which side of the schema a typed field describes."""

    # A variable definition, or a field of an input object type.
    INPUT = auto()

    # A field selected in the document, resolved against an object type.
    OUTPUT = auto()


@unique
class ResolutionKind(Enum):
    """The kind of named type a typed field resolved to."""

    SCALAR = auto()
    ENUM = auto()

    # Object type for output fields, input object type for input fields.
    OBJECT = auto()

    # Named types that are none of the above, e.g. unions and interfaces.
    UNCLASSIFIED = auto()


@dataclass(eq=False)
class TypedField:
    """The fully resolved type shape of a variable definition or a selected field.

    Input object types may refer to themselves, so the "fields" of an input field may contain the
    field itself. For that reason equality is by identity rather than by value.
    """

    kind: TypedFieldKind
    name: str

    # The enclosing type. None for variable definitions, which have no enclosing type.
    parent_type: Optional[ParentType] = field(repr=False)

    # Describe the outermost wrappers: "[T!]!" is both non-null and a list.
    is_non_null: bool
    is_list: bool

    resolution: ResolutionKind

    # The bare named type after unwrapping; set regardless of resolution kind.
    named_type: GraphQLNamedType

    # Only populated when the resolution is ResolutionKind.OBJECT.
    fields: List["TypedField"] = field(default_factory=list)

    @property
    def scalar_type(self) -> Optional[GraphQLScalarType]:
        """Return the scalar type this field resolved to, if any."""
        if self.resolution is not ResolutionKind.SCALAR:
            return None
        return self.named_type  # type: ignore[return-value]

    @property
    def enum_type(self) -> Optional[GraphQLEnumType]:
        """Return the enum type this field resolved to, if any."""
        if self.resolution is not ResolutionKind.ENUM:
            return None
        return self.named_type  # type: ignore[return-value]

    @property
    def object_type(self) -> Optional[ParentType]:
        """Return the object (or input object) type this field resolved to, if any."""
        if self.resolution is not ResolutionKind.OBJECT:
            return None
        return self.named_type  # type: ignore[return-value]

    @property
    def is_leaf(self) -> bool:
        """Return True if the field resolved to a scalar or an enum."""
        return self.resolution in (ResolutionKind.SCALAR, ResolutionKind.ENUM)


class TypedDocument:
    """A document together with the typed fields of its variable definitions and fields.

    The document itself is never modified. Typed fields are kept in a side table keyed by the
    identity of the AST nodes they describe, so lookups must use the very node objects contained
    in this document (not equal-looking nodes from a different parse).
    """

    def __init__(
        self,
        document_ast: DocumentNode,
        typed_fields_by_node_id: Dict[int, TypedField],
        variables: List[TypedField],
        operation_fields_by_node_id: Dict[int, List[TypedField]],
        operation_variables_by_node_id: Dict[int, List[TypedField]],
    ) -> None:
        """Create a TypedDocument. Use annotate_document() instead of calling this directly."""
        # Holding the document keeps every node alive, so node ids cannot be reused.
        self.document_ast = document_ast

        # Variables of all operations, in document order. Different operations may declare
        # variables of the same name; use get_operation_variables() to tell them apart.
        self.variables = variables

        self._typed_fields_by_node_id = typed_fields_by_node_id
        self._operation_fields_by_node_id = operation_fields_by_node_id
        self._operation_variables_by_node_id = operation_variables_by_node_id

    def _get_by_operation(
        self,
        values_by_node_id: Dict[int, List[TypedField]],
        operation_ast: OperationDefinitionNode,
    ) -> List[TypedField]:
        """Return the entry recorded for the given operation, raising KeyError if there is none."""
        values = values_by_node_id.get(id(operation_ast))
        if values is None:
            raise KeyError(
                "Operation {} is not part of this document.".format(
                    operation_ast.name.value if operation_ast.name else "<anonymous>"
                )
            )
        return values

    def try_get_typed_field(
        self, node: Union[FieldNode, VariableDefinitionNode]
    ) -> Optional[TypedField]:
        """Return the typed field of the given node, or None if the node was not annotated."""
        return self._typed_fields_by_node_id.get(id(node))

    def get_typed_field(self, node: Union[FieldNode, VariableDefinitionNode]) -> TypedField:
        """Return the typed field of the given node, raising KeyError if it was not annotated."""
        typed_field = self.try_get_typed_field(node)
        if typed_field is None:
            raise KeyError(
                "No typed field was recorded for node {}. Only variable definitions and fields "
                "outside of fragments are annotated, and only for nodes of this exact "
                "document.".format(node)
            )
        return typed_field

    def get_operation_fields(self, operation_ast: OperationDefinitionNode) -> List[TypedField]:
        """Return the typed fields selected at the root of the given operation, in order."""
        return self._get_by_operation(self._operation_fields_by_node_id, operation_ast)

    def get_operation_variables(self, operation_ast: OperationDefinitionNode) -> List[TypedField]:
        """Return the typed variable definitions of the given operation, in order."""
        return self._get_by_operation(self._operation_variables_by_node_id, operation_ast)
