# Copyright 2020-present Kensho Technologies, LLC.
import logging
from typing import Any, Dict, List, Optional

from graphql import (
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    SchemaMetaFieldDef,
    TypeMetaFieldDef,
    TypeNameMetaFieldDef,
    is_enum_type,
    is_object_type,
    is_scalar_type,
)
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    OperationType,
    VariableDefinitionNode,
)
from graphql.language.visitor import SKIP, Visitor, VisitorAction, visit
from graphql.validation import validate

from .ast_manipulation import get_ast_field_name, get_field_selections, safe_parse_graphql
from .exceptions import (
    AnnotatorReuseError,
    GraphQLValidationError,
    MissingRootTypeError,
    UndefinedFieldError,
    UnknownTypeError,
)
from .input_field_resolver import InputFieldResolver, classify_input_type
from .type_stack import TypeStack
from .type_unwrapping import unwrap_type, unwrap_type_node
from .typedefs import ResolutionKind, TypedDocument, TypedField, TypedFieldKind


logger = logging.getLogger(__name__)


def annotate_document(schema: GraphQLSchema, document_ast: DocumentNode) -> TypedDocument:
    """Resolve the types of all variable definitions and selected fields in the given document.

    The document is assumed to be valid against the schema. Fragment definitions, fragment spreads
    and inline fragments are not annotated, and do not appear among the fields of any typed field.

    Args:
        schema: schema the document is written against
        document_ast: parsed document with one or more operations

    Returns:
        TypedDocument holding the unmodified document, together with a TypedField for every
        variable definition and every field selected outside of fragments

    Raises:
        - MissingRootTypeError if an operation's kind has no root type in the schema
        - UnsupportedTypeShapeError if a variable's type is more deeply wrapped than supported
        - UnknownTypeError if a variable refers to a type that does not exist in the schema
        - UndefinedFieldError if a selected field does not exist on its enclosing type
    """
    return TypeAnnotationVisitor(schema).annotate(document_ast)


def annotate_graphql_string(
    schema: GraphQLSchema, graphql_string: str, validate_document: bool = True
) -> TypedDocument:
    """Parse the given GraphQL string and resolve the types of its variables and fields.

    Args:
        schema: schema the document is written against
        graphql_string: GraphQL document text
        validate_document: whether to check the document against the schema before annotating.
                           Annotating a document that does not validate is not supported, so only
                           disable this for documents that are known to be valid.

    Returns:
        TypedDocument, as returned by annotate_document()

    Raises:
        - GraphQLParsingError if the string cannot be parsed
        - GraphQLValidationError if validation is enabled and the document does not validate
        - any error raised by annotate_document()
    """
    document_ast = safe_parse_graphql(graphql_string)

    if validate_document:
        validation_errors = validate(schema, document_ast)
        if validation_errors:
            raise GraphQLValidationError(
                "Document does not validate: {}".format(validation_errors)
            )

    return annotate_document(schema, document_ast)


def _get_root_type(schema: GraphQLSchema, operation: OperationType) -> GraphQLObjectType:
    """Return the schema's root type for the given kind of operation."""
    if operation == OperationType.QUERY:
        root_type = schema.query_type
    elif operation == OperationType.MUTATION:
        root_type = schema.mutation_type
    elif operation == OperationType.SUBSCRIPTION:
        root_type = schema.subscription_type
    else:
        raise AssertionError(f"Unreachable code reached: unknown operation type {operation}.")

    if root_type is None:
        raise MissingRootTypeError(
            f"The schema does not define a root type for {operation.value} operations."
        )
    return root_type


class TypeAnnotationVisitor(Visitor):
    """Visitor that resolves the type of every variable definition and field of a document.

    Each instance holds the traversal state of a single document pass, and may only be used once:
    build a new instance (or call annotate_document()) for every document. If annotation fails,
    the instance's state is partial and the instance must be discarded.
    """

    def __init__(self, schema: GraphQLSchema) -> None:
        """Create a visitor that annotates a document written against the given schema."""
        super().__init__()
        self.schema = schema
        self.type_stack = TypeStack()
        self.input_field_resolver = InputFieldResolver()

        self._used = False
        # Side table from AST node identity to the typed field describing that node.
        self._typed_fields_by_node_id: Dict[int, TypedField] = {}
        self._variables: List[TypedField] = []
        self._operation_fields_by_node_id: Dict[int, List[TypedField]] = {}
        self._operation_variables_by_node_id: Dict[int, List[TypedField]] = {}

    def annotate(self, document_ast: DocumentNode) -> TypedDocument:
        """Traverse the document, returning its typed fields. May only be called once."""
        if self._used:
            raise AnnotatorReuseError(
                "This TypeAnnotationVisitor was already used to annotate a document. Create a new "
                "visitor for every document."
            )
        self._used = True

        visit(document_ast, self)

        if self.type_stack.depth != 0:
            raise AssertionError(
                f"Type stack was not empty after annotating the document: depth "
                f"{self.type_stack.depth}. This is a bug."
            )

        return TypedDocument(
            document_ast,
            self._typed_fields_by_node_id,
            self._variables,
            self._operation_fields_by_node_id,
            self._operation_variables_by_node_id,
        )

    def _get_field_definition(
        self, parent_type: GraphQLObjectType, field_name: str
    ) -> GraphQLField:
        """Return the definition of the named field on the given type, including meta fields."""
        if field_name == "__typename":
            return TypeNameMetaFieldDef
        if parent_type is self.schema.query_type:
            if field_name == "__schema":
                return SchemaMetaFieldDef
            if field_name == "__type":
                return TypeMetaFieldDef

        field_definition = parent_type.fields.get(field_name)
        if field_definition is None:
            raise UndefinedFieldError(
                f'Field "{field_name}" is not defined on type "{parent_type.name}". Only documents '
                f"that validate against the schema can be annotated."
            )
        return field_definition

    def _get_recorded_fields(self, field_asts: List[FieldNode]) -> List[TypedField]:
        """Return the typed fields already recorded for the given field nodes, in order."""
        typed_fields = []
        for field_ast in field_asts:
            typed_field = self._typed_fields_by_node_id.get(id(field_ast))
            if typed_field is None:
                raise AssertionError(
                    f'Field "{get_ast_field_name(field_ast)}" was not annotated before its '
                    f"parent was left. This is a bug."
                )
            typed_fields.append(typed_field)
        return typed_fields

    def enter_operation_definition(
        self,
        node: OperationDefinitionNode,
        key: Any,
        parent: Any,
        path: List[Any],
        ancestors: List[Any],
    ) -> None:
        """Make the operation's root type the enclosing type of its root selections."""
        root_type = _get_root_type(self.schema, node.operation)
        logger.debug("Annotating %s operation with root type %s.", node.operation.value, root_type)
        self.type_stack.push(root_type)

    def leave_operation_definition(
        self,
        node: OperationDefinitionNode,
        key: Any,
        parent: Any,
        path: List[Any],
        ancestors: List[Any],
    ) -> None:
        """Restore the enclosing type, and record the operation's variables and root fields."""
        self.type_stack.pop()
        self._operation_fields_by_node_id[id(node)] = self._get_recorded_fields(
            get_field_selections(node)
        )

        operation_variables = []
        for variable_definition in node.variable_definitions or ():
            typed_variable = self._typed_fields_by_node_id.get(id(variable_definition))
            if typed_variable is None:
                raise AssertionError(
                    f'Variable "${variable_definition.variable.name.value}" was not annotated '
                    f"before its operation was left. This is a bug."
                )
            operation_variables.append(typed_variable)
        self._operation_variables_by_node_id[id(node)] = operation_variables

    def enter_variable_definition(
        self,
        node: VariableDefinitionNode,
        key: Any,
        parent: Any,
        path: List[Any],
        ancestors: List[Any],
    ) -> VisitorAction:
        """Record the variable's type. Its type is fully known here, so its subtree is skipped."""
        is_non_null, is_list, named_type_node = unwrap_type_node(node.type)
        type_name = named_type_node.name.value

        named_type = self.schema.get_type(type_name)
        if named_type is None:
            raise UnknownTypeError(
                f'Variable "${node.variable.name.value}" has type "{type_name}", which does not '
                f"exist in the schema."
            )

        resolution = classify_input_type(named_type)
        typed_field = TypedField(
            kind=TypedFieldKind.INPUT,
            name=node.variable.name.value,
            parent_type=None,
            is_non_null=is_non_null,
            is_list=is_list,
            resolution=resolution,
            named_type=named_type,
        )
        if resolution is ResolutionKind.OBJECT:
            typed_field.fields = self.input_field_resolver.resolve(named_type)
        elif resolution is ResolutionKind.UNCLASSIFIED:
            logger.debug("Variable $%s has unclassified type %s.", typed_field.name, type_name)

        self._typed_fields_by_node_id[id(node)] = typed_field
        self._variables.append(typed_field)
        return SKIP

    def enter_field(
        self, node: FieldNode, key: Any, parent: Any, path: List[Any], ancestors: List[Any]
    ) -> Optional[VisitorAction]:
        """Record the field's type, entering its type if nested selections resolve against it."""
        field_name = get_ast_field_name(node)
        parent_type = self.type_stack.current()
        field_definition = self._get_field_definition(parent_type, field_name)
        is_non_null, is_list, named_type, is_supported_shape = unwrap_type(field_definition.type)

        if not is_supported_shape:
            # E.g. lists of lists: recorded, but their selections are not annotated.
            resolution = ResolutionKind.UNCLASSIFIED
        elif is_object_type(named_type):
            resolution = ResolutionKind.OBJECT
        elif is_scalar_type(named_type):
            resolution = ResolutionKind.SCALAR
        elif is_enum_type(named_type):
            resolution = ResolutionKind.ENUM
        else:
            resolution = ResolutionKind.UNCLASSIFIED

        typed_field = TypedField(
            kind=TypedFieldKind.OUTPUT,
            name=field_name,
            parent_type=parent_type,
            is_non_null=is_non_null,
            is_list=is_list,
            resolution=resolution,
            named_type=named_type,
        )
        self._typed_fields_by_node_id[id(node)] = typed_field

        if resolution is ResolutionKind.OBJECT:
            self.type_stack.push(named_type)
        elif resolution is ResolutionKind.UNCLASSIFIED:
            # Nested selections of interfaces, unions and nested lists cannot be resolved against
            # an object type, so they are left unannotated.
            logger.debug(
                "Field %s.%s has unclassified type %s; skipping its selections.",
                parent_type.name,
                field_name,
                named_type.name,
            )
            return SKIP

        return None

    def leave_field(
        self, node: FieldNode, key: Any, parent: Any, path: List[Any], ancestors: List[Any]
    ) -> None:
        """Leave the field's type if it was entered, and collect its typed child fields."""
        typed_field = self._typed_fields_by_node_id.get(id(node))
        if typed_field is None:
            raise AssertionError(
                f'Left field "{get_ast_field_name(node)}" which was never entered. This is a bug.'
            )

        if typed_field.resolution is not ResolutionKind.OBJECT:
            return

        popped_type = self.type_stack.pop()
        if popped_type is not typed_field.object_type:
            raise AssertionError(
                f'Expected to leave type "{typed_field.named_type.name}" when leaving field '
                f'"{typed_field.name}", but left type "{popped_type.name}" instead. This is a bug.'
            )

        typed_field.fields = self._get_recorded_fields(get_field_selections(node))

    def enter_inline_fragment(
        self,
        node: InlineFragmentNode,
        key: Any,
        parent: Any,
        path: List[Any],
        ancestors: List[Any],
    ) -> VisitorAction:
        """Skip inline fragments: their fields are not annotated."""
        return SKIP

    def enter_fragment_definition(
        self,
        node: FragmentDefinitionNode,
        key: Any,
        parent: Any,
        path: List[Any],
        ancestors: List[Any],
    ) -> VisitorAction:
        """Skip fragment definitions: they are not part of any operation's selections."""
        return SKIP
