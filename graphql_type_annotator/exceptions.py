# Copyright 2017-present Kensho Technologies, LLC.
class GraphQLError(Exception):
    """Generic error when processing GraphQL."""


class GraphQLParsingError(GraphQLError):
    """Exception raised when the provided GraphQL string could not be parsed."""


class GraphQLValidationError(GraphQLError):
    """Exception raised when the provided GraphQL does not validate against the provided schema."""


class TypeAnnotationError(GraphQLError):
    """Exception raised when a document cannot be annotated with its schema types.

    Any such error aborts annotation of the entire document. The visitor that raised it holds
    partial traversal state and must be discarded.
    """


class MissingRootTypeError(TypeAnnotationError):
    """Exception raised when the schema has no root type for the document's operation kind."""


class EmptyTypeStackError(TypeAnnotationError):
    """Exception raised when the enclosing type is requested but no type has been entered.

    This indicates mismatched enter/leave pairing during the traversal.
    """


class UnsupportedTypeShapeError(TypeAnnotationError):
    """Exception raised when a variable's type does not reduce to a named type.

    Only the following wrapper shapes are supported around a named type T:
    T, T!, [T], [T]!, [T!] and [T!]!. Nested lists or doubly-required types are not.
    Schema fields of such types are not an error: they resolve as ResolutionKind.UNCLASSIFIED.
    """


class UnknownTypeError(TypeAnnotationError):
    """Exception raised when a variable refers to a type name the schema does not contain."""


class UndefinedFieldError(TypeAnnotationError):
    """Exception raised when a selected field is not declared on its enclosing type."""


class AnnotatorReuseError(TypeAnnotationError):
    """Exception raised when a single-use annotation visitor is given a second document."""
