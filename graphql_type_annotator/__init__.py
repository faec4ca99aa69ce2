# Copyright 2017-present Kensho Technologies, LLC.
"""Commonly-used functions and data types from this package."""
from .annotator import TypeAnnotationVisitor, annotate_document, annotate_graphql_string  # noqa
from .exceptions import (  # noqa
    AnnotatorReuseError,
    EmptyTypeStackError,
    GraphQLError,
    GraphQLParsingError,
    GraphQLValidationError,
    MissingRootTypeError,
    TypeAnnotationError,
    UndefinedFieldError,
    UnknownTypeError,
    UnsupportedTypeShapeError,
)
from .typedefs import ResolutionKind, TypedDocument, TypedField, TypedFieldKind  # noqa


__package_name__ = "graphql-type-annotator"
__version__ = "1.0.0"
