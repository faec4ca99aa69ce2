# Copyright 2020-present Kensho Technologies, LLC.
import logging
from typing import Dict, List

from graphql import (
    GraphQLInputObjectType,
    GraphQLNamedType,
    is_enum_type,
    is_input_object_type,
    is_scalar_type,
)

from .type_unwrapping import unwrap_type
from .typedefs import ResolutionKind, TypedField, TypedFieldKind


logger = logging.getLogger(__name__)


def classify_input_type(named_type: GraphQLNamedType) -> ResolutionKind:
    """Return the resolution kind of a named type used in input position."""
    if is_input_object_type(named_type):
        return ResolutionKind.OBJECT
    elif is_scalar_type(named_type):
        return ResolutionKind.SCALAR
    elif is_enum_type(named_type):
        return ResolutionKind.ENUM
    else:
        return ResolutionKind.UNCLASSIFIED


class InputFieldResolver:
    """Resolve the typed fields of input object types, memoized by type name.

    A resolver instance belongs to a single document pass. Every reference to the same input
    object type within that pass receives the same list object, including references that the
    type makes to itself.
    """

    def __init__(self) -> None:
        """Create a resolver with an empty cache."""
        self._fields_by_type_name: Dict[str, List[TypedField]] = {}

    def resolve(self, input_object_type: GraphQLInputObjectType) -> List[TypedField]:
        """Return the typed fields of the given input object type, in declaration order.

        Args:
            input_object_type: the input object type whose fields to resolve

        Returns:
            list of input TypedField objects, one per declared field. The list is shared between
            all callers within this resolver, and must not be modified.
        """
        type_name = input_object_type.name
        cached_fields = self._fields_by_type_name.get(type_name)
        if cached_fields is not None:
            return cached_fields

        # Reserve the cache entry before resolving any field, so that fields of this same type
        # (directly or through other input types) find the entry and do not recurse forever.
        typed_fields: List[TypedField] = []
        self._fields_by_type_name[type_name] = typed_fields

        for field_name, input_field in input_object_type.fields.items():
            is_non_null, is_list, named_type, is_supported_shape = unwrap_type(input_field.type)
            if is_supported_shape:
                resolution = classify_input_type(named_type)
            else:
                logger.debug(
                    "Input field %s.%s has unsupported type shape %s.",
                    type_name,
                    field_name,
                    input_field.type,
                )
                resolution = ResolutionKind.UNCLASSIFIED

            typed_field = TypedField(
                kind=TypedFieldKind.INPUT,
                name=field_name,
                parent_type=input_object_type,
                is_non_null=is_non_null,
                is_list=is_list,
                resolution=resolution,
                named_type=named_type,
            )
            if resolution is ResolutionKind.OBJECT:
                typed_field.fields = self.resolve(named_type)

            typed_fields.append(typed_field)

        logger.debug(
            "Resolved %d fields of input object type %s.", len(typed_fields), type_name
        )
        return typed_fields

    def is_resolved(self, type_name: str) -> bool:
        """Return True if the fields of the named input object type are already cached."""
        return type_name in self._fields_by_type_name
