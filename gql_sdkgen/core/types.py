"""Type reference reduction and naming helpers.

Works on graphql-core type nodes as found in operation variable definitions.
"""

import keyword
import logging
import re

from graphql import ListTypeNode, NamedTypeNode, NameNode, NonNullTypeNode

logger = logging.getLogger(__name__)

UNKNOWN_TYPE_NAME = "UNKNOWN_TYPE_NAME"

TypeRef = str | NameNode | NamedTypeNode | NonNullTypeNode | ListTypeNode


def reduce_type_name(type_ref: TypeRef) -> str:
    """Get the deepest type name from any type node.

    Unrecognised shapes return UNKNOWN_TYPE_NAME so that generation can
    complete against unexpected input.
    """
    if isinstance(type_ref, str):
        return type_ref
    if isinstance(type_ref, NameNode):
        return type_ref.value
    if isinstance(type_ref, NamedTypeNode):
        return reduce_type_name(type_ref.name)
    if isinstance(type_ref, (NonNullTypeNode, ListTypeNode)):
        return reduce_type_name(type_ref.type)
    logger.warning("Unknown type node %r, using %s", type_ref, UNKNOWN_TYPE_NAME)
    return UNKNOWN_TYPE_NAME


def reduce_list_type(type_ref: TypeRef) -> str | None:
    """Get the element type name if the reference is a list, else None."""
    if isinstance(type_ref, NonNullTypeNode):
        return reduce_list_type(type_ref.type)
    if isinstance(type_ref, ListTypeNode):
        return reduce_type_name(type_ref.type)
    return None


def upper_first(name: str | None) -> str:
    """Capitalize the first character in a string."""
    return f"{name[0].upper()}{name[1:]}" if name else ""


def lower_first(name: str | None) -> str:
    """Lowercase the first character in a string."""
    return f"{name[0].lower()}{name[1:]}" if name else ""


def to_snake_case(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def safe_identifier(name: str) -> str:
    """Make a name usable as a Python identifier by suffixing keywords."""
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        return f"{name}_"
    return name
