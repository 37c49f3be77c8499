"""Intermediate Representation (IR) for generated sdk code.

This module defines dataclasses for the small set of constructs the sdk
generator emits: type expressions, expressions, and declarations. Synthesis
builds these nodes; render.py turns them into source text as a final step.
"""

from dataclasses import dataclass, field
from typing import Any, Union


# =============================================================================
# Type expressions
# =============================================================================


@dataclass
class NamedType:
    """A type referenced by (possibly dotted) name, e.g. ``T.TeamQuery``."""
    name: str


@dataclass
class GenericType:
    """A parameterised type, e.g. ``Response[T.TeamQuery]``."""
    base: str
    args: list["TypeExpr"] = field(default_factory=list)


@dataclass
class OptionalType:
    """A type that also accepts None."""
    inner: "TypeExpr"


@dataclass
class FieldDecl:
    """A typed field of a declared class."""
    name: str
    type: "TypeExpr"
    required: bool = True


@dataclass
class OmitType:
    """A record type with some keys removed.

    Rendered by reference to ``name``; the declaration of that name is built
    from ``fields`` (the keys that remain).
    """
    name: str
    fields: list[FieldDecl] = field(default_factory=list)


TypeExpr = Union[NamedType, GenericType, OptionalType, OmitType]


# =============================================================================
# Expressions
# =============================================================================


@dataclass
class Name:
    """A reference to a variable, function or constant."""
    id: str


@dataclass
class Literal:
    """A constant value."""
    value: Any


@dataclass
class Call:
    """A function call with positional arguments."""
    func: "Expr"
    args: list["Expr"] = field(default_factory=list)


@dataclass
class Lambda:
    """A function of no arguments returning ``body``."""
    body: "Expr"


@dataclass
class Await:
    value: "Expr"


@dataclass
class Property:
    """A ``key: value`` entry of an object literal."""
    key: str
    value: "Expr"


@dataclass
class Spread:
    """All entries of ``value`` copied into an object literal.

    ``optional`` marks a value that may be None and spreads as empty.
    """
    value: "Expr"
    optional: bool = False


@dataclass
class ObjectLiteral:
    """An object built from properties and spreads, later entries winning.

    Without a constructor this is a plain record (dict); with one, the
    entries become the attributes of an instance of that type.
    """
    entries: list[Union[Property, Spread]] = field(default_factory=list)
    constructor: str | None = None


Expr = Union[Name, Literal, Call, Lambda, Await, ObjectLiteral]


# =============================================================================
# Declarations and statements
# =============================================================================


@dataclass
class Param:
    """A function parameter."""
    name: str
    type: TypeExpr | None = None
    default: Expr | None = None


@dataclass
class DocBlock:
    """Documentation of a declaration."""
    summary: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    returns: str | None = None


@dataclass
class Return:
    value: Expr


@dataclass
class Assign:
    target: str
    value: Expr


@dataclass
class FunctionDef:
    """A function declaration, possibly nested in another one."""
    name: str
    params: list[Param] = field(default_factory=list)
    returns: TypeExpr | None = None
    body: list["Statement"] = field(default_factory=list)
    doc: DocBlock | None = None
    is_async: bool = False


@dataclass
class ClassDecl:
    """A class with typed fields and methods.

    With ``TypedDict`` as its base this is a record; with ``Protocol`` it is
    a structural type whose methods have no bodies.
    """
    name: str
    bases: list[str] = field(default_factory=list)
    fields: list[FieldDecl] = field(default_factory=list)
    methods: list[FunctionDef] = field(default_factory=list)
    doc: DocBlock | None = None


@dataclass
class StringConstant:
    """A module level string constant, such as a GraphQL document."""
    name: str
    value: str


Statement = Union[Return, Assign, FunctionDef, ClassDecl, StringConstant]
