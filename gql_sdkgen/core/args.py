"""Building function argument lists.

Arguments are deduplicated by name, the later definition replacing the
earlier one in place, then split into required arguments followed by optional
ones. Relative order within each group is kept.
"""

import logging
from dataclasses import dataclass, field

from .ir import DocBlock, Expr, Literal, OptionalType, Param, TypeExpr
from .render import PythonRenderer

logger = logging.getLogger(__name__)


@dataclass
class ArgDefinition:
    """One argument of a generated function."""
    name: str
    type: TypeExpr
    optional: bool = False
    description: str = ""
    # Default value expression; optional arguments without one default to None
    default: Expr | None = None


@dataclass
class ArgList:
    """An ordered argument list with its parameters and documentation lines."""
    args: list[ArgDefinition] = field(default_factory=list)
    params: list[Param] = field(default_factory=list)
    docs: list[str] = field(default_factory=list)

    @property
    def print(self) -> str:
        """The rendered parameter list."""
        return PythonRenderer().render_params(self.params)

    @property
    def names(self) -> list[str]:
        return [a.name for a in self.args]

    def doc_block(self, summary: list[str], returns: str | None = None) -> DocBlock:
        return DocBlock(summary=summary, args=list(self.docs), returns=returns)


def _is_optional(arg: ArgDefinition) -> bool:
    return arg.optional or arg.default is not None


def get_arg_param(arg: ArgDefinition) -> Param:
    """The parameter for an argument.

    Optional arguments without a default accept None and default to it.
    """
    if arg.default is not None:
        return Param(arg.name, arg.type, arg.default)
    if arg.optional:
        return Param(arg.name, OptionalType(arg.type), Literal(None))
    return Param(arg.name, arg.type)


def get_arg_doc(arg: ArgDefinition) -> str:
    return f"{arg.name}: {arg.description}" if arg.description else arg.name


def get_arg_list(args: list[ArgDefinition | None]) -> ArgList:
    """Build an argument list, dropping missing definitions."""
    unique: dict[str, ArgDefinition] = {}
    for arg in args:
        if arg is None:
            continue
        if arg.name in unique:
            logger.debug("Duplicate argument %r, keeping the later definition", arg.name)
        unique[arg.name] = arg

    ordered = [a for a in unique.values() if not _is_optional(a)]
    ordered += [a for a in unique.values() if _is_optional(a)]

    return ArgList(
        args=ordered,
        params=[get_arg_param(a) for a in ordered],
        docs=[get_arg_doc(a) for a in ordered],
    )
