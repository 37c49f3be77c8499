"""Synthesis of one sdk method per classified operation.

For ``team(id: ID!)`` (a parent of the ``team`` chain) this builds IR that
renders as::

    async def team(id: str, options: Optional[RequestOptions] = None) -> TeamQueryResult:
        response = await wrapper(lambda: requester(TeamDocument, {"id": id}, options))
        return cast(TeamQueryResult, OperationSet(**{
            **vars(response),
            **vars(create_team_sdk(id, requester, wrapper)),
        }))

``TeamQueryResult`` is a protocol with the response fields that extends the
``TeamSdk`` protocol. Root and child operations return the wrapped requester
call directly.
"""

import logging
import re

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

from .args import ArgDefinition, get_arg_list
from .config import SdkConfig
from .ir import (
    Assign,
    Await,
    Call,
    ClassDecl,
    DocBlock,
    Expr,
    FieldDecl,
    FunctionDef,
    GenericType,
    Lambda,
    Name,
    NamedType,
    ObjectLiteral,
    OmitType,
    OptionalType,
    Property,
    Return,
    Spread,
    Statement,
    TypeExpr,
)
from .operation import ChainRole, SdkOperation
from .scalars import ScalarRegistry
from .types import UNKNOWN_TYPE_NAME, lower_first, reduce_type_name, safe_identifier, to_snake_case
from .variables import (
    get_variable,
    has_optional_variable,
    has_other_variable,
    has_variable,
    is_optional_variable,
    other_variables,
)

logger = logging.getLogger(__name__)


class OperationSynthesizer:
    """Builds the method IR for sdk operations.

    Records that realise synthesised variables types (variables without the
    id) are collected in ``records``, and the result protocols of parent
    operations in ``results``, for the module to declare once.
    """

    def __init__(self, config: SdkConfig, scalars: ScalarRegistry | None = None):
        self.config = config
        self.scalars = scalars or ScalarRegistry(config.scalars)
        self.records: dict[str, ClassDecl] = {}
        self.results: dict[str, ClassDecl] = {}

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def named_type(self, type_name: str) -> NamedType:
        """A GraphQL named type as a Python annotation."""
        python_type = self.scalars.python_type(type_name)
        if python_type is not None:
            return NamedType(python_type)
        if type_name == UNKNOWN_TYPE_NAME:
            return NamedType(type_name)
        return NamedType(self.config.namespaced_type(type_name))

    def variable_type(self, type_node: TypeNode, nullable: bool = True) -> TypeExpr:
        """A variable's GraphQL type as a Python annotation."""
        if isinstance(type_node, NonNullTypeNode):
            return self.variable_type(type_node.type, nullable=False)
        if isinstance(type_node, ListTypeNode):
            inner: TypeExpr = GenericType("list", [self.variable_type(type_node.type)])
        elif isinstance(type_node, NamedTypeNode):
            inner = self.named_type(reduce_type_name(type_node))
        else:
            inner = NamedType(reduce_type_name(type_node))
        return OptionalType(inner) if nullable else inner

    def response_type(self, o: SdkOperation) -> GenericType:
        return GenericType(self.config.response_type, [NamedType(self.config.namespaced_type(o.result_type))])

    def omit_id_type(self, o: SdkOperation) -> OmitType:
        """The operation variables type without the id variable."""
        c = self.config
        omit = OmitType(
            name=c.omit_type_name(o.variables_type, c.id_name),
            fields=[
                FieldDecl(
                    name=v.variable.name.value,
                    type=self.variable_type(v.type),
                    required=not is_optional_variable(v),
                )
                for v in other_variables(o.node, c.id_name)
            ],
        )
        if omit.name not in self.records:
            self.records[omit.name] = ClassDecl(
                name=omit.name,
                bases=["TypedDict"],
                fields=omit.fields,
                doc=DocBlock(summary=[f"{o.variables_type} without the {c.id_name} variable"]),
            )
        return omit

    def chain_result_type(self, o: SdkOperation) -> NamedType:
        """The response of a parent operation merged with its chained api.

        Declared as a protocol extending the chained api type, with the
        response fields added.
        """
        c = self.config
        name = c.chain_result_name(o.result_type)
        if name not in self.results:
            data_type = NamedType(c.namespaced_type(o.result_type))
            self.results[name] = ClassDecl(
                name=name,
                bases=[c.api_type_name(o.chain_parent_key), "Protocol"],
                fields=[
                    FieldDecl("status", NamedType(c.status_type)),
                    FieldDecl("data", OptionalType(data_type)),
                    FieldDecl("error", OptionalType(NamedType("Exception"))),
                ],
                doc=DocBlock(summary=[
                    f"The {o.result_type} response with the operations scoped to {o.chain_parent_key}"
                ]),
            )
        return NamedType(name)

    # -------------------------------------------------------------------------
    # Arguments
    # -------------------------------------------------------------------------

    def get_operation_args(self, o: SdkOperation) -> list[ArgDefinition]:
        """Get the operation args from the operation variables."""
        c = self.config
        id_variable = get_variable(o.node, c.id_name)
        chain_child_key = o.chain_child_key

        # Handle id variables separately by making them the first arg
        if id_variable is not None:
            id_arg = ArgDefinition(
                name=c.id_name,
                type=self.named_type(reduce_type_name(id_variable.type)),
                description=f"{c.id_name} to pass into the {o.result_type}",
            )
            if has_other_variable(o.node, c.id_name):
                description = (
                    f"variables without {chain_child_key} {c.id_name} to pass into the {o.result_type}"
                    if chain_child_key
                    else f"variables without {c.id_name} to pass into the {o.result_type}"
                )
                variables_arg = ArgDefinition(
                    name=c.variables_name,
                    type=self.omit_id_type(o),
                    optional=has_optional_variable(o.node),
                    description=description,
                )
                # Chained operations get the id from the function scope
                return [variables_arg] if chain_child_key else [id_arg, variables_arg]
            return [] if chain_child_key else [id_arg]

        if not o.node.variable_definitions:
            return []
        return [
            ArgDefinition(
                name=c.variables_name,
                type=NamedType(c.namespaced_type(o.variables_type)),
                optional=has_optional_variable(o.node),
                description=f"variables to pass into the {o.result_type}",
            )
        ]

    def get_requester_args(self, o: SdkOperation) -> Expr:
        """Get the variables passed to the requester."""
        c = self.config
        if has_variable(o.node, c.id_name):
            entries: list[Property | Spread] = [Property(c.id_name, Name(c.id_name))]
            # Merge the id into the remaining variables
            if has_other_variable(o.node, c.id_name):
                entries.append(Spread(Name(c.variables_name), optional=has_optional_variable(o.node)))
            return ObjectLiteral(entries)
        if o.node.variable_definitions:
            return Name(c.variables_name)
        return ObjectLiteral([])

    # -------------------------------------------------------------------------
    # Body and signature
    # -------------------------------------------------------------------------

    def get_operation_body(self, o: SdkOperation) -> list[Statement]:
        """Get the statements of the sdk method."""
        c = self.config
        call_requester = Call(
            Name(c.wrapper_name),
            [
                Lambda(
                    Call(
                        Name(c.requester_name),
                        [
                            Name(c.namespaced_document(o.document_name)),
                            self.get_requester_args(o),
                            Name(c.options_name),
                        ],
                    )
                )
            ],
        )

        # A chained api is created and returned along with the response
        chain_parent_key = o.chain_parent_key
        if chain_parent_key:
            chained_api = Call(
                Name(c.api_function_name(chain_parent_key)),
                [Name(c.id_name), Name(c.requester_name), Name(c.wrapper_name)],
            )
            return [
                Assign(c.response_name, Await(call_requester)),
                Return(
                    Call(
                        Name("cast"),
                        [
                            Name(self.chain_result_type(o).name),
                            ObjectLiteral(
                                [Spread(Name(c.response_name)), Spread(chained_api)],
                                constructor=c.operation_set_type,
                            ),
                        ],
                    )
                ),
            ]
        return [Return(call_requester)]

    def get_operation_name(self, o: SdkOperation) -> str:
        """Get the name of the sdk method.

        Chained operations have the chain key removed from the name, unless
        nothing usable as a Python name is left (``team2faStatus`` keeps the
        key as ``team2fa_status``).
        """
        name = lower_first(o.name)
        chain_child_key = o.chain_child_key
        if chain_child_key:
            stripped = re.sub(f"^{re.escape(chain_child_key)}", "", o.name, flags=re.IGNORECASE)
            if lower_first(stripped).isidentifier():
                name = lower_first(stripped)
        return safe_identifier(to_snake_case(name))

    def get_operation_result_type(self, o: SdkOperation) -> TypeExpr:
        """Get the result type of the sdk method.

        Parents resolve to a protocol that also carries the methods of the
        chained api.
        """
        if o.chain_parent_key:
            return self.chain_result_type(o)
        return GenericType("Awaitable", [self.response_type(o)])

    def get_operation(self, o: SdkOperation, name: str | None = None) -> FunctionDef:
        """Build the sdk method for an operation.

        ``name`` overrides the function name, for when the method name would
        shadow a name of the enclosing scope.
        """
        c = self.config
        args = get_arg_list([
            *self.get_operation_args(o),
            ArgDefinition(
                name=c.options_name,
                type=NamedType(c.options_type),
                optional=True,
                description="options to pass to the graphql client",
            ),
        ])
        logger.debug("%s: %s(%s)", o.chain_key or "root", o.name, ", ".join(args.names))
        return FunctionDef(
            name=name or self.get_operation_name(o),
            params=args.params,
            returns=self.get_operation_result_type(o),
            body=self.get_operation_body(o),
            doc=args.doc_block(
                summary=[f"Call the {c.sdk_name} api with the {o.result_type}"],
                returns=f"The wrapped result of the {o.result_type}",
            ),
            is_async=o.role is ChainRole.PARENT,
        )
