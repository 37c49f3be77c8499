"""Assembly of scoped apis from classified operations.

One ``SdkVisitor`` exists per scope: the root, or a single chain key. Each
visitor sees every operation once and keeps those belonging to its scope:

- root: root and parent operations
- chain key K: child operations chained to K

Building a visitor produces a protocol naming the methods of the scope and
one function creating an object that satisfies it.
"""

import logging
from dataclasses import dataclass, field, replace

from .args import ArgDefinition, get_arg_list
from .config import SdkConfig
from .ir import (
    Call,
    ClassDecl,
    DocBlock,
    FunctionDef,
    Name,
    NamedType,
    ObjectLiteral,
    Param,
    Property,
    Return,
    Statement,
)
from .operation import ChainRole, SdkOperation
from .render import PythonRenderer
from .synthesizer import OperationSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class ScopedApi:
    """The generated api for one scope."""
    chain_key: str | None
    function_name: str
    type_name: str
    operations: list[SdkOperation] = field(default_factory=list)
    function: FunctionDef | None = None
    protocol: ClassDecl | None = None

    @property
    def declarations(self) -> list[Statement]:
        return [d for d in (self.protocol, self.function) if d is not None]


class SdkVisitor:
    """Collects the operations of one scope and builds its api.

    Args:
        config: the sdk config
        chain_key: the chain key of the scope, None for the root
        synthesizer: builds the method for each operation, shared between
            visitors so synthesised records are declared once
    """

    def __init__(
        self,
        config: SdkConfig,
        chain_key: str | None = None,
        synthesizer: OperationSynthesizer | None = None,
    ):
        self.config = config
        self.chain_key = chain_key
        self.synthesizer = synthesizer or OperationSynthesizer(config)
        self.api_name = config.api_function_name(chain_key)
        self.api_type = config.api_type_name(chain_key)
        self._operations: list[SdkOperation] = []
        logger.debug("%s: apiName %s", chain_key or "root", self.api_name)
        logger.debug("%s: apiType %s", chain_key or "root", self.api_type)

    @property
    def operations(self) -> list[SdkOperation]:
        return list(self._operations)

    def accepts(self, operation: SdkOperation) -> bool:
        """Whether the operation belongs to this scope."""
        if self.chain_key is None:
            return operation.role in (ChainRole.ROOT, ChainRole.PARENT)
        return operation.role is ChainRole.CHILD and operation.chain_key == self.chain_key

    def visit(self, operation: SdkOperation) -> bool:
        """Record the operation if it belongs to this scope."""
        if not self.accepts(operation):
            return False
        self._operations.append(operation)
        return True

    def visit_all(self, operations: list[SdkOperation]) -> "SdkVisitor":
        for operation in operations:
            self.visit(operation)
        return self

    @property
    def description(self) -> str:
        if self.chain_key:
            return (
                f"Initialise a set of operations, scoped to {self.chain_key}, "
                f"to run against the {self.config.sdk_name} api"
            )
        return f"Initialise a set of operations to run against the {self.config.sdk_name} api"

    def _get_args(self):
        c = self.config
        return get_arg_list([
            # Add an initial id arg if in a nested api
            ArgDefinition(
                name=c.id_name,
                type=self.synthesizer.named_type(c.id_type),
                description=f"{c.id_name} to scope the returned operations by",
            )
            if self.chain_key
            else None,
            ArgDefinition(
                name=c.requester_name,
                type=NamedType(c.requester_type),
                description="function to call the graphql client",
            ),
            ArgDefinition(
                name=c.wrapper_name,
                type=NamedType(c.wrapper_type),
                default=Name(c.wrapper_default_name),
                description="wrapper function to process before or after the operation is called",
            ),
        ])

    def build(self) -> ScopedApi:
        """Synthesise the api function and the protocol it returns.

        Raises:
            ValueError: if two operations of the scope get the same method name
        """
        logger.debug("%s: operations %d", self.chain_key or "root", len(self._operations))
        args = self._get_args()
        scope_names = set(args.names)

        methods: list[FunctionDef] = []
        stubs: list[FunctionDef] = []
        entries: list[Property] = []
        seen: dict[str, SdkOperation] = {}
        for operation in self._operations:
            key = self.synthesizer.get_operation_name(operation)
            if key in seen:
                raise ValueError(
                    f"Operations {seen[key].name!r} and {operation.name!r} "
                    f"both map to the method {key!r} of {self.api_name}"
                )
            seen[key] = operation

            # Nested functions must not shadow the parameters they close over
            function_name = f"_{key}" if key in scope_names else key
            method = self.synthesizer.get_operation(operation, name=function_name)
            methods.append(method)
            stubs.append(replace(method, name=key, params=[Param("self"), *method.params], body=[]))
            entries.append(Property(key, Name(function_name)))

        function = FunctionDef(
            name=self.api_name,
            params=args.params,
            returns=NamedType(self.api_type),
            body=[
                *methods,
                Return(
                    Call(
                        Name("cast"),
                        [Name(self.api_type), ObjectLiteral(entries, constructor=self.config.operation_set_type)],
                    )
                ),
            ],
            doc=args.doc_block(
                summary=[self.description],
                returns=(
                    f"The set of available operations scoped to a single {self.chain_key}"
                    if self.chain_key
                    else "The set of available operations"
                ),
            ),
        )
        protocol = ClassDecl(
            name=self.api_type,
            bases=["Protocol"],
            methods=stubs,
            doc=DocBlock(summary=[f"The returned type from calling {self.api_name}", self.description]),
        )
        return ScopedApi(
            chain_key=self.chain_key,
            function_name=self.api_name,
            type_name=self.api_type,
            operations=self.operations,
            function=function,
            protocol=protocol,
        )

    @property
    def sdk_content(self) -> str:
        """The rendered protocol and api function."""
        return PythonRenderer().render(self.build().declarations)


def collect_chain_keys(operations: list[SdkOperation]) -> list[str]:
    """Distinct chain keys of parent and child operations, first seen first."""
    keys: list[str] = []
    for operation in operations:
        if operation.chain_key and operation.chain_key not in keys:
            keys.append(operation.chain_key)
    return keys


def build_scoped_apis(
    operations: list[SdkOperation],
    config: SdkConfig,
    synthesizer: OperationSynthesizer | None = None,
) -> list[ScopedApi]:
    """Build the root api followed by one api per chain key."""
    synthesizer = synthesizer or OperationSynthesizer(config)
    scopes: list[str | None] = [None, *collect_chain_keys(operations)]
    return [
        SdkVisitor(config, chain_key, synthesizer).visit_all(operations).build()
        for chain_key in scopes
    ]
