"""Classification of operations into root, parent and child roles.

An operation like ``team(id)`` whose first field is also ``team`` returns the
team itself, so it becomes a *parent* exposing the team scoped api on its
result. An operation like ``teamIssues(id)`` whose first field is ``team``
becomes a *child* nested inside that api as ``issues``. Everything else is
added at the root.

The rules only look at names and variables, never at the schema.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from graphql import DocumentNode, FieldNode, OperationDefinitionNode

from .config import SdkConfig
from .variables import has_id_variable

logger = logging.getLogger(__name__)


class ChainRole(Enum):
    """Level of the sdk an operation is added to."""
    ROOT = "root"      # Add the operation to the root
    PARENT = "parent"  # Add the operation to the root and return a chained api
    CHILD = "child"    # Add the operation to a chained api


@dataclass(frozen=True)
class ClassifiedOperation:
    """An operation definition with its chain role and chain key."""
    node: OperationDefinitionNode
    role: ChainRole
    chain_key: str | None = None

    def __post_init__(self):
        if (self.chain_key is None) != (self.role is ChainRole.ROOT):
            raise ValueError(
                f"Operation {self.name!r} with role {self.role.value} "
                f"cannot have chain key {self.chain_key!r}"
            )

    @property
    def name(self) -> str | None:
        return get_operation_name(self.node)

    @property
    def chain_parent_key(self) -> str | None:
        """The chain key if the operation should create an api."""
        return self.chain_key if self.role is ChainRole.PARENT else None

    @property
    def chain_child_key(self) -> str | None:
        """The chain key if the operation is nested within an api."""
        return self.chain_key if self.role is ChainRole.CHILD else None


@dataclass(frozen=True)
class SdkOperation:
    """A classified operation with the names the generated code refers to."""
    operation: ClassifiedOperation
    operation_type: str  # 'query', 'mutation' or 'subscription'
    document_name: str
    result_type: str
    variables_type: str

    @property
    def node(self) -> OperationDefinitionNode:
        return self.operation.node

    @property
    def name(self) -> str:
        return self.operation.name or ""

    @property
    def role(self) -> ChainRole:
        return self.operation.role

    @property
    def chain_key(self) -> str | None:
        return self.operation.chain_key

    @property
    def chain_parent_key(self) -> str | None:
        return self.operation.chain_parent_key

    @property
    def chain_child_key(self) -> str | None:
        return self.operation.chain_child_key


def get_first_field_name(operation: OperationDefinitionNode) -> str | None:
    """The name of the first field selected by the operation."""
    for selection in operation.selection_set.selections:
        if isinstance(selection, FieldNode):
            return selection.name.value
    return None


def get_operation_name(operation: OperationDefinitionNode) -> str | None:
    return operation.name.value if operation.name else None


def is_parent_operation(operation: OperationDefinitionNode, config: SdkConfig) -> bool:
    """Has an id and the operation name is the first field (team, issue)."""
    first_field = get_first_field_name(operation)
    return (
        first_field is not None
        and has_id_variable(operation, config)
        and get_operation_name(operation) == first_field
    )


def is_child_operation(operation: OperationDefinitionNode, config: SdkConfig) -> bool:
    """Has an id and the operation name starts with the first field (teamIssues)."""
    first_field = get_first_field_name(operation)
    name = get_operation_name(operation)
    return (
        first_field is not None
        and name is not None
        and has_id_variable(operation, config)
        and name.lower().startswith(first_field.lower())
    )


def classify_operation(operation: OperationDefinitionNode, config: SdkConfig) -> ClassifiedOperation:
    """Add information for chaining to the operation definition.

    Parent is checked first, so an exact name match is never a child.
    """
    if is_parent_operation(operation, config):
        return ClassifiedOperation(operation, ChainRole.PARENT, get_first_field_name(operation))
    if is_child_operation(operation, config):
        return ClassifiedOperation(operation, ChainRole.CHILD, get_first_field_name(operation))
    return ClassifiedOperation(operation, ChainRole.ROOT)


def classify_operations(document: DocumentNode, config: SdkConfig) -> list[ClassifiedOperation]:
    """Classify every operation definition of a document, in document order."""
    classified = [
        classify_operation(definition, config)
        for definition in document.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]
    for operation in classified:
        logger.debug("%s: %s %s", operation.name, operation.role.value, operation.chain_key or "")
    return classified


def describe_operation(operation: ClassifiedOperation, config: SdkConfig) -> SdkOperation:
    """Attach the document and type names generated for the operation."""
    if not operation.name:
        raise ValueError("Anonymous operations cannot be added to the sdk")
    operation_type = operation.node.operation.value
    names = config.operation_names(operation.name, operation_type)
    return SdkOperation(
        operation=operation,
        operation_type=operation_type,
        document_name=names["document"],
        result_type=names["result_type"],
        variables_type=names["variables_type"],
    )
