"""Inspection of the variables declared by an operation."""

from graphql import NonNullTypeNode, OperationDefinitionNode, VariableDefinitionNode

from .config import SdkConfig
from .types import reduce_type_name


def _variables(operation: OperationDefinitionNode) -> tuple[VariableDefinitionNode, ...]:
    return tuple(operation.variable_definitions or ())


def variable_name(variable: VariableDefinitionNode) -> str:
    return variable.variable.name.value


def is_optional_variable(variable: VariableDefinitionNode) -> bool:
    """Nullable or defaulted variables do not have to be passed."""
    return not isinstance(variable.type, NonNullTypeNode) or variable.default_value is not None


def has_variable(operation: OperationDefinitionNode, name: str) -> bool:
    """The operation declares a variable with this name."""
    return any(variable_name(v) == name for v in _variables(operation))


def has_other_variable(operation: OperationDefinitionNode, name: str) -> bool:
    """The operation declares a variable with any other name."""
    return any(variable_name(v) != name for v in _variables(operation))


def has_optional_variable(operation: OperationDefinitionNode) -> bool:
    """Any optional variable makes the generated variables parameter optional."""
    return any(is_optional_variable(v) for v in _variables(operation))


def is_id_variable(variable: VariableDefinitionNode, config: SdkConfig) -> bool:
    """Both the name and the type must match the id convention."""
    return variable_name(variable) == config.id_name and reduce_type_name(variable.type) == config.id_type


def has_id_variable(operation: OperationDefinitionNode, config: SdkConfig) -> bool:
    return any(is_id_variable(v, config) for v in _variables(operation))


def get_variable(operation: OperationDefinitionNode, name: str) -> VariableDefinitionNode | None:
    """The variable definition with this name, if declared."""
    return next((v for v in _variables(operation) if variable_name(v) == name), None)


def other_variables(operation: OperationDefinitionNode, name: str) -> list[VariableDefinitionNode]:
    """Declared variables except the one with this name, in declaration order."""
    return [v for v in _variables(operation) if variable_name(v) != name]
