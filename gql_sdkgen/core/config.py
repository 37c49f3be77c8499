"""Configuration for sdk generation.

Every naming convention used by the generated code lives here and is passed
explicitly to the components that need it.

Example:
    config = SdkConfig(sdk_name="Linear", types_module="linear.types")
    config.api_function_name("team")  # "create_team_sdk"
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import upper_first


class SdkConfig(BaseModel):
    """Naming and import conventions for a generated sdk module."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Id variable convention used to detect chained operations
    id_name: str = "id"
    id_type: str = "ID"

    # Parameter and type names used in generated functions
    variables_name: str = "variables"
    requester_name: str = "requester"
    requester_type: str = "Requester"
    wrapper_name: str = "wrapper"
    wrapper_type: str = "Wrapper"
    wrapper_default_name: str = "default_wrapper"
    response_name: str = "response"
    response_type: str = "Response"
    status_type: str = "Status"
    options_name: str = "options"
    options_type: str = "RequestOptions"
    operation_set_type: str = "OperationSet"

    # Used in generated documentation
    sdk_name: str = "GraphQL"

    # Scoped api names, {key} is the chain key and {Key} its upper-first form
    api_function_template: str = "create_{key}_sdk"
    api_root_function: str = "create_raw_sdk"
    api_type_template: str = "{Key}Sdk"
    api_root_type: str = "Sdk"

    # Type of a parent result, {Type} is the operation result type
    chain_result_template: str = "{Type}Result"

    # Names of the per-operation artifacts, {Name} is the operation name and
    # {Operation} its operation type, both upper-first
    document_template: str = "{Name}Document"
    result_type_template: str = "{Name}{Operation}"
    variables_type_template: str = "{Name}{Operation}Variables"
    omit_type_template: str = "{Type}Without{Key}"

    # Where the generated module finds operation types and documents.
    # Without a documents module the documents are emitted inline.
    types_module: str | None = None
    types_namespace: str | None = None
    documents_module: str | None = None
    documents_namespace: str | None = None
    runtime_module: str = "gql_sdkgen.runtime"

    # Extra GraphQL scalar name -> Python type annotation
    scalars: dict[str, str] = Field(default_factory=dict)

    @field_validator("types_namespace", "documents_namespace")
    @classmethod
    def check_namespace(cls, v):
        if v is not None and not v.isidentifier():
            raise ValueError(f"{v!r} is not a valid import name")
        return v

    @field_validator("types_module", "documents_module", "runtime_module")
    @classmethod
    def check_module(cls, v):
        if v is not None and not all(part.isidentifier() for part in v.split(".")):
            raise ValueError(f"{v!r} is not a valid module path")
        return v

    @classmethod
    def from_file(cls, path: str | Path) -> "SdkConfig":
        """Load a config from a JSON file."""
        return cls.model_validate_json(Path(path).read_text())

    def api_function_name(self, chain_key: str | None = None) -> str:
        """Name of the function creating the api for a chain key (or root)."""
        if not chain_key:
            return self.api_root_function
        return self.api_function_template.format(key=chain_key, Key=upper_first(chain_key))

    def api_type_name(self, chain_key: str | None = None) -> str:
        """Name of the type returned by the api function for a chain key (or root)."""
        if not chain_key:
            return self.api_root_type
        return self.api_type_template.format(key=chain_key, Key=upper_first(chain_key))

    def chain_result_name(self, result_type: str) -> str:
        """Name of the type a parent operation resolves to."""
        return self.chain_result_template.format(Type=result_type)

    def operation_names(self, name: str, operation: str) -> dict[str, str]:
        """Document, result type and variables type names for an operation."""
        values = {"Name": upper_first(name), "Operation": upper_first(operation)}
        return {
            "document": self.document_template.format(**values),
            "result_type": self.result_type_template.format(**values),
            "variables_type": self.variables_type_template.format(**values),
        }

    def omit_type_name(self, type_name: str, key: str) -> str:
        """Name of a variables type with a key removed."""
        return self.omit_type_template.format(Type=type_name, Key=upper_first(key))

    def namespaced_type(self, name: str) -> str:
        """Qualify an operation type name with the types namespace."""
        return f"{self.types_namespace}.{name}" if self.types_namespace else name

    def namespaced_document(self, name: str) -> str:
        """Qualify a document name with the documents namespace."""
        if self.documents_module and self.documents_namespace:
            return f"{self.documents_namespace}.{name}"
        return name
