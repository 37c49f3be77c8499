"""Core modules for GraphQL sdk generation."""

from .args import ArgDefinition, ArgList, get_arg_list
from .config import SdkConfig
from .generator import GenerationError, SdkGenerator
from .hooks import (
    AddHeaderHook,
    FilterOperationsHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .loader import DocumentLoader, load_documents
from .operation import (
    ChainRole,
    ClassifiedOperation,
    SdkOperation,
    classify_operation,
    classify_operations,
    describe_operation,
)
from .render import PythonRenderer
from .scalars import (
    DateHandler,
    DateTimeHandler,
    JSONHandler,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
)
from .synthesizer import OperationSynthesizer
from .types import UNKNOWN_TYPE_NAME, reduce_list_type, reduce_type_name
from .variables import has_optional_variable, has_other_variable, has_variable, is_id_variable
from .visitor import ScopedApi, SdkVisitor, build_scoped_apis

__all__ = [
    # Config
    "SdkConfig",
    # Types
    "UNKNOWN_TYPE_NAME",
    "reduce_list_type",
    "reduce_type_name",
    # Variables
    "has_optional_variable",
    "has_other_variable",
    "has_variable",
    "is_id_variable",
    # Operations
    "ChainRole",
    "ClassifiedOperation",
    "SdkOperation",
    "classify_operation",
    "classify_operations",
    "describe_operation",
    # Args
    "ArgDefinition",
    "ArgList",
    "get_arg_list",
    # Synthesis
    "OperationSynthesizer",
    "PythonRenderer",
    "ScopedApi",
    "SdkVisitor",
    "build_scoped_apis",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "DateTimeHandler",
    "DateHandler",
    "UUIDHandler",
    "JSONHandler",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterOperationsHook",
    "HookRunner",
    # Loader
    "DocumentLoader",
    "load_documents",
    # Generator
    "GenerationError",
    "SdkGenerator",
]
