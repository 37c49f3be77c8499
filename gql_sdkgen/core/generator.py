"""Sdk module generator.

Classifies the operations of a document, builds every scoped api and renders
them into one Python module through a Jinja2 template.

Supports custom templates via the template_dir parameter:
    generator = SdkGenerator(document, config, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import builtins
import logging
from pathlib import Path

from graphql import (
    DocumentNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    SelectionSetNode,
    print_ast,
)
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .config import SdkConfig
from .hooks import HookRunner
from .ir import StringConstant
from .operation import SdkOperation, classify_operations, describe_operation
from .render import PythonRenderer
from .scalars import ScalarRegistry
from .synthesizer import OperationSynthesizer
from .visitor import ScopedApi, build_scoped_apis

logger = logging.getLogger(__name__)


class GenerationError(ValueError):
    """Raised when the sdk cannot be generated from the documents."""


class SdkGenerator:
    """Generates a chainable sdk module from GraphQL operations.

    Available templates to override:
        - sdk.py.j2: the generated module

    Example:
        generator = SdkGenerator(load_documents("./operations"), SdkConfig(sdk_name="Linear"))
        generator.write("./sdk.py")
    """

    TEMPLATE_NAME = "sdk.py.j2"

    def __init__(
        self,
        document: DocumentNode,
        config: SdkConfig | None = None,
        hooks: HookRunner | None = None,
        template_dir: str | None = None,
        filename: str = "sdk.py",
    ):
        """Initialize the generator.

        Args:
            document: The parsed operations and fragments
            config: Naming and import conventions, defaults to SdkConfig()
            hooks: Pre- and post-generation hooks
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            filename: Name passed to post-generation hooks
        """
        self.document = document
        self.config = config or SdkConfig()
        self.hooks = hooks or HookRunner()
        self.filename = filename
        self.scalars = ScalarRegistry(self.config.scalars)
        self.synthesizer = OperationSynthesizer(self.config, self.scalars)
        self.renderer = PythonRenderer()
        self.operations: list[SdkOperation] = []
        self.apis: list[ScopedApi] = []

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_sdkgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def classify(self) -> list[SdkOperation]:
        """Classify and name every operation, then run the pre-generation hooks."""
        operations = []
        for classified in classify_operations(self.document, self.config):
            try:
                operations.append(describe_operation(classified, self.config))
            except ValueError as e:
                raise GenerationError(str(e)) from e
        return self.hooks.run_pre_hooks(operations)

    def build(self, operations: list[SdkOperation] | None = None) -> list[ScopedApi]:
        """Build the root api and one api per chain key."""
        if operations is None:
            operations = self.classify()
        try:
            return build_scoped_apis(operations, self.config, self.synthesizer)
        except ValueError as e:
            raise GenerationError(str(e)) from e

    def collect_documents(self, operations: list[SdkOperation]) -> list[StringConstant]:
        """One document constant per operation, with the fragments it spreads."""
        fragments = {
            d.name.value: d for d in self.document.definitions if isinstance(d, FragmentDefinitionNode)
        }
        documents = []
        for operation in operations:
            names: list[str] = []
            self._collect_fragment_names(operation, operation.node.selection_set, fragments, names)
            nodes = [operation.node, *(fragments[name] for name in names)]
            documents.append(
                StringConstant(
                    name=operation.document_name,
                    value="\n\n".join(print_ast(node) for node in nodes),
                )
            )
        return documents

    def _collect_fragment_names(
        self,
        operation: SdkOperation,
        selection_set: SelectionSetNode | None,
        fragments: dict[str, FragmentDefinitionNode],
        found: list[str],
    ):
        """Recursively find the fragments spread in a selection set."""
        if selection_set is None:
            return
        for selection in selection_set.selections:
            if isinstance(selection, FragmentSpreadNode):
                name = selection.name.value
                if name in found:
                    continue
                fragment = fragments.get(name)
                if fragment is None:
                    raise GenerationError(f"Unknown fragment {name!r} in operation {operation.name!r}")
                found.append(name)
                self._collect_fragment_names(operation, fragment.selection_set, fragments, found)
            else:
                self._collect_fragment_names(
                    operation, getattr(selection, "selection_set", None), fragments, found
                )

    def runtime_imports(self) -> list[str]:
        """Configured names that the runtime module provides."""
        c = self.config
        names = {
            c.requester_type,
            c.wrapper_type,
            c.wrapper_default_name,
            c.response_type,
            c.status_type,
            c.options_type,
            c.operation_set_type,
        }
        return sorted(n for n in names if n.isidentifier() and not hasattr(builtins, n))

    def generate_code(self, operations: list[SdkOperation] | None = None) -> str:
        """Generate the complete sdk module code.

        The operations and apis generated are kept on ``operations`` and
        ``apis``.
        """
        if operations is None:
            operations = self.classify()
        apis = self.build(operations)
        self.operations, self.apis = operations, apis
        logger.debug("Scopes: %s", ", ".join(api.chain_key or "root" for api in apis))

        documents = [] if self.config.documents_module else self.collect_documents(operations)
        context = {
            "config": self.config,
            "runtime_imports": self.runtime_imports(),
            "scalar_imports": sorted(self.scalars.used_imports()),
            "documents": [self.renderer.render([d]) for d in documents],
            # Records and results are synthesised while building the apis
            "records": [self.renderer.render([r]) for r in self.synthesizer.records.values()],
            "apis": [self.renderer.render(api.declarations) for api in apis],
            "results": [self.renderer.render([r]) for r in self.synthesizer.results.values()],
        }
        content = self.env.get_template(self.TEMPLATE_NAME).render(context)

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GenerationError(
                f"Generated invalid Python for {self.filename}: {e}\n"
                f"Template: {self.TEMPLATE_NAME}"
            ) from e

        return self.hooks.run_post_hooks(self.filename, content)

    def write(self, output_path: str | Path, content: str | None = None) -> Path:
        """Write the module to a file, generating it unless content is given."""
        if content is None:
            content = self.generate_code()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(content)
        return output_path
