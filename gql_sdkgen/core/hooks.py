"""Hooks around sdk generation.

A pre-generation hook sees the classified operations in document order and
decides which of them get sdk methods. Dropping a parent drops its method
from the root api only: the chained api of its key is still built from the
child operations that remain.

A post-generation hook sees the rendered module, after it has been checked
to be valid Python, and returns the text that gets written.

Example usage:
    from gql_sdkgen.core.hooks import HookRunner

    class SkipMutations:
        def pre_generate(self, operations):
            return [o for o in operations if o.node.operation.value != "mutation"]

    runner = HookRunner(pre_hooks=[SkipMutations()])
"""

import logging
from typing import Iterable, Protocol, runtime_checkable

from .operation import SdkOperation

logger = logging.getLogger(__name__)


@runtime_checkable
class PreGenerateHook(Protocol):
    """Selects or reorders the operations to generate methods for."""

    def pre_generate(self, operations: list[SdkOperation]) -> list[SdkOperation]:
        """Called once the operations are classified.

        Args:
            operations: The classified operations, in document order

        Returns:
            The operations to build the scoped apis from
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Transforms the rendered sdk module."""

    def post_generate(self, filename: str, content: str) -> str:
        """Called with the rendered module.

        Args:
            filename: The name the module is written under (e.g., "sdk.py")
            content: The module source

        Returns:
            The source to write
        """
        ...


class AddHeaderHook:
    """Puts a comment block above the generated module.

    Header lines that are not comments yet are commented out, so any text
    keeps the module importable.

    Example:
        hook = AddHeaderHook("Copyright Acme Corp")  # "# Copyright Acme Corp"
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        lines = [
            line if line.startswith("#") else f"# {line}".rstrip()
            for line in self.header.rstrip("\n").split("\n")
        ]
        return "\n".join(lines) + "\n\n" + content


class FilterOperationsHook:
    """Keeps the operations whose names match.

    Names are matched as written in the document (``teamIssues``), before the
    chain key is removed from the method name.

    Example:
        # Leave out the operations only used by admin tooling
        hook = FilterOperationsHook(exclude_prefix="admin")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, operations: list[SdkOperation]) -> list[SdkOperation]:
        kept = [o for o in operations if self._should_include(o.name)]
        logger.debug("Filtered out %d of %d operations", len(operations) - len(kept), len(operations))
        return kept


class HookRunner:
    """Applies hooks in the order they were added, each to the output of the last."""

    def __init__(
        self,
        pre_hooks: Iterable[PreGenerateHook] = (),
        post_hooks: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks: list[PreGenerateHook] = list(pre_hooks)
        self.post_hooks: list[PostGenerateHook] = list(post_hooks)

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, operations: list[SdkOperation]) -> list[SdkOperation]:
        """Narrow the classified operations through every pre-generation hook."""
        for hook in self.pre_hooks:
            operations = list(hook.pre_generate(operations))
        return operations

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Pass the rendered module through every post-generation hook."""
        for hook in self.post_hooks:
            logger.debug("Running %s on %s", type(hook).__name__, filename)
            content = hook.post_generate(filename, content)
        return content
