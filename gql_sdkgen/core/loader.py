"""GraphQL document loader using graphql-core.

Parses .graphql/.gql operation files into a single DocumentNode.
"""

import logging
import os

from graphql import DocumentNode, GraphQLSyntaxError, concat_ast, parse

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = (".graphql", ".gql")


class DocumentLoader:
    """Loads GraphQL operation documents from a file or directory."""

    def __init__(self, documents_path: str):
        """Initialize a loader with a path to a document file or directory."""
        self.documents_path = documents_path
        self.current_file = ""

    def load_all(self) -> DocumentNode:
        """Parse all document files and concatenate them."""
        documents = []
        for file_path in self._collect_document_files():
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                content = f.read()
            try:
                documents.append(parse(content))
            except GraphQLSyntaxError as e:
                logger.error("Error parsing %s: %s", self.current_file, e.message)
                raise
            logger.debug("Parsed %s", file_path)
        return concat_ast(documents)

    def _collect_document_files(self) -> list[str]:
        """Collect all document files from the path."""
        files = []
        if os.path.isfile(self.documents_path):
            if self.documents_path.endswith(DOCUMENT_EXTENSIONS):
                files.append(self.documents_path)
        else:
            for root, _, filenames in os.walk(self.documents_path):
                for filename in filenames:
                    if filename.endswith(DOCUMENT_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)


def load_documents(documents_path: str) -> DocumentNode:
    """Load and concatenate every document under a path."""
    return DocumentLoader(documents_path).load_all()
