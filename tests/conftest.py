"""Shared fixtures for the sdk generator tests."""

import pytest
from graphql import parse

from gql_sdkgen.core.config import SdkConfig
from gql_sdkgen.core.operation import classify_operations, describe_operation

OPERATIONS = """
query viewer {
  viewer {
    id
    name
  }
}

query team($id: ID!) {
  team(id: $id) {
    id
    name
  }
}

query teamIssues($id: ID!, $first: Int) {
  team(id: $id) {
    issues(first: $first) {
      nodes {
        id
      }
    }
  }
}

query issue($id: ID!) {
  issue(id: $id) {
    id
    title
  }
}

query issueAssignee($id: ID!) {
  issue(id: $id) {
    assignee {
      id
      name
    }
  }
}

query issues($first: Int) {
  issues(first: $first) {
    nodes {
      ...IssueFields
    }
  }
}

mutation issueCreate($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
  }
}

fragment IssueFields on Issue {
  id
  title
}
"""


def describe_all(source: str, config: SdkConfig | None = None):
    """Classify and name every operation in a document string."""
    config = config or SdkConfig()
    return [describe_operation(o, config) for o in classify_operations(parse(source), config)]


@pytest.fixture
def config():
    return SdkConfig()


@pytest.fixture
def document():
    return parse(OPERATIONS)


@pytest.fixture
def operations(config):
    return describe_all(OPERATIONS, config)


@pytest.fixture
def documents_dir(tmp_path):
    """A directory of operation files for loader and cli tests."""
    root = tmp_path / "operations"
    root.mkdir()
    (root / "operations.graphql").write_text(OPERATIONS)
    return root
