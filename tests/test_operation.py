"""Tests for operation classification."""

import pytest
from graphql import parse

from gql_sdkgen.core.config import SdkConfig
from gql_sdkgen.core.operation import (
    ChainRole,
    ClassifiedOperation,
    classify_operation,
    classify_operations,
    describe_operation,
    get_first_field_name,
    is_child_operation,
    is_parent_operation,
)


def operation(source: str):
    return parse(source).definitions[0]


# =============================================================================
# Parent operations
# =============================================================================


class TestParentOperation:
    """Operations named after their first field with an id variable."""

    def test_parent(self, config):
        op = operation("query team($id: ID!) { team(id: $id) { id } }")
        classified = classify_operation(op, config)
        assert classified.role is ChainRole.PARENT
        assert classified.chain_key == "team"
        assert classified.chain_parent_key == "team"
        assert classified.chain_child_key is None

    def test_mutation_named_after_field(self, config):
        op = operation("mutation teamArchive($id: ID!) { teamArchive(id: $id) { success } }")
        classified = classify_operation(op, config)
        assert classified.role is ChainRole.PARENT
        assert classified.chain_key == "teamArchive"

    def test_parent_is_not_child(self, config):
        """An exact name match satisfies both rules, parent wins."""
        op = operation("query team($id: ID!) { team(id: $id) { id } }")
        assert is_parent_operation(op, config)
        assert is_child_operation(op, config)
        assert classify_operation(op, config).role is ChainRole.PARENT

    def test_fragment_spread_before_first_field(self, config):
        op = operation("query team($id: ID!) { ...RootFields team(id: $id) { id } }")
        assert get_first_field_name(op) == "team"
        assert classify_operation(op, config).role is ChainRole.PARENT

    def test_wrong_id_type_is_root(self, config):
        op = operation("query team($id: String!) { team(id: $id) { id } }")
        assert classify_operation(op, config).role is ChainRole.ROOT

    def test_without_id_is_root(self, config):
        op = operation("query team($key: ID!) { team(key: $key) { id } }")
        assert classify_operation(op, config).role is ChainRole.ROOT


# =============================================================================
# Child operations
# =============================================================================


class TestChildOperation:
    """Operations whose name starts with the first field."""

    def test_child(self, config):
        op = operation("query teamIssues($id: ID!) { team(id: $id) { issues { nodes { id } } } }")
        classified = classify_operation(op, config)
        assert classified.role is ChainRole.CHILD
        assert classified.chain_key == "team"
        assert classified.chain_child_key == "team"
        assert classified.chain_parent_key is None

    def test_case_insensitive_prefix(self, config):
        op = operation("query TeamMembers($id: ID!) { team(id: $id) { members { nodes { id } } } }")
        classified = classify_operation(op, config)
        assert classified.role is ChainRole.CHILD
        assert classified.chain_key == "team"

    def test_unrelated_name_is_root(self, config):
        op = operation("query archivedTeam($id: ID!) { team(id: $id) { id } }")
        assert classify_operation(op, config).role is ChainRole.ROOT

    def test_configured_id_convention(self):
        config = SdkConfig(id_name="key", id_type="Key")
        op = operation("query teamIssues($key: Key!) { team(key: $key) { issues { nodes { id } } } }")
        assert classify_operation(op, config).role is ChainRole.CHILD


# =============================================================================
# Root operations
# =============================================================================


class TestRootOperation:
    def test_no_variables(self, config):
        op = operation("query viewer { viewer { id } }")
        classified = classify_operation(op, config)
        assert classified.role is ChainRole.ROOT
        assert classified.chain_key is None

    def test_no_field_selection(self, config):
        op = operation("query team($id: ID!) { ...TeamFields }")
        assert get_first_field_name(op) is None
        assert classify_operation(op, config).role is ChainRole.ROOT


class TestClassifiedOperation:
    """Role and chain key must agree."""

    def test_root_with_key_rejected(self):
        op = operation("query viewer { viewer { id } }")
        with pytest.raises(ValueError):
            ClassifiedOperation(op, ChainRole.ROOT, "viewer")

    def test_child_without_key_rejected(self):
        op = operation("query viewer { viewer { id } }")
        with pytest.raises(ValueError):
            ClassifiedOperation(op, ChainRole.CHILD)


class TestClassifyOperations:
    def test_document_order(self, document, config):
        classified = classify_operations(document, config)
        assert [(o.name, o.role) for o in classified] == [
            ("viewer", ChainRole.ROOT),
            ("team", ChainRole.PARENT),
            ("teamIssues", ChainRole.CHILD),
            ("issue", ChainRole.PARENT),
            ("issueAssignee", ChainRole.CHILD),
            ("issues", ChainRole.ROOT),
            ("issueCreate", ChainRole.ROOT),
        ]

    def test_fragments_skipped(self, document, config):
        names = [o.name for o in classify_operations(document, config)]
        assert "IssueFields" not in names


class TestDescribeOperation:
    """Tests for the names attached to an operation."""

    def test_query_names(self, config):
        classified = classify_operation(operation("query team($id: ID!) { team(id: $id) { id } }"), config)
        described = describe_operation(classified, config)
        assert described.operation_type == "query"
        assert described.document_name == "TeamDocument"
        assert described.result_type == "TeamQuery"
        assert described.variables_type == "TeamQueryVariables"
        assert described.role is ChainRole.PARENT
        assert described.name == "team"

    def test_mutation_names(self, config):
        op = operation("mutation issueCreate($input: IssueCreateInput!) { issueCreate(input: $input) { success } }")
        described = describe_operation(classify_operation(op, config), config)
        assert described.result_type == "IssueCreateMutation"
        assert described.variables_type == "IssueCreateMutationVariables"

    def test_anonymous_operation_rejected(self, config):
        classified = classify_operation(operation("{ viewer { id } }"), config)
        with pytest.raises(ValueError, match="Anonymous"):
            describe_operation(classified, config)
