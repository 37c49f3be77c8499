"""Tests for the variable classifier."""

import pytest
from graphql import parse

from gql_sdkgen.core.config import SdkConfig
from gql_sdkgen.core.variables import (
    get_variable,
    has_id_variable,
    has_optional_variable,
    has_other_variable,
    has_variable,
    is_id_variable,
    is_optional_variable,
    other_variables,
    variable_name,
)


def operation(source: str):
    return parse(source).definitions[0]


@pytest.fixture
def config():
    return SdkConfig()


@pytest.fixture
def team_issues():
    return operation(
        "query teamIssues($id: ID!, $first: Int) { team(id: $id) { issues(first: $first) { nodes { id } } } }"
    )


@pytest.fixture
def team():
    return operation("query team($id: ID!) { team(id: $id) { id } }")


class TestHasVariable:
    def test_declared(self, team_issues):
        assert has_variable(team_issues, "id")
        assert has_variable(team_issues, "first")

    def test_not_declared(self, team_issues):
        assert not has_variable(team_issues, "after")

    def test_no_variables(self):
        assert not has_variable(operation("query viewer { viewer { id } }"), "id")


class TestHasOtherVariable:
    def test_other_variable(self, team_issues):
        assert has_other_variable(team_issues, "id")

    def test_only_named_variable(self, team):
        assert not has_other_variable(team, "id")

    def test_no_variables(self):
        assert not has_other_variable(operation("query viewer { viewer { id } }"), "id")


class TestHasOptionalVariable:
    def test_nullable_variable(self, team_issues):
        assert has_optional_variable(team_issues)

    def test_required_only(self, team):
        assert not has_optional_variable(team)

    def test_default_value_makes_optional(self):
        op = operation("query issues($first: Int! = 50) { issues(first: $first) { nodes { id } } }")
        assert has_optional_variable(op)

    def test_is_optional_variable(self, team_issues):
        id_variable, first_variable = team_issues.variable_definitions
        assert not is_optional_variable(id_variable)
        assert is_optional_variable(first_variable)


class TestIsIdVariable:
    """Both the name and the type must match."""

    def test_id_variable(self, team, config):
        assert is_id_variable(team.variable_definitions[0], config)

    def test_nullable_id_variable(self, config):
        op = operation("query team($id: ID) { team(id: $id) { id } }")
        assert is_id_variable(op.variable_definitions[0], config)

    def test_wrong_type(self, config):
        op = operation("query team($id: String!) { team(id: $id) { id } }")
        assert not is_id_variable(op.variable_definitions[0], config)

    def test_wrong_name(self, config):
        op = operation("query team($teamId: ID!) { team(id: $teamId) { id } }")
        assert not is_id_variable(op.variable_definitions[0], config)

    def test_configured_convention(self):
        config = SdkConfig(id_name="key", id_type="Key")
        op = operation("query team($key: Key!) { team(key: $key) { id } }")
        assert is_id_variable(op.variable_definitions[0], config)

    def test_has_id_variable(self, team_issues, config):
        assert has_id_variable(team_issues, config)
        assert not has_id_variable(operation("query viewer { viewer { id } }"), config)


class TestVariableLookup:
    def test_get_variable(self, team_issues):
        assert variable_name(get_variable(team_issues, "first")) == "first"
        assert get_variable(team_issues, "after") is None

    def test_other_variables(self, team_issues):
        assert [variable_name(v) for v in other_variables(team_issues, "id")] == ["first"]
