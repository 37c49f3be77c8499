"""Tests for argument list building."""

from gql_sdkgen.core.args import ArgDefinition, get_arg_doc, get_arg_list, get_arg_param
from gql_sdkgen.core.ir import Literal, Name, NamedType, OptionalType


def arg(name, type_name="str", **kwargs):
    return ArgDefinition(name=name, type=NamedType(type_name), **kwargs)


class TestGetArgList:
    """Tests for get_arg_list."""

    def test_required_before_optional(self):
        args = get_arg_list([
            arg("options", "RequestOptions", optional=True),
            arg("id"),
            arg("wrapper", "Wrapper", default=Name("default_wrapper")),
        ])
        assert args.names == ["id", "options", "wrapper"]
        assert args.print == "id: str, options: Optional[RequestOptions] = None, wrapper: Wrapper = default_wrapper"

    def test_missing_definitions_dropped(self):
        args = get_arg_list([None, arg("id"), None])
        assert args.names == ["id"]

    def test_empty(self):
        args = get_arg_list([])
        assert args.names == []
        assert args.print == ""
        assert args.docs == []

    def test_relative_order_kept(self):
        args = get_arg_list([
            arg("a", optional=True),
            arg("b"),
            arg("c", optional=True),
            arg("d"),
        ])
        assert args.names == ["b", "d", "a", "c"]

    def test_duplicate_keeps_later_definition(self):
        args = get_arg_list([arg("id", "int"), arg("first"), arg("id", "str")])
        assert args.names == ["id", "first"]
        assert args.args[0].type == NamedType("str")

    def test_idempotent(self):
        first = get_arg_list([arg("options", optional=True), arg("id"), arg("id", "int")])
        second = get_arg_list(first.args)
        assert second.names == first.names
        assert second.print == first.print

    def test_docs(self):
        args = get_arg_list([arg("id", description="id to scope by"), arg("extra")])
        assert args.docs == ["id: id to scope by", "extra"]

    def test_doc_block(self):
        args = get_arg_list([arg("id", description="the id")])
        doc = args.doc_block(["Fetch a team"], returns="The team")
        assert doc.summary == ["Fetch a team"]
        assert doc.args == ["id: the id"]
        assert doc.returns == "The team"


class TestArgParam:
    def test_required(self):
        param = get_arg_param(arg("id"))
        assert param.type == NamedType("str")
        assert param.default is None

    def test_optional_defaults_to_none(self):
        param = get_arg_param(arg("options", optional=True))
        assert param.type == OptionalType(NamedType("str"))
        assert param.default == Literal(None)

    def test_default_value(self):
        param = get_arg_param(arg("wrapper", "Wrapper", default=Name("default_wrapper")))
        assert param.type == NamedType("Wrapper")
        assert param.default == Name("default_wrapper")

    def test_arg_doc_without_description(self):
        assert get_arg_doc(arg("id")) == "id"
