"""Render IR nodes to Python source text."""

import keyword

from .ir import (
    Assign,
    Await,
    Call,
    ClassDecl,
    DocBlock,
    Expr,
    FieldDecl,
    FunctionDef,
    GenericType,
    Lambda,
    Literal,
    Name,
    NamedType,
    ObjectLiteral,
    OmitType,
    OptionalType,
    Param,
    Property,
    Return,
    Spread,
    Statement,
    StringConstant,
    TypeExpr,
)

INDENT = "    "
MAX_LINE_LENGTH = 100


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def _is_plain_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


class PythonRenderer:
    """Renders IR nodes as Python source.

    Expressions and types render to a single line. Statements render to a
    list of lines at a given indentation.
    """

    def render_type(self, node: TypeExpr) -> str:
        if isinstance(node, NamedType):
            return node.name
        if isinstance(node, GenericType):
            args = ", ".join(self.render_type(a) for a in node.args)
            return f"{node.base}[{args}]" if args else node.base
        if isinstance(node, OptionalType):
            return f"Optional[{self.render_type(node.inner)}]"
        if isinstance(node, OmitType):
            return node.name
        raise TypeError(f"Cannot render type node {node!r}")

    def render_expr(self, node: Expr) -> str:
        if isinstance(node, Name):
            return node.id
        if isinstance(node, Literal):
            return repr(node.value)
        if isinstance(node, Call):
            args = ", ".join(self.render_expr(a) for a in node.args)
            return f"{self.render_expr(node.func)}({args})"
        if isinstance(node, Lambda):
            return f"lambda: {self.render_expr(node.body)}"
        if isinstance(node, Await):
            return f"await {self.render_expr(node.value)}"
        if isinstance(node, ObjectLiteral):
            return self._render_object(node)
        raise TypeError(f"Cannot render expression node {node!r}")

    def _render_entry(self, entry: Property | Spread, attributes: bool) -> str:
        if isinstance(entry, Property):
            return f'"{entry.key}": {self.render_expr(entry.value)}'
        value = self.render_expr(entry.value)
        if attributes:
            # Spreading into an attribute object copies the attributes
            value = f"vars({value})"
        if entry.optional:
            return f"**({value} or {{}})"
        return f"**{value}"

    def _keyword_entries(self, node: ObjectLiteral) -> list[str] | None:
        """Entries as keyword arguments, if every entry allows it."""
        if not all(isinstance(e, Property) and _is_plain_identifier(e.key) for e in node.entries):
            return None
        keys = [e.key for e in node.entries]
        if len(set(keys)) != len(keys):
            return None
        return [f"{e.key}={self.render_expr(e.value)}" for e in node.entries]

    def _render_object(self, node: ObjectLiteral) -> str:
        if node.constructor is None:
            return "{" + ", ".join(self._render_entry(e, False) for e in node.entries) + "}"
        keywords = self._keyword_entries(node)
        if keywords is not None:
            return f"{node.constructor}({', '.join(keywords)})"
        entries = ", ".join(self._render_entry(e, True) for e in node.entries)
        return f"{node.constructor}(**{{{entries}}})"

    def render_param(self, param: Param) -> str:
        text = param.name
        if param.type is not None:
            text += f": {self.render_type(param.type)}"
        if param.default is not None:
            text += f" = {self.render_expr(param.default)}"
        return text

    def render_params(self, params: list[Param]) -> str:
        return ", ".join(self.render_param(p) for p in params)

    def render_doc(self, doc: DocBlock, indent: str = "") -> list[str]:
        """Render a Google style docstring."""
        lines = list(doc.summary) or [""]
        if doc.args:
            lines += ["", "Args:"] + [f"{INDENT}{a}" for a in doc.args]
        if doc.returns:
            lines += ["", "Returns:", f"{INDENT}{doc.returns}"]
        if len(lines) == 1:
            return [f'{indent}"""{safe_docstring(lines[0])}"""']
        rendered = [f'{indent}"""{safe_docstring(lines[0])}']
        rendered += [f"{indent}{safe_docstring(line)}" if line else "" for line in lines[1:]]
        rendered.append(f'{indent}"""')
        return rendered

    def render_statement(self, node: Statement, indent: str = "") -> list[str]:
        if isinstance(node, FunctionDef):
            return self._render_function(node, indent)
        if isinstance(node, Return):
            return self._render_return(node, indent)
        if isinstance(node, Assign):
            return [f"{indent}{node.target} = {self.render_expr(node.value)}"]
        if isinstance(node, ClassDecl):
            return self._render_class(node, indent)
        if isinstance(node, StringConstant):
            value = node.value.replace("\\", "\\\\").replace('"', '\\"')
            lines = value.split("\n")
            lines[0] = f'{indent}{node.name} = """{lines[0]}'
            lines[-1] += '"""'
            return lines
        raise TypeError(f"Cannot render statement node {node!r}")

    def render(self, nodes: list[Statement]) -> str:
        """Render top level declarations separated by two blank lines."""
        return "\n\n\n".join("\n".join(self.render_statement(n)) for n in nodes)

    def _render_function(self, node: FunctionDef, indent: str) -> list[str]:
        prefix = "async def" if node.is_async else "def"
        returns = f" -> {self.render_type(node.returns)}" if node.returns is not None else ""
        head = f"{indent}{prefix} {node.name}({self.render_params(node.params)}){returns}:"
        if len(head) > MAX_LINE_LENGTH and node.params:
            lines = [f"{indent}{prefix} {node.name}("]
            lines += [f"{indent}{INDENT}{self.render_param(p)}," for p in node.params]
            lines.append(f"{indent}){returns}:")
        else:
            lines = [head]

        inner = indent + INDENT
        if node.doc:
            lines += self.render_doc(node.doc, inner)
        previous = None
        for statement in node.body:
            if isinstance(statement, FunctionDef) or isinstance(previous, FunctionDef):
                lines.append("")
            lines += self.render_statement(statement, inner)
            previous = statement
        if not node.doc and not node.body:
            lines.append(f"{inner}pass")
        return lines

    def _render_return(self, node: Return, indent: str) -> list[str]:
        line = f"{indent}return {self.render_expr(node.value)}"
        if len(line) <= MAX_LINE_LENGTH:
            return [line]
        value, prefix, suffix = node.value, "", ""
        # A call ending in an object literal breaks inside the literal
        if isinstance(value, Call) and value.args and isinstance(value.args[-1], ObjectLiteral):
            leading = "".join(f"{self.render_expr(a)}, " for a in value.args[:-1])
            prefix, suffix = f"{self.render_expr(value.func)}({leading}", ")"
            value = value.args[-1]
        if not isinstance(value, ObjectLiteral):
            return [line]
        # Break long object literals one entry per line
        keywords = self._keyword_entries(value) if value.constructor else None
        if keywords is not None:
            entries = keywords
            opening, closing = f"{value.constructor}(", ")"
        elif value.constructor:
            entries = [self._render_entry(e, True) for e in value.entries]
            opening, closing = f"{value.constructor}(**{{", "})"
        else:
            entries = [self._render_entry(e, False) for e in value.entries]
            opening, closing = "{", "}"
        lines = [f"{indent}return {prefix}{opening}"]
        lines += [f"{indent}{INDENT}{entry}," for entry in entries]
        lines.append(f"{indent}{closing}{suffix}")
        return lines

    def _render_field(self, class_field: FieldDecl) -> str:
        rendered = self.render_type(class_field.type)
        return rendered if class_field.required else f"NotRequired[{rendered}]"

    def _render_class(self, node: ClassDecl, indent: str) -> list[str]:
        if "TypedDict" in node.bases and not all(_is_plain_identifier(f.name) for f in node.fields):
            # Keys that are not identifiers need the functional syntax, where
            # values are evaluated, so they stay forward references
            items = ", ".join(f'"{f.name}": "{self._render_field(f)}"' for f in node.fields)
            return [f'{indent}{node.name} = TypedDict("{node.name}", {{{items}}})']
        bases = f"({', '.join(node.bases)})" if node.bases else ""
        inner = indent + INDENT
        sections: list[list[str]] = []
        if node.doc:
            sections.append(self.render_doc(node.doc, inner))
        if node.fields:
            sections.append([f"{inner}{f.name}: {self._render_field(f)}" for f in node.fields])
        sections += [self._render_function(m, inner) for m in node.methods]

        lines = [f"{indent}class {node.name}{bases}:"]
        for i, section in enumerate(sections):
            if i:
                lines.append("")
            lines += section
        if not sections:
            lines.append(f"{inner}pass")
        return lines
