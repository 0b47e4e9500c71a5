"""ES module source <-> Document conversion via tree-sitter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator, Union

from .config import DEFAULT_CONFIG, RenderConfig
from .errors import DuplicateSpecifierError, ParserUnavailableError, SourceSyntaxError
from .specifiers import ImportDeclaration, Specifier, SpecifierKind

logger = logging.getLogger(__name__)

_HEADER_NODES = {"comment", "hash_bang_line"}


@dataclass(frozen=True)
class SourceStatement:
    """A top-level node kept verbatim (code, comment, attributed import)."""

    node_type: str
    text: str
    start_byte: int
    end_byte: int
    index: int  # position among the program's top-level nodes


@dataclass(frozen=True)
class ImportSpan:
    """Where an import statement sat in the parsed source."""

    index: int
    start_byte: int
    end_byte: int


Statement = Union[ImportDeclaration, SourceStatement]


@dataclass(frozen=True)
class Document:
    """Top-level statements of one module, header comments split off.

    `import_spans` records the original import statements in source order so
    the renderer can keep the whitespace around an import block that did not
    move. `newline` is the line ending the source mostly uses.
    """

    statements: tuple[Statement, ...] = ()
    header: tuple[SourceStatement, ...] = ()
    trailing_newline: bool = False
    import_spans: tuple[ImportSpan, ...] = ()
    newline: str = "\n"

    @property
    def imports(self) -> list[ImportDeclaration]:
        return [stmt for stmt in self.statements if isinstance(stmt, ImportDeclaration)]


@lru_cache(maxsize=None)
def _javascript_language() -> Any:
    try:
        from tree_sitter import Language
        import tree_sitter_javascript
    except ImportError as exc:
        raise ParserUnavailableError(
            f"tree-sitter JavaScript grammar is not available: {exc}"
        ) from exc
    return Language(tree_sitter_javascript.language())


def _get_parser() -> Any:
    # One parser per call; Language is immutable and shared.
    language = _javascript_language()
    from tree_sitter import Parser

    return Parser(language)


def _node_text(node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _string_value(node, source: bytes) -> str:
    text = _node_text(node, source)
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return text[1:-1]
    return text


def _first_error(node) -> Any | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _syntax_error(node, source: bytes, message: str) -> SourceSyntaxError:
    row, column = node.start_point
    lines = source.split(b"\n")
    line_text = ""
    if 0 <= row < len(lines):
        line_text = lines[row].rstrip(b"\r").decode("utf-8", errors="replace")
    return SourceSyntaxError(message, ("<source>", row + 1, column + 1, line_text))


def _raise_syntax_error(root, source: bytes) -> None:
    bad = _first_error(root) or root
    if bad.is_missing:
        message = f"Missing '{bad.type}'"
    else:
        message = "Unexpected token"
    raise _syntax_error(bad, source, message)


def _clause_specifiers(clause, source: bytes) -> Iterator[Specifier]:
    for child in clause.named_children:
        if child.type == "identifier":
            yield Specifier.default(_node_text(child, source))
        elif child.type == "namespace_import":
            for ident in child.named_children:
                if ident.type == "identifier":
                    yield Specifier.namespace(_node_text(ident, source))
        elif child.type == "named_imports":
            for spec in child.named_children:
                if spec.type != "import_specifier":
                    continue
                name = spec.child_by_field_name("name")
                alias = spec.child_by_field_name("alias")
                yield Specifier.named(
                    _node_text(name, source),
                    _node_text(alias, source) if alias is not None else None,
                )


def _extract_declarations(node, source: bytes) -> list[ImportDeclaration]:
    module = _string_value(node.child_by_field_name("source"), source)
    specifiers: list[Specifier] = []
    for child in node.named_children:
        if child.type == "import_clause":
            specifiers.extend(_clause_specifiers(child, source))

    # `import A, * as B from 'x'` becomes two declarations.
    namespaces = [s for s in specifiers if s.kind is SpecifierKind.NAMESPACE]
    others = [s for s in specifiers if s.kind is not SpecifierKind.NAMESPACE]
    try:
        if namespaces and others:
            return [ImportDeclaration(module, tuple(others))] + [
                ImportDeclaration(module, (ns,)) for ns in namespaces
            ]
        return [ImportDeclaration(module, tuple(specifiers))]
    except DuplicateSpecifierError as exc:
        # The grammar accepts `import { a, a }`; the language does not.
        raise _syntax_error(node, source, f"Duplicate import binding '{exc.local}'") from exc


def _is_plain_import(node) -> bool:
    if node.type != "import_statement":
        return False
    return not any(child.type == "import_attribute" for child in node.named_children)


def parse_to_structure(source_text: str) -> Document:
    """Parse module source into a Document.

    Raises SourceSyntaxError when the text is not a valid ES module; no
    recovery is attempted.
    """
    source = source_text.encode("utf-8")
    tree = _get_parser().parse(source)
    root = tree.root_node
    if root.has_error:
        _raise_syntax_error(root, source)

    header: list[SourceStatement] = []
    statements: list[Statement] = []
    spans: list[ImportSpan] = []
    in_header = True
    for index, node in enumerate(root.children):
        if _is_plain_import(node):
            in_header = False
            statements.extend(_extract_declarations(node, source))
            spans.append(ImportSpan(index, node.start_byte, node.end_byte))
            continue

        stmt = SourceStatement(
            node_type=node.type,
            text=_node_text(node, source),
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            index=index,
        )
        if in_header and node.type in _HEADER_NODES:
            header.append(stmt)
        else:
            in_header = False
            statements.append(stmt)

    logger.debug(
        "Parsed %d top-level statements (%d imports, %d header nodes)",
        len(statements),
        sum(isinstance(s, ImportDeclaration) for s in statements),
        len(header),
    )
    return Document(
        statements=tuple(statements),
        header=tuple(header),
        trailing_newline=source_text.endswith("\n"),
        import_spans=tuple(spans),
        newline=detect_newline(source_text),
    )


def detect_newline(text: str) -> str:
    """Return "\\r\\n" when most line breaks in `text` are CRLF, else "\\n"."""
    crlf = text.count("\r\n")
    return "\r\n" if 2 * crlf > text.count("\n") else "\n"


def _quote(value: str, quote: str) -> str:
    out: list[str] = []
    escaped = False
    for ch in value:
        if escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            out.append(ch)
            escaped = True
        elif ch == quote:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return f"{quote}{''.join(out)}{quote}"


def _render_specifier(spec: Specifier) -> str:
    if spec.kind is SpecifierKind.NAMESPACE:
        return f"* as {spec.local}"
    if spec.is_aliased:
        return f"{spec.imported} as {spec.local}"
    return spec.local


def render_declaration(declaration: ImportDeclaration, config: RenderConfig = DEFAULT_CONFIG) -> str:
    """Print one declaration, e.g. `import D, { A, B as C } from 'mod';`."""
    source = _quote(declaration.module, config.quote)
    end = ";" if config.semicolons else ""
    if declaration.is_side_effect:
        return f"import {source}{end}"

    parts: list[str] = []
    named: list[str] = []
    for spec in declaration.specifiers:
        if spec.kind is SpecifierKind.DEFAULT:
            parts.insert(0, spec.local)
        elif spec.kind is SpecifierKind.NAMESPACE:
            parts.append(_render_specifier(spec))
        else:
            named.append(_render_specifier(spec))
    if named:
        parts.append("{ " + ", ".join(named) + " }")
    return f"import {', '.join(parts)} from {source}{end}"


def _gap(source: bytes, start: int, end: int) -> str:
    return source[start:end].decode("utf-8", errors="replace")


def _separator(prev: Statement, current: Statement, document: Document, source: bytes) -> str:
    newline = document.newline
    spans = document.import_spans
    if isinstance(current, ImportDeclaration):
        if isinstance(prev, SourceStatement) and spans and spans[0].index == prev.index + 1:
            return _gap(source, prev.end_byte, spans[0].start_byte)
        return newline
    if isinstance(prev, ImportDeclaration):
        if spans and current.index == spans[-1].index + 1:
            return _gap(source, spans[-1].end_byte, current.start_byte)
        return newline * 2
    if current.index == prev.index + 1:
        return _gap(source, prev.end_byte, current.start_byte)
    return newline


def render_from_structure(
    document: Document,
    original_source_text: str,
    config: RenderConfig | None = None,
) -> str:
    """Render a Document back to source text.

    Imports are printed canonically; every other node is copied from the
    original text. Nodes that were neighbours in the original keep the
    whitespace between them, and so do the edges of an import block that
    stayed in place. Inserted line breaks use the document's line ending.
    """
    cfg = config or DEFAULT_CONFIG
    source = original_source_text.encode("utf-8")

    pieces: list[str] = []
    prev: Statement | None = None
    for stmt in (*document.header, *document.statements):
        if prev is not None:
            pieces.append(_separator(prev, stmt, document, source))
        if isinstance(stmt, ImportDeclaration):
            pieces.append(render_declaration(stmt, cfg))
        else:
            pieces.append(stmt.text)
        prev = stmt

    out = "".join(pieces)
    if out and document.trailing_newline:
        out += document.newline
    return out
