from esimports.modules.core.bridge import (
    Document,
    SourceStatement,
    render_declaration,
    render_from_structure,
)
from esimports.modules.core.config import RenderConfig
from esimports.modules.core.specifiers import ImportDeclaration, Specifier


def test_render_named() -> None:
    decl = ImportDeclaration("./foo", (Specifier.named("Bar"), Specifier.named("Foo")))

    assert render_declaration(decl) == "import { Bar, Foo } from './foo';"


def test_render_alias() -> None:
    decl = ImportDeclaration("./foo", (Specifier.named("Foo", "Bar"),))

    assert render_declaration(decl) == "import { Foo as Bar } from './foo';"


def test_render_default_with_named() -> None:
    decl = ImportDeclaration("react", (Specifier.default("React"), Specifier.named("Component")))

    assert render_declaration(decl) == "import React, { Component } from 'react';"


def test_render_default_is_printed_first_even_if_stored_later() -> None:
    decl = ImportDeclaration("react", (Specifier.named("Component"), Specifier.default("React")))

    assert render_declaration(decl) == "import React, { Component } from 'react';"


def test_render_namespace() -> None:
    decl = ImportDeclaration("./bar", (Specifier.namespace("Bar"),))

    assert render_declaration(decl) == "import * as Bar from './bar';"


def test_render_side_effect() -> None:
    assert render_declaration(ImportDeclaration("./styles.css")) == "import './styles.css';"


def test_render_double_quotes_without_semicolons() -> None:
    config = RenderConfig(quote='"', semicolons=False)
    decl = ImportDeclaration("./foo", (Specifier.default("Foo"),))

    assert render_declaration(decl, config) == 'import Foo from "./foo"'


def test_render_escapes_quote_in_module_path() -> None:
    decl = ImportDeclaration("./it's", (Specifier.default("Foo"),))

    assert render_declaration(decl) == "import Foo from './it\\'s';"


def test_render_keeps_existing_escapes() -> None:
    decl = ImportDeclaration("./it\\'s", (Specifier.default("Foo"),))

    assert render_declaration(decl) == "import Foo from './it\\'s';"


def test_render_empty_document() -> None:
    assert render_from_structure(Document(trailing_newline=True), "\n") == ""


def test_render_block_then_code_with_original_gaps() -> None:
    original = "a();\n\n\nb();\n"
    a = SourceStatement("expression_statement", "a();", 0, 4, 0)
    b = SourceStatement("expression_statement", "b();", 7, 11, 1)
    decl = ImportDeclaration("./foo", (Specifier.named("Foo"),))
    document = Document(statements=(decl, a, b), trailing_newline=True)

    out = render_from_structure(document, original)

    assert out == "import { Foo } from './foo';\n\na();\n\n\nb();\n"
