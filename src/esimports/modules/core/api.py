"""
Public entry points: add imports to ES module source text.

All functions are pure: they take source text and return new source text.
Failures raise before anything is returned; the input string is never
touched.

    >>> add_named_import("", "./foo", "Foo")
    "import { Foo } from './foo';"
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .bridge import parse_to_structure, render_from_structure
from .config import RenderConfig
from .rewriter import rewrite_document
from .specifiers import (
    ImportDeclaration,
    Member,
    create_default_import,
    create_named_import,
    create_namespace_import,
)

logger = logging.getLogger(__name__)


def add_imports(
    source_text: str,
    declarations: Iterable[ImportDeclaration],
    config: RenderConfig | None = None,
) -> str:
    """Fold any number of declarations into the source's import block."""
    declarations = list(declarations)
    document = parse_to_structure(source_text)
    rewritten = rewrite_document(document, declarations)
    return render_from_structure(rewritten, source_text, config=config)


def sort_imports(source_text: str, config: RenderConfig | None = None) -> str:
    """Merge and order the existing imports without adding any."""
    return add_imports(source_text, (), config=config)


def add_named_import(
    source_text: str,
    module: str,
    *members: str | Member | Mapping | tuple,
    config: RenderConfig | None = None,
) -> str:
    """Add `import { ...members } from 'module'`.

    Each member is a name, a `(name, alias)` pair, a `{"name", "alias"}`
    mapping, or a Member.
    """
    declaration = create_named_import(module, members)
    logger.debug("Adding named import from '%s': %s", module, declaration.local_names)
    return add_imports(source_text, [declaration], config=config)


def add_default_import(
    source_text: str,
    module: str,
    name: str,
    config: RenderConfig | None = None,
) -> str:
    """Add `import name from 'module'`."""
    declaration = create_default_import(module, name)
    logger.debug("Adding default import '%s' from '%s'", name, module)
    return add_imports(source_text, [declaration], config=config)


def add_namespace_import(
    source_text: str,
    module: str,
    alias: str,
    config: RenderConfig | None = None,
) -> str:
    """Add `import * as alias from 'module'`."""
    declaration = create_namespace_import(module, alias)
    logger.debug("Adding namespace import '%s' from '%s'", alias, module)
    return add_imports(source_text, [declaration], config=config)
