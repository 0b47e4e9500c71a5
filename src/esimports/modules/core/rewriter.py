"""Rebuild a Document with its import block merged, sorted, and on top."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from .bridge import Document, Statement
from .merge import order_declarations
from .specifiers import ImportDeclaration

logger = logging.getLogger(__name__)


def extract_imports(document: Document) -> tuple[list[ImportDeclaration], list[Statement]]:
    """Split top-level statements into import declarations and the rest.

    Both lists keep document order.
    """
    imports: list[ImportDeclaration] = []
    remaining: list[Statement] = []
    for stmt in document.statements:
        if isinstance(stmt, ImportDeclaration):
            imports.append(stmt)
        else:
            remaining.append(stmt)
    return imports, remaining


def rewrite_document(
    document: Document,
    new_declarations: Iterable[ImportDeclaration] = (),
) -> Document:
    """Return a new Document whose imports lead the body.

    Existing declarations are collected in order, the new ones appended,
    and the whole set merged and sorted in one pass. Non-import statements
    keep their relative order after the block.
    """
    existing, remaining = extract_imports(document)
    pending = [*existing, *new_declarations]
    ordered = order_declarations(pending)
    logger.debug(
        "Rewrote import block: %d existing + %d new -> %d declarations",
        len(existing),
        len(pending) - len(existing),
        len(ordered),
    )
    return replace(document, statements=(*ordered, *remaining))
