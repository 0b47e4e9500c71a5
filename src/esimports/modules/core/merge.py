"""Merging and ordering of import declarations.

Three steps, each usable on its own:

- merge_declarations: fold declarations of the same module into one
- compare_specifiers (specifiers.py): order bindings inside a declaration
- compare_declarations: order declarations across the import block

The written block lists package imports first, then relative imports, each
group ascending by module path.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import cmp_to_key

from .errors import DuplicateSpecifierError
from .specifiers import ImportDeclaration, Specifier, SpecifierKind, sort_specifiers

logger = logging.getLogger(__name__)

RELATIVE_PREFIXES = ("./", "../")


def is_external_module(module: str) -> bool:
    """True for package imports, False for project-relative paths."""
    return not module.startswith(RELATIVE_PREFIXES)


def compare_declarations(a: ImportDeclaration, b: ImportDeclaration) -> int:
    """Order two declarations in the written import block.

    External modules lead local ones regardless of spelling. Within the same
    class modules compare ordinally. Equal modules only occur for a namespace
    import kept beside a regular one; the namespace import goes first.
    """
    external_a = is_external_module(a.module)
    external_b = is_external_module(b.module)
    if external_a != external_b:
        return -1 if external_a else 1
    if a.module != b.module:
        return -1 if a.module < b.module else 1
    if a.is_namespace != b.is_namespace:
        return -1 if a.is_namespace else 1
    return 0


def sort_declarations(declarations: Iterable[ImportDeclaration]) -> list[ImportDeclaration]:
    return sorted(declarations, key=cmp_to_key(compare_declarations))


def _merge_group(module: str, declarations: Sequence[ImportDeclaration]) -> list[ImportDeclaration]:
    by_local: dict[str, Specifier] = {}
    namespaces: list[Specifier] = []
    regular: list[Specifier] = []

    for declaration in declarations:
        for spec in declaration.specifiers:
            existing = by_local.get(spec.local)
            if existing is not None:
                if existing == spec:
                    continue
                # Same binding name bound to a different export.
                raise DuplicateSpecifierError(spec.local, module)
            by_local[spec.local] = spec
            if spec.kind is SpecifierKind.NAMESPACE:
                namespaces.append(spec)
            else:
                regular.append(spec)

    merged = [ImportDeclaration(module, (spec,)) for spec in namespaces]
    # A side-effect import is absorbed by any declaration that binds names.
    if regular or not namespaces:
        merged.append(ImportDeclaration(module, tuple(sort_specifiers(regular))))

    logger.debug(
        "Merged %d declarations from '%s' into %d",
        len(declarations),
        module,
        len(merged),
    )
    return merged


def merge_declarations(declarations: Iterable[ImportDeclaration]) -> list[ImportDeclaration]:
    """Fold declarations sharing a module path into one.

    Groups keep first-seen order. A module seen once is passed through
    untouched, so its specifier order is preserved; merged groups have their
    specifiers deduplicated and sorted.
    """
    groups: dict[str, list[ImportDeclaration]] = {}
    for declaration in declarations:
        groups.setdefault(declaration.module, []).append(declaration)

    merged: list[ImportDeclaration] = []
    for module, group in groups.items():
        if len(group) == 1:
            merged.append(group[0])
        else:
            merged.extend(_merge_group(module, group))
    return merged


def order_declarations(declarations: Iterable[ImportDeclaration]) -> list[ImportDeclaration]:
    """Merge by module, then sort into the final written order."""
    return sort_declarations(merge_declarations(declarations))
