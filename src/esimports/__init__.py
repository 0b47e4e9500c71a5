"""
esimports: merge ES module imports into JavaScript source.

Adds default, named, or namespace imports to the top of a module, merging
declarations from the same source module and keeping the block in a
deterministic order (package imports first, then relative ones).

    >>> from esimports import add_named_import
    >>> add_named_import("import { Bar } from './bar';", "./foo", "Foo")
    "import { Bar } from './bar';\\nimport { Foo } from './foo';"
"""

try:
    from importlib.metadata import version
    __version__ = version("esimports")
except Exception:
    __version__ = "0.1.0"

from .modules.core import (
    # Operations
    add_default_import,
    add_imports,
    add_named_import,
    add_namespace_import,
    sort_imports,
    # Model
    ImportDeclaration,
    Member,
    Specifier,
    SpecifierKind,
    # Config
    RenderConfig,
    load_config,
    # Errors
    DuplicateSpecifierError,
    ImportMergeError,
    InvariantViolation,
    SourceSyntaxError,
)

from . import modules

__all__ = [
    "modules",
    "add_default_import",
    "add_imports",
    "add_named_import",
    "add_namespace_import",
    "sort_imports",
    "ImportDeclaration",
    "Member",
    "Specifier",
    "SpecifierKind",
    "RenderConfig",
    "load_config",
    "DuplicateSpecifierError",
    "ImportMergeError",
    "InvariantViolation",
    "SourceSyntaxError",
]
