"""Import merging core: specifiers, merge engine, bridge, rewriter."""

from .api import (
    add_default_import,
    add_imports,
    add_named_import,
    add_namespace_import,
    sort_imports,
)
from .bridge import (
    Document,
    ImportSpan,
    SourceStatement,
    detect_newline,
    parse_to_structure,
    render_declaration,
    render_from_structure,
)
from .config import RenderConfig, load_config
from .errors import (
    DuplicateSpecifierError,
    ImportMergeError,
    InvariantViolation,
    ParserUnavailableError,
    SourceSyntaxError,
)
from .merge import (
    compare_declarations,
    is_external_module,
    merge_declarations,
    order_declarations,
    sort_declarations,
)
from .rewriter import extract_imports, rewrite_document
from .specifiers import (
    ImportDeclaration,
    Member,
    Specifier,
    SpecifierKind,
    compare_specifiers,
    create_default_import,
    create_named_import,
    create_namespace_import,
    normalize_members,
    sort_specifiers,
)

__all__ = [
    # Operations
    "add_default_import",
    "add_imports",
    "add_named_import",
    "add_namespace_import",
    "sort_imports",
    # Data model
    "Document",
    "ImportSpan",
    "ImportDeclaration",
    "Member",
    "SourceStatement",
    "Specifier",
    "SpecifierKind",
    # Builder
    "create_default_import",
    "create_named_import",
    "create_namespace_import",
    "normalize_members",
    # Merge engine
    "compare_declarations",
    "compare_specifiers",
    "is_external_module",
    "merge_declarations",
    "order_declarations",
    "sort_declarations",
    "sort_specifiers",
    # Rewriter / bridge
    "extract_imports",
    "rewrite_document",
    "detect_newline",
    "parse_to_structure",
    "render_declaration",
    "render_from_structure",
    # Config
    "RenderConfig",
    "load_config",
    # Errors
    "DuplicateSpecifierError",
    "ImportMergeError",
    "InvariantViolation",
    "ParserUnavailableError",
    "SourceSyntaxError",
]
