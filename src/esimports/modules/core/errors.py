"""
esimports error taxonomy and structured error codes.

Error codes that callers can programmatically handle:
- ESIMPORTS_ERR_DUPLICATE: Two specifiers bind the same local name
- ESIMPORTS_ERR_INVARIANT: Declaration shape not allowed by the import grammar
- ESIMPORTS_ERR_PARSE: Source text is not a valid ES module
- ESIMPORTS_ERR_NOT_FOUND: Input file not found
- ESIMPORTS_ERR_PARSER: tree-sitter grammar could not be loaded
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


# Error codes
ERR_DUPLICATE = "ESIMPORTS_ERR_DUPLICATE"
ERR_INVARIANT = "ESIMPORTS_ERR_INVARIANT"
ERR_PARSE = "ESIMPORTS_ERR_PARSE"
ERR_NOT_FOUND = "ESIMPORTS_ERR_NOT_FOUND"
ERR_PARSER = "ESIMPORTS_ERR_PARSER"
ERR_INVALID = "ESIMPORTS_ERR_INVALID"
ERR_INTERNAL = "ESIMPORTS_ERR_INTERNAL"


class ImportMergeError(Exception):
    """Base class for failures while building or merging declarations."""

    code = ERR_INTERNAL


class DuplicateSpecifierError(ImportMergeError):
    """Two specifiers resolve to the same local binding name."""

    code = ERR_DUPLICATE

    def __init__(self, local: str, module: str | None = None):
        self.local = local
        self.module = module
        where = f" from '{module}'" if module else ""
        super().__init__(
            f"Cannot import two members named '{local}'{where}. "
            "Use an alias for either of the members."
        )


class InvariantViolation(ImportMergeError):
    """A declaration mixes specifier kinds the import grammar forbids."""

    code = ERR_INVARIANT


class SourceSyntaxError(SyntaxError):
    """Source text could not be parsed as an ES module."""

    code = ERR_PARSE


class ParserUnavailableError(RuntimeError):
    """The tree-sitter JavaScript grammar is not importable."""

    code = ERR_PARSER


@dataclass
class ESImportsError:
    """Structured error response for machine parsing."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


def make_error(code: str, message: str, **details) -> dict:
    """Create a structured error response dict."""
    return ESImportsError(code=code, message=message, details=details).to_dict()


def error_from_exception(exc: BaseException) -> dict:
    """Map a raised exception onto its structured error dict."""
    if isinstance(exc, DuplicateSpecifierError):
        return make_error(exc.code, str(exc), local=exc.local, module=exc.module)
    if isinstance(exc, SourceSyntaxError):
        return make_error(
            exc.code,
            f"Failed to parse source: {exc.msg}",
            line=exc.lineno,
            column=exc.offset,
        )
    if isinstance(exc, FileNotFoundError):
        return make_error(ERR_NOT_FOUND, str(exc), file=exc.filename)
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        return make_error(code, str(exc))
    if isinstance(exc, ValueError):
        return make_error(ERR_INVALID, str(exc))
    logger.debug("Unclassified error %s: %s", type(exc).__name__, exc)
    return make_error(ERR_INTERNAL, str(exc))
