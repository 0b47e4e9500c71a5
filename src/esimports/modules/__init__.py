"""esimports modules.

Modules:
- core: import declaration model, merge engine, tree-sitter bridge, rewriter
"""

# Lazy import: submodules load on first attribute access
def __getattr__(name: str):
    if name == "core":
        from . import core
        return core
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = ["core"]
