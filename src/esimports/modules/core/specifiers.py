"""Import specifier records and declaration construction."""
from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cmp_to_key

from .errors import DuplicateSpecifierError, InvariantViolation

_IDENTIFIER_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*")


class SpecifierKind(enum.Enum):
    DEFAULT = "default"  # import Foo from 'mod'
    NAMESPACE = "namespace"  # import * as Foo from 'mod'
    NAMED = "named"  # import { Foo } from 'mod'


@dataclass(frozen=True)
class Specifier:
    """One binding introduced by an import declaration."""

    kind: SpecifierKind
    local: str
    imported: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SpecifierKind.NAMED:
            if self.imported is None:
                object.__setattr__(self, "imported", self.local)
        elif self.imported is not None:
            raise InvariantViolation(
                f"{self.kind.value} specifier '{self.local}' cannot carry an imported name"
            )

    @classmethod
    def named(cls, name: str, alias: str | None = None) -> "Specifier":
        return cls(SpecifierKind.NAMED, alias or name, name)

    @classmethod
    def default(cls, name: str) -> "Specifier":
        return cls(SpecifierKind.DEFAULT, name)

    @classmethod
    def namespace(cls, alias: str) -> "Specifier":
        return cls(SpecifierKind.NAMESPACE, alias)

    @property
    def is_aliased(self) -> bool:
        return self.kind is SpecifierKind.NAMED and self.imported != self.local


@dataclass(frozen=True)
class ImportDeclaration:
    """A single `import ... from 'module'` statement.

    Validated on construction: local names are unique, at most one default,
    and a namespace specifier is never combined with anything else.
    """

    module: str
    specifiers: tuple[Specifier, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "specifiers", tuple(self.specifiers))
        seen: set[str] = set()
        for spec in self.specifiers:
            if spec.local in seen:
                raise DuplicateSpecifierError(spec.local, self.module)
            seen.add(spec.local)

        kinds = [spec.kind for spec in self.specifiers]
        if kinds.count(SpecifierKind.DEFAULT) > 1:
            raise InvariantViolation(
                f"Declaration for '{self.module}' has more than one default specifier"
            )
        if SpecifierKind.NAMESPACE in kinds and len(kinds) > 1:
            raise InvariantViolation(
                f"Namespace import from '{self.module}' cannot be combined with other specifiers"
            )

    @property
    def is_side_effect(self) -> bool:
        return not self.specifiers

    @property
    def is_namespace(self) -> bool:
        return any(spec.kind is SpecifierKind.NAMESPACE for spec in self.specifiers)

    @property
    def local_names(self) -> list[str]:
        return [spec.local for spec in self.specifiers]


@dataclass(frozen=True)
class Member:
    """A requested named import, optionally bound under an alias."""

    name: str
    alias: str | None = None

    @property
    def local(self) -> str:
        return self.alias or self.name


_KIND_RANK = {
    SpecifierKind.DEFAULT: 0,
    SpecifierKind.NAMESPACE: 1,
    SpecifierKind.NAMED: 2,
}


def compare_specifiers(a: Specifier, b: Specifier) -> int:
    """Order specifiers inside one declaration.

    Default leads, named follow; within the same kind local names compare
    ordinally.
    """
    rank_a = _KIND_RANK[a.kind]
    rank_b = _KIND_RANK[b.kind]
    if rank_a != rank_b:
        return -1 if rank_a < rank_b else 1
    if a.local == b.local:
        return 0
    return -1 if a.local < b.local else 1


def sort_specifiers(specifiers: Iterable[Specifier]) -> list[Specifier]:
    return sorted(specifiers, key=cmp_to_key(compare_specifiers))


def _check_name(value: str, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} must be a non-empty string, got {value!r}")
    if not _IDENTIFIER_RE.fullmatch(value):
        raise ValueError(f"{what} {value!r} is not a valid identifier")
    return value


def _check_module(module: str) -> str:
    if not isinstance(module, str) or not module:
        raise ValueError(f"Module specifier must be a non-empty string, got {module!r}")
    return module


def normalize_member(member: str | Member | Mapping | tuple) -> Member:
    """Accept the supported member spellings and return a Member.

    A plain string imports the name as itself; a `(name, alias)` pair or a
    mapping with `name`/`alias` keys binds it under the alias.
    """
    if isinstance(member, Member):
        name, alias = member.name, member.alias
    elif isinstance(member, str):
        name, alias = member, None
    elif isinstance(member, Mapping):
        if "name" not in member:
            raise ValueError(f"Member mapping needs a 'name' key: {dict(member)!r}")
        name, alias = member["name"], member.get("alias")
    elif isinstance(member, tuple) and len(member) == 2:
        name, alias = member
    else:
        raise ValueError(f"Unsupported member specification: {member!r}")

    _check_name(name, "Member name")
    if alias is not None:
        _check_name(alias, "Member alias")
    return Member(name=name, alias=alias)


def normalize_members(members: Iterable[str | Member | Mapping | tuple]) -> list[Member]:
    return [normalize_member(member) for member in members]


def create_named_import(module: str, members: Iterable) -> ImportDeclaration:
    """Build `import { A, B as C } from 'module'` from requested members.

    Raises DuplicateSpecifierError when two members resolve to the same
    local name.
    """
    _check_module(module)
    normalized = normalize_members(members)
    if not normalized:
        raise ValueError("A named import needs at least one member")

    seen: set[str] = set()
    for member in normalized:
        if member.local in seen:
            raise DuplicateSpecifierError(member.local, module)
        seen.add(member.local)

    specifiers = sort_specifiers(Specifier.named(m.name, m.alias) for m in normalized)
    return ImportDeclaration(module, tuple(specifiers))


def create_default_import(module: str, name: str) -> ImportDeclaration:
    """Build `import name from 'module'`."""
    _check_module(module)
    _check_name(name, "Default member")
    return ImportDeclaration(module, (Specifier.default(name),))


def create_namespace_import(module: str, alias: str) -> ImportDeclaration:
    """Build `import * as alias from 'module'`."""
    _check_module(module)
    _check_name(alias, "Namespace alias")
    return ImportDeclaration(module, (Specifier.namespace(alias),))
