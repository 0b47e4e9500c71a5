import pytest

from esimports.modules.core.errors import DuplicateSpecifierError, InvariantViolation
from esimports.modules.core.merge import (
    compare_declarations,
    is_external_module,
    merge_declarations,
    order_declarations,
    sort_declarations,
)
from esimports.modules.core.specifiers import ImportDeclaration, Specifier


def named(module: str, *names: str) -> ImportDeclaration:
    return ImportDeclaration(module, tuple(Specifier.named(n) for n in names))


def default(module: str, name: str) -> ImportDeclaration:
    return ImportDeclaration(module, (Specifier.default(name),))


def namespace(module: str, alias: str) -> ImportDeclaration:
    return ImportDeclaration(module, (Specifier.namespace(alias),))


def modules(declarations) -> list[str]:
    return [decl.module for decl in declarations]


@pytest.mark.parametrize(
    "module,expected",
    [
        ("react", True),
        ("@scope/pkg", True),
        ("./foo", False),
        ("../foo", False),
    ],
)
def test_is_external_module(module: str, expected: bool) -> None:
    assert is_external_module(module) is expected


def test_external_sorts_before_local_regardless_of_spelling() -> None:
    assert compare_declarations(named("zzz", "Z"), named("./aaa", "A")) == -1
    assert compare_declarations(named("./aaa", "A"), named("zzz", "Z")) == 1


def test_local_modules_ascending() -> None:
    assert compare_declarations(named("./bar", "Bar"), named("./foo", "Foo")) == -1
    assert compare_declarations(named("./foo", "Foo"), named("./bar", "Bar")) == 1


def test_parent_relative_sorts_before_sibling_relative() -> None:
    ordered = sort_declarations([named("./b", "B"), named("../a", "A")])

    assert modules(ordered) == ["../a", "./b"]


def test_sort_declarations_full_block() -> None:
    ordered = sort_declarations(
        [
            namespace("./foo", "Foo"),
            default("global", "Global"),
            namespace("./bar", "Bar"),
            named("lodash", "map"),
        ]
    )

    assert modules(ordered) == ["global", "lodash", "./bar", "./foo"]


def test_merge_same_module_unions_and_sorts() -> None:
    merged = merge_declarations([named("./foo", "Foo", "Bar"), named("./foo", "Baz")])

    assert len(merged) == 1
    assert merged[0].local_names == ["Bar", "Baz", "Foo"]


def test_merge_drops_identical_specifiers() -> None:
    merged = merge_declarations([named("./foo", "Foo"), named("./foo", "Foo", "Bar")])

    assert merged[0].local_names == ["Bar", "Foo"]


def test_merge_default_leads_named() -> None:
    merged = merge_declarations([default("react", "React"), named("react", "Component")])

    (decl,) = merged
    assert decl.specifiers == (Specifier.default("React"), Specifier.named("Component"))


def test_single_declaration_keeps_specifier_order() -> None:
    existing = named("./foo", "Foo", "Bar")

    merged = merge_declarations([existing, named("./baz", "Baz")])

    assert merged[0] is existing
    assert merged[0].local_names == ["Foo", "Bar"]


def test_merge_keeps_first_seen_group_order() -> None:
    merged = merge_declarations(
        [named("./b", "B"), named("./a", "A"), named("./b", "C")]
    )

    assert modules(merged) == ["./b", "./a"]


def test_merge_never_mutates_inputs() -> None:
    first = named("./foo", "Foo")
    second = named("./foo", "Bar")

    merge_declarations([first, second])

    assert first.local_names == ["Foo"]
    assert second.local_names == ["Bar"]


def test_same_local_name_with_different_source_rejected() -> None:
    with pytest.raises(DuplicateSpecifierError):
        merge_declarations([default("./foo", "Foo"), named("./foo", "Foo")])


def test_same_alias_for_different_exports_rejected() -> None:
    aliased = ImportDeclaration("./foo", (Specifier.named("Bar", "Foo"),))

    with pytest.raises(DuplicateSpecifierError):
        merge_declarations([named("./foo", "Foo"), aliased])


def test_two_default_names_for_one_module_is_invariant_violation() -> None:
    with pytest.raises(InvariantViolation):
        merge_declarations([default("react", "React"), default("react", "R")])


def test_namespace_stays_beside_named_import() -> None:
    ordered = order_declarations([named("./foo", "Bar"), namespace("./foo", "Foo")])

    assert len(ordered) == 2
    assert ordered[0].is_namespace
    assert ordered[1].local_names == ["Bar"]


def test_identical_namespace_imports_collapse() -> None:
    merged = merge_declarations([namespace("./foo", "Foo"), namespace("./foo", "Foo")])

    assert merged == [namespace("./foo", "Foo")]


def test_side_effect_import_absorbed_by_named_import() -> None:
    merged = merge_declarations([ImportDeclaration("./styles.css"), named("./styles.css", "css")])

    assert merged == [named("./styles.css", "css")]


def test_repeated_side_effect_imports_collapse() -> None:
    merged = merge_declarations([ImportDeclaration("polyfill"), ImportDeclaration("polyfill")])

    assert merged == [ImportDeclaration("polyfill")]


def test_order_declarations_is_stable_on_sorted_input() -> None:
    block = [default("global", "Global"), named("./bar", "Bar"), named("./foo", "Foo")]

    assert order_declarations(block) == block
    assert order_declarations(order_declarations(block)) == block
