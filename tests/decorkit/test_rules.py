import functools

import pytest

from decorkit.registry import RegistryFrozenError
from decorkit.rules import (
    Binary,
    DynamicTarget,
    FixedTarget,
    RuleBook,
    StageRule,
    Unary,
    Unsupported,
    as_rule_callable,
    as_target,
)
from decorkit.rules.records import required_arity


# ----------------------------- callable shapes -----------------------------


def test_bare_callables_are_classified_by_required_positional_params():
    assert isinstance(as_rule_callable(lambda r: r), Unary)
    assert isinstance(as_rule_callable(lambda r, c: r), Binary)
    assert isinstance(as_rule_callable(lambda r, c=None: r), Unary)
    assert isinstance(as_rule_callable(lambda r, *, flag=False: r), Unary)


@pytest.mark.parametrize(
    "fn, arity",
    [
        (lambda: None, 0),
        (lambda a, b, c: None, 3),
        (lambda *args: None, None),
        (lambda r, *rest: None, None),
    ],
)
def test_other_shapes_are_unsupported(fn, arity):
    shaped = as_rule_callable(fn)
    assert isinstance(shaped, Unsupported)
    assert shaped.arity == arity


def test_explicit_shapes_pass_through_untouched():
    # A two-parameter function forced to the unary shape is called with the record only.
    forced = Unary(lambda r, c="unused": (r, c))
    assert as_rule_callable(forced) is forced
    assert forced("rec", {"ctx": 1}) == ("rec", "unused")

    binary = Binary(lambda r, c: c["k"])
    assert binary(None, {"k": 7}) == 7


def test_bound_methods_and_partials_count_remaining_parameters():
    class Checker:
        def valid(self, record):
            return bool(record)

    def within(limit, record, context):
        return len(record) <= limit

    assert isinstance(as_rule_callable(Checker().valid), Unary)
    assert isinstance(as_rule_callable(functools.partial(within, 3)), Binary)


def test_non_callable_rule_function_is_rejected():
    with pytest.raises(TypeError):
        as_rule_callable("not callable")


def test_required_arity_of_uninspectable_callable_is_none(monkeypatch):
    import inspect

    def boom(fn):
        raise ValueError("no signature")

    monkeypatch.setattr(inspect, "signature", boom)
    assert required_arity(len) is None


# ----------------------------- targets -----------------------------


def test_targets_are_tagged_at_registration(tagging):
    impl = tagging("Tag")

    assert as_target("NilDecorator") == FixedTarget("NilDecorator")
    assert as_target(impl) == FixedTarget(impl)

    dynamic = as_target(lambda r: "X")
    assert isinstance(dynamic, DynamicTarget)
    assert isinstance(dynamic.resolver, Unary)

    explicit = FixedTarget("Y")
    assert as_target(explicit) is explicit


def test_unusable_target_is_rejected():
    with pytest.raises(TypeError):
        as_target(42)


def test_stage_rule_build_shapes_condition():
    rule = StageRule.build("valid", "ValidDecorator", lambda r, c: True)
    assert rule.target == FixedTarget("ValidDecorator")
    assert isinstance(rule.condition, Binary)

    bare = StageRule.build("always", "Always")
    assert bare.condition is None


# ----------------------------- rule book -----------------------------


def test_rule_book_preserves_first_insertion_order_on_overwrite():
    book = RuleBook("demo")
    book.add_stage("a", "A")
    book.add_stage("b", "B")
    book.add_stage("c", "C")

    book.add_stage("b", "B2")

    assert book.names("stage") == ("a", "b", "c")
    assert [r.target.identifier for r in book.stages] == ["A", "B2", "C"]


def test_rule_kinds_are_independent():
    book = RuleBook()
    book.add_stage("x", "X")
    book.add_context("x", lambda r, c: 1)
    book.add_preload("x", lambda rs, c, p: 2)

    assert len(book.stages) == len(book.contexts) == len(book.preloads) == 1
    assert book.list("context")[0].compute(None, {}) == 1
    assert book.list("preload")[0].compute([], {}, {}) == 2


def test_unknown_kind_and_bad_names_raise():
    book = RuleBook()
    with pytest.raises(ValueError):
        book.list("teardown")
    with pytest.raises(ValueError):
        book.add_stage("", "X")
    with pytest.raises(ValueError):
        book.add_context("  ", lambda r, c: None)
    with pytest.raises(TypeError):
        book.add_preload("p", None)
    with pytest.raises(TypeError):
        book.register("stage", "s", object())


def test_frozen_rule_book_rejects_registration():
    book = RuleBook("frozen")
    book.add_stage("a", "A")
    book.freeze()

    with pytest.raises(RegistryFrozenError):
        book.add_stage("b", "B")
    with pytest.raises(RuntimeError):
        book.add_context("c", lambda r, c: None)
    assert book.names("stage") == ("a",)


def test_copy_is_independent_and_unfrozen():
    parent = RuleBook("parent")
    parent.add_stage("a", "A")
    parent.freeze()

    child = parent.copy(owner="child")
    child.add_stage("b", "B")

    assert child.owner == "child"
    assert not child.frozen
    assert child.names("stage") == ("a", "b")
    assert parent.names("stage") == ("a",)
