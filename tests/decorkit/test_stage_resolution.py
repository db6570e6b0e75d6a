import types

import pytest

from decorkit.resolve import resolve_stage
from decorkit.rules import StageRule, Unary


def _nil_or_default(record):
    return "NilDecorator" if record is None else "DefaultDecorator"


def test_fixed_target_without_condition_always_applies():
    result = resolve_stage(StageRule.build("default", "DefaultDecorator"), object(), {})

    assert result.applies
    assert result.branch == "fixed"
    assert result.value == "DefaultDecorator"


def test_condition_gates_fixed_target():
    rule = StageRule.build("valid", "ValidDecorator", lambda r: r.valid)

    ok = resolve_stage(rule, types.SimpleNamespace(valid=True), {})
    ko = resolve_stage(rule, types.SimpleNamespace(valid=False), {})

    assert (ok.branch, ok.value) == ("condition", "ValidDecorator")
    assert (ko.branch, ko.value) == ("condition-failed", None)
    assert not ko.applies


def test_two_argument_condition_receives_context():
    rule = StageRule.build("admin", "AdminDecorator", lambda r, ctx: ctx.get("admin"))

    assert resolve_stage(rule, "rec", {"admin": True}).applies
    assert not resolve_stage(rule, "rec", {}).applies


def test_condition_of_unsupported_arity_skips_without_calling():
    calls = []

    def three(a, b, c):
        calls.append(a)
        return True

    result = resolve_stage(StageRule.build("odd", "X", three), "rec", {})

    assert result.branch == "condition-arity"
    assert result.value is None
    assert calls == []


def test_dynamic_target_selects_decorator_name():
    rule = StageRule.build("default", _nil_or_default)

    assert resolve_stage(rule, None, {}).value == "NilDecorator"
    assert resolve_stage(rule, {"id": 1}, {}).value == "DefaultDecorator"
    assert resolve_stage(rule, None, {}).branch == "dynamic"


def test_dynamic_target_with_context():
    rule = StageRule.build("in_ctx", lambda r, ctx: ctx.get(r))

    assert resolve_stage(rule, "user", {"user": "UserDecorator"}).value == "UserDecorator"
    assert resolve_stage(rule, "user", {}).branch == "dynamic-empty"


@pytest.mark.parametrize("returned", [None, False, "", 0])
def test_falsy_dynamic_result_skips(returned):
    result = resolve_stage(StageRule.build("maybe", lambda r: returned), "rec", {})

    assert result.branch == "dynamic-empty"
    assert not result.applies


def test_dynamic_target_of_unsupported_arity_skips():
    result = resolve_stage(StageRule.build("none", lambda: "Never"), "rec", {})

    assert result.branch == "dynamic-arity"
    assert result.value is None


def test_explicit_unary_dynamic_target():
    rule = StageRule.build("forced", Unary(lambda r, ctx=None: f"{r}Decorator"))

    assert resolve_stage(rule, "Nil", {"ignored": True}).value == "NilDecorator"


def test_errors_from_rule_functions_propagate():
    def broken(record):
        raise KeyError("missing")

    with pytest.raises(KeyError):
        resolve_stage(StageRule.build("broken", "X", broken), "rec", {})


def test_result_context_for_tracing():
    result = resolve_stage(StageRule.build("default", _nil_or_default), None, {})
    ctx = result.context("decorkit.stage")

    assert ctx["decorkit.stage.stage"] == "default"
    assert ctx["decorkit.stage.branch"] == "dynamic"
    assert ctx["decorkit.stage.decorator"] == "NilDecorator"
