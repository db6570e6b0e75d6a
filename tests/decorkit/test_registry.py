import asyncio

import pytest

from decorkit import BaseDecorator, DecoratorRegistration, FunctionDecorator, SupportsDecorate, decorator
from decorkit.registry import (
    DecoratorLookup,
    DecoratorLookupError,
    DecoratorRegistry,
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryFrozenError,
    RegistryLookupError,
    coerce_identifier,
    decorators,
)


class Shout(BaseDecorator):
    @classmethod
    def decorate(cls, value, context, preloaded):
        return value.upper()


class Whisper(BaseDecorator):
    decorator_name = "quiet"

    @classmethod
    def decorate(cls, value, context, preloaded):
        return value.lower()


def test_coerce_identifier():
    assert coerce_identifier("  Shout ") == "Shout"
    assert coerce_identifier(Shout) == "Shout"
    assert coerce_identifier(Whisper) == "quiet"
    with pytest.raises(ValueError):
        coerce_identifier("   ")
    with pytest.raises(TypeError):
        coerce_identifier(3)


def test_register_and_get():
    reg = DecoratorRegistry(label="demo")
    reg.register(Shout)
    reg.register(Whisper)

    assert reg.get("Shout") is Shout
    assert reg.get(" quiet") is Whisper
    assert "quiet" in reg
    assert "Whisper" not in reg
    assert reg.keys() == ("Shout", "quiet")
    assert reg.keys(as_csv=True) == "Shout,quiet"
    assert reg.count() == 2


def test_missing_identifier():
    reg = DecoratorRegistry()

    assert reg.try_get("nope") is None
    with pytest.raises(RegistryLookupError):
        reg.get("nope")
    # Lookup errors are also plain LookupErrors.
    with pytest.raises(LookupError):
        reg.get("nope")


def test_duplicate_and_collision_handling():
    reg = DecoratorRegistry()
    reg.register(Shout)
    reg.register(Shout)  # ignored

    with pytest.raises(RegistryDuplicateError):
        reg.register(Shout, strict=True)
    with pytest.raises(RegistryCollisionError):
        reg.register(Whisper, name="Shout")
    assert reg.count() == 1


def test_frozen_registry():
    reg = DecoratorRegistry()
    reg.register(Shout)
    reg.freeze()

    assert reg.frozen
    with pytest.raises(RegistryFrozenError):
        reg.register(Whisper)
    with pytest.raises(RegistryFrozenError):
        reg.clear()


def test_async_wrappers():
    reg = DecoratorRegistry()
    asyncio.run(reg.aregister(Shout, name="loud"))

    assert asyncio.run(reg.aget("loud")) is Shout
    assert asyncio.run(reg.atry_get("missing")) is None


# ----------------------------- lookup -----------------------------


def test_lookup_prefers_scoped_then_global():
    scoped = DecoratorRegistry(label="scoped")
    fallback = DecoratorRegistry(label="global")
    scoped.register(Whisper, name="Voice")
    fallback.register(Shout, name="Voice")
    fallback.register(Shout)

    lookup = DecoratorLookup(scoped=scoped, fallback=fallback)

    assert lookup.resolve("Voice") is Whisper
    assert lookup.resolve("Shout") is Shout


def test_lookup_failure_names_tiers():
    lookup = DecoratorLookup(DecoratorRegistry(label="scoped"), DecoratorRegistry(label="global"))

    with pytest.raises(DecoratorLookupError) as excinfo:
        lookup.resolve("Ghost")

    assert excinfo.value.identifier == "Ghost"
    assert excinfo.value.tiers == ("scoped", "global")
    assert "Ghost" in str(excinfo.value)


def test_lookup_passes_implementations_through():
    lookup = DecoratorLookup()

    assert isinstance(Shout, SupportsDecorate)
    assert lookup.resolve(Shout) is Shout


# ----------------------------- registration decorator -----------------------------


def test_decorator_registers_class_in_global_registry():
    @decorator
    class Exclaim(BaseDecorator):
        @classmethod
        def decorate(cls, value, context, preloaded):
            return value + "!"

    assert decorators.get("Exclaim") is Exclaim


def test_decorator_wraps_plain_functions():
    @decorator(name="suffix")
    def add_suffix(value, context, preloaded):
        return f"{value}{context.get('suffix', '')}"

    assert isinstance(add_suffix, FunctionDecorator)
    assert decorators.get("suffix") is add_suffix
    assert add_suffix.decorate("a", {"suffix": "z"}, None) == "az"
    assert add_suffix("b", {"suffix": "y"}) == "by"


def test_registration_into_explicit_registry():
    mine = DecoratorRegistry(label="mine")
    register = DecoratorRegistration(mine)

    register(Shout)

    assert mine.get("Shout") is Shout
    assert "Shout" not in decorators


def test_strict_registration_rejects_duplicates():
    register = DecoratorRegistration(DecoratorRegistry(), strict=True)
    register(Shout)

    with pytest.raises(RegistryDuplicateError):
        register(Shout)


def test_registration_rejects_non_callables():
    with pytest.raises(TypeError):
        decorator(object())
