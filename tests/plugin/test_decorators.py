"""Tests for @intercepts and Signature."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from plugchain.plugin.decorators import Signature, get_signatures, intercepts
from plugchain.plugin.interceptor import Interceptor
from plugchain.plugin.invocation import Invocation


class Executor:
    def update(self, statement: str, parameter: object) -> int:
        return 1

    def commit(self, required: bool) -> None:
        return None


class TestSignature:
    def test_defaults_to_no_arguments(self) -> None:
        assert Signature(Executor, "flush").args == ()

    def test_list_args_are_stored_as_tuple(self) -> None:
        sig = Signature(Executor, "update", [str, object])  # type: ignore[arg-type]
        assert sig.args == (str, object)
        assert hash(sig) == hash(Signature(Executor, "update", (str, object)))

    def test_is_immutable(self) -> None:
        sig = Signature(Executor, "commit", (bool,))
        with pytest.raises(dataclasses.FrozenInstanceError):
            sig.method = "rollback"  # type: ignore[misc]

    def test_equal_signatures_compare_equal(self) -> None:
        assert Signature(Executor, "commit", (bool,)) == Signature(Executor, "commit", (bool,))


class TestIntercepts:
    def test_stores_signatures_in_declaration_order(self) -> None:
        first = Signature(Executor, "update", (str, object))
        second = Signature(Executor, "commit", (bool,))

        @intercepts(first, second)
        class Audit(Interceptor):
            def intercept(self, invocation: Invocation) -> Any:
                return invocation.proceed()

        assert get_signatures(Audit) == (first, second)
        assert get_signatures(Audit()) == (first, second)
        assert Audit.__plugchain_intercepts__ == (first, second)

    def test_subclasses_inherit_the_declaration(self) -> None:
        sig = Signature(Executor, "commit", (bool,))

        @intercepts(sig)
        class Base(Interceptor):
            def intercept(self, invocation: Invocation) -> Any:
                return invocation.proceed()

        class Derived(Base):
            pass

        assert get_signatures(Derived()) == (sig,)

    def test_undecorated_class_has_no_signatures(self) -> None:
        class Plain(Interceptor):
            def intercept(self, invocation: Invocation) -> Any:
                return None

        assert get_signatures(Plain()) is None

    def test_requires_at_least_one_signature(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            intercepts()

    def test_rejects_non_signatures(self) -> None:
        with pytest.raises(TypeError, match="Signature instances"):
            intercepts((Executor, "commit", (bool,)))  # type: ignore[arg-type]
