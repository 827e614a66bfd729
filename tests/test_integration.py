"""End-to-end: a small data-access engine exposing its collaborators to plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from plugchain.core.config import Config
from plugchain.plugin import (
    Interceptor,
    InterceptorChain,
    Invocation,
    Signature,
    get_target,
    intercepts,
    is_surrogate,
    unwrap,
)

# ---------------------------------------------------------------------------
# Engine extension points
# ---------------------------------------------------------------------------


class StatementHandler(ABC):
    @abstractmethod
    def prepare(self, sql: str) -> str: ...


class ParameterHandler(ABC):
    @abstractmethod
    def set_parameters(self, params: dict) -> tuple: ...


class ResultSetHandler(ABC):
    @abstractmethod
    def handle_result_sets(self, rows: list) -> list: ...


class Executor(ABC):
    @abstractmethod
    def query(self, sql: str, params: dict) -> list: ...

    @abstractmethod
    def update(self, sql: str, params: dict) -> int: ...

    @abstractmethod
    def close(self) -> None: ...


class SimpleStatementHandler(StatementHandler):
    def prepare(self, sql: str) -> str:
        return sql.strip()


class SimpleParameterHandler(ParameterHandler):
    def set_parameters(self, params: dict) -> tuple:
        return tuple(sorted(params.items()))


class SimpleResultSetHandler(ResultSetHandler):
    def handle_result_sets(self, rows: list) -> list:
        return [dict(row) for row in rows]


class SimpleExecutor(Executor):
    def __init__(self, engine: Engine, rows: list) -> None:
        self._engine = engine
        self._rows = rows
        self.closed = False
        self.log: list[tuple[str, tuple]] = []

    def query(self, sql: str, params: dict) -> list:
        statement = self._engine.new_statement_handler().prepare(sql)
        bound = self._engine.new_parameter_handler().set_parameters(params)
        self.log.append((statement, bound))
        return self._engine.new_result_set_handler().handle_result_sets(self._rows)

    def update(self, sql: str, params: dict) -> int:
        self.log.append((sql, tuple(params.items())))
        return 1

    def close(self) -> None:
        self.closed = True


class Engine:
    """Builds collaborators and offers each one to the interceptor chain."""

    def __init__(self, chain: InterceptorChain, rows: list) -> None:
        self.chain = chain
        self.rows = rows

    def new_executor(self) -> Executor:
        return self.chain.plugin_all(SimpleExecutor(self, self.rows))

    def new_statement_handler(self) -> StatementHandler:
        return self.chain.plugin_all(SimpleStatementHandler())

    def new_parameter_handler(self) -> ParameterHandler:
        return self.chain.plugin_all(SimpleParameterHandler())

    def new_result_set_handler(self) -> ResultSetHandler:
        return self.chain.plugin_all(SimpleResultSetHandler())


# ---------------------------------------------------------------------------
# Plugins
# ---------------------------------------------------------------------------


@intercepts(Signature(StatementHandler, "prepare", (str,)))
class PaginationInterceptor(Interceptor):
    def __init__(self) -> None:
        self.limit = "10"

    def intercept(self, invocation: Invocation) -> Any:
        return f"{invocation.proceed()} LIMIT {self.limit}"

    def set_properties(self, properties: Mapping[str, str]) -> None:
        self.limit = properties.get("limit", self.limit)


@intercepts(
    Signature(Executor, "query", (str, dict)),
    Signature(Executor, "update", (str, dict)),
)
class AuditInterceptor(Interceptor):
    def __init__(self) -> None:
        self.events: list[str] = []

    def intercept(self, invocation: Invocation) -> Any:
        self.events.append(f"{invocation.method_name}:{invocation.args[0]}")
        return invocation.proceed()


@intercepts(Signature(Executor, "update", (str, dict)))
class ReadOnlyInterceptor(Interceptor):
    def intercept(self, invocation: Invocation) -> Any:
        return 0


@intercepts(Signature(ResultSetHandler, "handle_result_sets", (list,)))
class MaskingInterceptor(Interceptor):
    def intercept(self, invocation: Invocation) -> Any:
        return [{**row, "password": "***"} if "password" in row else row for row in invocation.proceed()]


ROWS = [{"id": 1, "password": "hunter2"}, {"id": 2}]


class TestEngineIntegration:
    def _engine(self, *interceptors: Interceptor) -> Engine:
        chain = InterceptorChain()
        for interceptor in interceptors:
            chain.add_interceptor(interceptor)
        return Engine(chain, ROWS)

    def test_each_collaborator_only_wrapped_by_interested_plugins(self) -> None:
        engine = self._engine(PaginationInterceptor(), AuditInterceptor(), MaskingInterceptor())

        executor = engine.new_executor()
        assert is_surrogate(executor)
        assert get_target(executor).__class__ is SimpleExecutor

        assert not is_surrogate(engine.new_parameter_handler())
        assert is_surrogate(engine.new_statement_handler())
        assert is_surrogate(engine.new_result_set_handler())

    def test_query_flows_through_all_extension_points(self) -> None:
        audit = AuditInterceptor()
        engine = self._engine(PaginationInterceptor(), audit, MaskingInterceptor())
        executor = engine.new_executor()

        rows = executor.query("  SELECT * FROM users ", {"b": 2, "a": 1})

        assert rows == [{"id": 1, "password": "***"}, {"id": 2}]
        assert audit.events == ["query:  SELECT * FROM users "]
        assert unwrap(executor).log == [("SELECT * FROM users LIMIT 10", (("a", 1), ("b", 2)))]

    def test_undeclared_executor_method_passes_through(self) -> None:
        audit = AuditInterceptor()
        executor = self._engine(audit).new_executor()

        executor.close()
        assert executor.closed is True
        assert audit.events == []

    def test_short_circuiting_plugin_blocks_writes(self) -> None:
        audit = AuditInterceptor()
        executor = self._engine(ReadOnlyInterceptor(), audit).new_executor()

        assert executor.update("DELETE FROM users", {}) == 0
        assert audit.events == ["update:DELETE FROM users"]
        assert unwrap(executor).log == []

    def test_plugins_configured_from_config(self, monkeypatch) -> None:
        monkeypatch.setattr(
            "plugchain.plugin.loader.resolve_interceptor_class",
            lambda reference: {"pagination": PaginationInterceptor}[reference],
        )
        config = Config({"plugchain": {"plugins": [{"interceptor": "pagination", "properties": {"limit": 50}}]}})

        engine = Engine(InterceptorChain.from_config(config), ROWS)
        assert engine.new_statement_handler().prepare("SELECT 1") == "SELECT 1 LIMIT 50"
