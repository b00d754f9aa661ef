"""Execution backend tests: Hive CLI process invocation and SQLAlchemy execution."""

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import create_engine, inspect

from schema_sync.utils.ddl.adapters import HiveCLIExecutor, SQLAlchemyExecutor, build_executor

RUN = "schema_sync.utils.ddl.adapters.hive_cli_adapter.subprocess.run"


def completed(returncode):
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestHiveCLIExecutor:
    def make_executor(self, **kwargs):
        return HiveCLIExecutor(
            hive_binary="/opt/hive/bin/hive",
            hadoop_home="/opt/hadoop",
            hadoop_bin="/opt/hadoop/bin",
            **kwargs,
        )

    def test_invokes_hive_with_inline_query(self):
        executor = self.make_executor()
        sql = "CREATE DATABASE IF NOT EXISTS sales;"

        with patch(RUN, return_value=completed(0)) as run:
            assert executor.execute(sql) == (True, None)

        args, kwargs = run.call_args
        assert args[0] == ["/opt/hive/bin/hive", "-e", sql]
        assert kwargs["timeout"] is None
        assert kwargs["check"] is False
        assert kwargs["start_new_session"] is True
        # stdout/stderr are inherited, not captured
        assert "stdout" not in kwargs
        assert "stderr" not in kwargs
        assert "capture_output" not in kwargs

    def test_environment_overrides_are_scoped_to_child(self, monkeypatch):
        monkeypatch.setenv("PATH", "/usr/bin:/bin")
        monkeypatch.setenv("BRIDGE_MARKER", "inherited")
        monkeypatch.delenv("HADOOP_HOME", raising=False)
        executor = self.make_executor()

        with patch(RUN, return_value=completed(0)) as run:
            executor.execute("SELECT 1;")

        env = run.call_args.kwargs["env"]
        assert env["HADOOP_HOME"] == "/opt/hadoop"
        assert env["PATH"] == "/opt/hadoop/bin:/usr/bin:/bin"
        assert env["BRIDGE_MARKER"] == "inherited"
        assert "HADOOP_HOME" not in os.environ
        assert os.environ["PATH"] == "/usr/bin:/bin"

    def test_non_zero_exit_is_failure(self):
        executor = self.make_executor()

        with patch(RUN, return_value=completed(64)):
            success, error = executor.execute("CREATE DATABASE IF NOT EXISTS sales;")

        assert success is False
        assert error == "failed to execute Hive query: exit status 64"

    def test_missing_binary_is_failure(self):
        executor = self.make_executor()

        with patch(RUN, side_effect=FileNotFoundError(2, "No such file or directory")):
            success, error = executor.execute("CREATE DATABASE IF NOT EXISTS sales;")

        assert success is False
        assert error.startswith("failed to execute Hive query:")
        assert "No such file or directory" in error

    def test_timeout_is_failure(self):
        executor = self.make_executor(timeout=5.0)

        with patch(RUN, side_effect=subprocess.TimeoutExpired(cmd="hive", timeout=5.0)) as run:
            success, error = executor.execute("CREATE DATABASE IF NOT EXISTS sales;")

        assert run.call_args.kwargs["timeout"] == 5.0
        assert success is False
        assert "timed out" in error


class TestSQLAlchemyExecutor:
    def test_executes_ddl(self):
        engine = create_engine("sqlite://")
        executor = SQLAlchemyExecutor(engine)

        success, error = executor.execute("CREATE TABLE IF NOT EXISTS orders (\n  id INT NOT NULL\n);")

        assert (success, error) == (True, None)
        assert inspect(engine).get_table_names() == ["orders"]

    def test_repeated_if_not_exists_is_a_no_op(self):
        executor = SQLAlchemyExecutor(create_engine("sqlite://"))
        sql = "CREATE TABLE IF NOT EXISTS orders (\n  id INT NOT NULL\n);"

        assert executor.execute(sql) == (True, None)
        assert executor.execute(sql) == (True, None)

    def test_engine_error_is_failure(self):
        executor = SQLAlchemyExecutor(create_engine("sqlite://"))

        success, error = executor.execute("CREATE DATABASE IF NOT EXISTS sales;")

        assert success is False
        assert error

    def test_missing_driver_is_a_configuration_error(self):
        with patch(
            "schema_sync.utils.ddl.adapters.sqlalchemy_adapter.create_engine",
            side_effect=ModuleNotFoundError("No module named 'pyhive'"),
        ):
            with pytest.raises(ValueError, match="pyhive"):
                SQLAlchemyExecutor.from_url("hive://localhost:10000/default")

    def test_close_disposes_engine(self):
        engine = MagicMock()
        SQLAlchemyExecutor(engine).close()
        engine.dispose.assert_called_once_with()


class TestBuildExecutor:
    def test_defaults_to_hive_cli(self):
        executor = build_executor({
            "HIVE_BINARY": "/usr/local/hive/bin/hive",
            "HADOOP_HOME": "/usr/local/hadoop",
            "HADOOP_BIN": "/usr/local/hadoop/bin",
            "EXECUTION_TIMEOUT": None,
        })

        assert isinstance(executor, HiveCLIExecutor)
        assert executor.build_command("x") == ["/usr/local/hive/bin/hive", "-e", "x"]

    def test_sqlalchemy_from_engine_url(self):
        executor = build_executor({"EXECUTOR": "sqlalchemy", "ENGINE_URL": "sqlite://"})
        assert isinstance(executor, SQLAlchemyExecutor)
        executor.close()

    def test_override_wins_over_config(self):
        executor = build_executor({"EXECUTOR": "hive_cli", "ENGINE_URL": "sqlite://"}, executor_type="sqlalchemy")
        assert executor.engine_type == "sqlalchemy"
        executor.close()

    def test_sqlalchemy_requires_url(self):
        with pytest.raises(ValueError, match="ENGINE_URL"):
            build_executor({"EXECUTOR": "sqlalchemy"})

    def test_unknown_executor(self):
        with pytest.raises(ValueError, match="Unsupported executor type"):
            build_executor({"EXECUTOR": "beeline"})
