"""Pre-flight validation tests."""

from unittest.mock import patch

import pytest

from schema_sync.exceptions import EngineConnectionError
from schema_sync.replication import BridgeValidator, check_engine_connection


def base_config(**overrides):
    config = {
        "KAFKA_BOOTSTRAP_SERVERS": "localhost:9092",
        "SCHEMA_TOPIC": "variant",
        "CONSUMER_GROUP": "0",
        "EXECUTOR": "hive_cli",
        "HIVE_BINARY": "/usr/local/hive/bin/hive",
        "ERROR_POLICY": "fail_fast",
        "DEAD_LETTER_TOPIC": "variant.dlq",
        "METASTORE_URL": None,
    }
    config.update(overrides)
    return config


class TestValidateAll:
    def test_defaults_are_valid(self):
        assert BridgeValidator(base_config()).validate_all() == (True, [])

    def test_collects_every_error(self):
        is_valid, errors = BridgeValidator(
            base_config(SCHEMA_TOPIC="", ERROR_POLICY="retry", EXECUTOR="beeline")
        ).validate_all()

        assert is_valid is False
        assert len(errors) == 3
        assert any("SCHEMA_TOPIC" in e for e in errors)
        assert any("ERROR_POLICY" in e for e in errors)
        assert any("beeline" in e for e in errors)

    def test_dead_letter_needs_topic(self):
        is_valid, errors = BridgeValidator(
            base_config(ERROR_POLICY="dead_letter", DEAD_LETTER_TOPIC="")
        ).validate_all()

        assert is_valid is False
        assert "DEAD_LETTER_TOPIC" in errors[0]

    def test_sqlalchemy_executor_needs_url(self):
        is_valid, errors = BridgeValidator(base_config(EXECUTOR="sqlalchemy")).validate_all()

        assert is_valid is False
        assert "ENGINE_URL" in errors[0]


class TestEngineConnection:
    def test_skipped_without_url(self):
        BridgeValidator(base_config()).check_engine_connection()

    def test_reachable_store(self):
        check_engine_connection("sqlite://")

    def test_unreachable_store(self, tmp_path):
        url = f"sqlite:///{tmp_path}/missing/dir/metastore.db"

        with pytest.raises(EngineConnectionError, match="Cannot connect"):
            BridgeValidator(base_config(METASTORE_URL=url)).check_engine_connection()

    def test_missing_driver(self):
        with patch(
            "schema_sync.replication.validators.create_engine",
            side_effect=ModuleNotFoundError("No module named 'pyhive'"),
        ):
            with pytest.raises(EngineConnectionError, match="pyhive"):
                check_engine_connection("hive://localhost:10000/default")

    def test_malformed_url(self):
        with pytest.raises(EngineConnectionError):
            check_engine_connection("not a url")
