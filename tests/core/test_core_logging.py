"""Tests for implindex.core.logging."""

import json

import structlog

from implindex.core.logging import LogContext, configure_logging, get_logger


class TestConfigureLogging:
    def teardown_method(self):
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()

    def test_json_output_is_ecs_compatible(self, capsys):
        configure_logging(level="INFO", json_format=True, service="implindex-test")
        get_logger("implindex.test").info("pending_drained", drained=2)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "pending_drained"
        assert record["drained"] == 2
        assert record["logger_name"] == "implindex.test"
        assert record["log.level"] == "info"
        assert record["service.name"] == "implindex-test"
        assert "@timestamp" in record

    def test_level_filtering(self, capsys):
        configure_logging(level="WARNING", json_format=True)
        get_logger(__name__).info("hidden")

        assert capsys.readouterr().err == ""

    def test_log_context_binds_and_unbinds(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger(__name__)

        with LogContext(trait_path="core::convert::From"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = (json.loads(line) for line in capsys.readouterr().err.strip().splitlines())
        assert inside["trait_path"] == "core::convert::From"
        assert "trait_path" not in outside


class TestGetLogger:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_named_logger_resolves_lazily(self, capsys):
        logger = get_logger("implindex.registry.deferred")
        configure_logging(level="DEBUG", json_format=True)
        logger.debug("contribution_buffered", pending=1)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["logger_name"] == "implindex.registry.deferred"
        assert record["pending"] == 1

    def test_unnamed_logger(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger().info("plain")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "plain"
        assert "logger_name" not in record
