"""Tests for logging configuration, sanitizing and error mapping."""

import json
import logging

from fname_swap.shared.errors import NameTaken, PartialFailure, SigningRejected
from fname_swap.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    StructuredFormatter,
    format_error_for_user,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
)

PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


class TestLoggingConfig:
    def test_defaults_from_environment(self, monkeypatch):
        for name in (
            "FNAME_SWAP_LOG_LEVEL",
            "FNAME_SWAP_LOG_DIR",
            "FNAME_SWAP_LOG_FORMAT",
            "FNAME_SWAP_LOG_QUIET",
        ):
            monkeypatch.delenv(name, raising=False)
        config = LoggingConfig.from_environment()
        assert config.log_level == LogLevel.INFO
        assert config.log_to_file is False
        assert config.log_to_stdout is True
        assert config.log_format == "human"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FNAME_SWAP_LOG_LEVEL", "debug")
        monkeypatch.setenv("FNAME_SWAP_LOG_DIR", str(tmp_path))
        monkeypatch.setenv("FNAME_SWAP_LOG_FORMAT", "JSON")
        config = LoggingConfig.from_environment()
        assert config.log_level == LogLevel.DEBUG
        assert config.log_to_file is True
        assert config.log_dir == tmp_path
        assert config.log_format == "json"

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("FNAME_SWAP_LOG_LEVEL", "chatty")
        assert LoggingConfig.from_environment().log_level == LogLevel.INFO


class TestSanitize:
    def test_private_key_assignment_redacted(self):
        message = f"private_key={PRIVATE_KEY}"
        sanitized = sanitize_message(message)
        assert PRIVATE_KEY[2:] not in sanitized
        assert "[REDACTED]" in sanitized

    def test_bare_key_redacted(self):
        sanitized = sanitize_message(f"loaded {PRIVATE_KEY} from env")
        assert "[KEY_REDACTED]" in sanitized

    def test_addresses_preserved_by_default(self):
        message = "owner 0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        assert sanitize_message(message) == message

    def test_addresses_redacted_when_requested(self):
        message = "owner 0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        assert "[ADDRESS_REDACTED]" in sanitize_message(message, preserve_addresses=False)

    def test_sanitize_dict_sensitive_keys(self):
        result = sanitize_dict({"private_key": "abc", "nested": {"mnemonic": "x"}, "fid": 1})
        assert result["private_key"] == "[REDACTED]"
        assert result["nested"]["mnemonic"] == "[REDACTED]"
        assert result["fid"] == 1


class TestUserFriendlyErrors:
    def test_rejected_signature(self):
        message, suggestion = get_user_friendly_error(SigningRejected())
        assert "declined" in message
        assert "Nothing was changed" in suggestion

    def test_name_taken(self):
        assert "already registered" in format_error_for_user(NameTaken("bob"))

    def test_unknown_error(self):
        message, suggestion = get_user_friendly_error("something odd")
        assert message == "An unexpected error occurred."
        assert suggestion is None

    def test_partial_failure_guidance_names_both_handles(self):
        error = PartialFailure(released="alice", attempted="alice2", detail="boom")
        assert "alice" in error.user_guidance
        assert "alice2" in error.user_guidance
        assert "released" in error.user_guidance


class TestStructuredLogging:
    def test_context_adapter_attaches_context(self):
        logger = logging.getLogger("fname_swap.test.context")
        records = []

        class Collector(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = Collector()
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            adapter = ContextAdapter(logger, {"fid": 7}).with_context(stage="claim")
            adapter.info("hello")
        finally:
            logger.removeHandler(handler)

        assert records[0].context == {"fid": 7, "stage": "claim"}
        payload = json.loads(StructuredFormatter().format(records[0]))
        assert payload["context"] == {"fid": 7, "stage": "claim"}
        assert payload["message"] == "hello"
