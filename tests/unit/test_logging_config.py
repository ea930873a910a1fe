"""Unit tests for logging processors."""

import logging

from culturesense_llm.logging_config import (
    MASK,
    SERVICE_NAME,
    app_context,
    configure_logging,
    mask_credentials,
)


def test_mask_credentials_top_level_and_nested():
    event = {
        "event": "Sending completion request",
        "api_key": "sk-live-123",
        "headers": {"Authorization": "Bearer sk-live-123", "X-Title": "CultureSense AI"},
        "model": "or-primary",
    }

    masked = mask_credentials(None, "info", event)

    assert masked["api_key"] == MASK
    assert masked["headers"] == {"Authorization": MASK, "X-Title": "CultureSense AI"}
    assert masked["model"] == "or-primary"


def test_empty_credentials_left_alone():
    assert mask_credentials(None, "info", {"api_key": ""})["api_key"] == ""


def test_app_context_does_not_override_explicit_values():
    add_context = app_context("production")

    event = add_context(None, "info", {"event": "x", "environment": "staging"})

    assert event["service"] == SERVICE_NAME
    assert event["environment"] == "staging"


def test_configure_logging_sets_levels():
    configure_logging("warning", "production")

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING
    assert len(logging.getLogger().handlers) == 1
