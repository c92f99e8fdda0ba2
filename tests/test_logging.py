"""Tests for package logger setup."""

import logging

import pytest

import steamweb.utils.logging as logging_mod
from steamweb.utils.logging import get_logger, mask_key


@pytest.fixture
def fresh_package_logger(monkeypatch):
    """Reset the steamweb logger so get_logger configures it again."""
    package_logger = logging.getLogger("steamweb")
    monkeypatch.setattr(logging_mod, "_CONFIGURED", False)
    monkeypatch.setattr(package_logger, "level", logging.NOTSET)
    yield package_logger
    package_logger.setLevel(logging.NOTSET)


def test_level_inherited_without_env(fresh_package_logger, monkeypatch):
    """Test that the application's root level decides what is emitted."""
    monkeypatch.delenv(logging_mod.LOG_LEVEL_ENV, raising=False)

    logger = get_logger("steamweb.retrieval.client")

    assert fresh_package_logger.level == logging.NOTSET
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", logging.DEBUG)
    assert logger.getEffectiveLevel() == logging.DEBUG


def test_level_from_env(fresh_package_logger, monkeypatch):
    monkeypatch.setenv(logging_mod.LOG_LEVEL_ENV, "debug")

    get_logger("steamweb.retrieval.client")

    assert fresh_package_logger.level == logging.DEBUG


def test_unknown_env_level_ignored(fresh_package_logger, monkeypatch):
    monkeypatch.setenv(logging_mod.LOG_LEVEL_ENV, "chatty")

    get_logger("steamweb")

    assert fresh_package_logger.level == logging.NOTSET


def test_mask_key():
    assert mask_key("http://x/?key=abc&limit=1", "abc") == "http://x/?key=***&limit=1"
    assert mask_key("http://x/?key=", "") == "http://x/?key="
