"""Unit tests for sentence2vec.config and sentence2vec.log."""

import io
import logging

import pytest

from sentence2vec.config import PARTITION_ROOT, SHARD_EXTENSION, Settings
from sentence2vec.exceptions import InvalidArgumentError
from sentence2vec.log import PACKAGE_LOGGER, configure_logging


def test_layout_constants():
    assert PARTITION_ROOT == "word2vec"
    assert SHARD_EXTENSION == ".bin"


def test_settings_defaults():
    s = Settings.from_env({})
    assert s.log_level == "WARNING"
    assert s.log_level_no == logging.WARNING
    assert s.max_workers is None


def test_settings_from_env():
    s = Settings.from_env({
        "SENTENCE2VEC_LOG_LEVEL": "debug",
        "SENTENCE2VEC_MAX_WORKERS": "4",
    })
    assert s.log_level_no == logging.DEBUG
    assert s.max_workers == 4


def test_settings_bad_workers():
    with pytest.raises(InvalidArgumentError, match="integer"):
        Settings.from_env({"SENTENCE2VEC_MAX_WORKERS": "many"})
    with pytest.raises(InvalidArgumentError, match=">= 1"):
        Settings.from_env({"SENTENCE2VEC_MAX_WORKERS": "0"})


def test_settings_bad_level():
    with pytest.raises(InvalidArgumentError, match="log level"):
        Settings(log_level="LOUD")


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (logger.level, list(logger.handlers))
    logger.handlers.clear()
    yield logger
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]


def test_configure_logging_single_handler(package_logger):
    stream = io.StringIO()
    configure_logging(logging.INFO, stream=stream)
    configure_logging(logging.DEBUG, stream=stream)
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG

    logging.getLogger("sentence2vec.partition").debug("Created folder x")
    assert "Created folder x" in stream.getvalue()
