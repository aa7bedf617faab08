import logging

import pytest

from paxi.logger import Severity, get_logger, parse_severity, setup


@pytest.fixture
def clean_logger():
    yield
    logger = logging.getLogger("paxi")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("DEBUG", Severity.DEBUG),
        ("debug", Severity.DEBUG),
        ("Info", Severity.INFO),
        ("warning", Severity.WARNING),
        ("ERROR", Severity.ERROR),
    ],
)
def test_parse_severity_known_names(text, expected):
    assert parse_severity(text) is expected


def test_parse_severity_unknown_defaults_to_info():
    assert parse_severity("verbose") is Severity.INFO


def test_severity_ordering_matches_logging_levels():
    levels = [parse_severity(name) for name in ("debug", "info", "warning", "error")]
    assert levels == sorted(levels)
    assert len(set(levels)) == 4
    assert parse_severity("warning") == logging.WARNING
    assert parse_severity("error") == logging.ERROR


def test_get_logger_is_shared(clean_logger):
    first = get_logger()
    assert first is get_logger()
    assert first.handlers
    assert first.level == Severity.INFO


def test_setup_writes_to_file(tmp_path, clean_logger):
    path = setup(tmp_path, Severity.INFO)
    logger = get_logger()
    logger.info("hello from node")
    logger.debug("hidden detail")
    assert path.parent == tmp_path
    text = path.read_text(encoding="utf-8")
    assert "hello from node" in text
    assert "[INFO]" in text
    assert "hidden detail" not in text


def test_setup_debug_level_keeps_debug(tmp_path, clean_logger):
    path = setup(tmp_path, "debug")
    get_logger().debug("fine grained")
    assert "fine grained" in path.read_text(encoding="utf-8")


def test_setup_warning_level_filters_info(tmp_path, clean_logger):
    path = setup(tmp_path, Severity.WARNING)
    logger = get_logger()
    logger.info("quiet")
    logger.error("loud")
    text = path.read_text(encoding="utf-8")
    assert "quiet" not in text
    assert "loud" in text


def test_setup_missing_directory_raises(tmp_path, clean_logger):
    with pytest.raises(OSError):
        setup(tmp_path / "missing", Severity.INFO)