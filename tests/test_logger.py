import io

import pytest

from hackcon.logger import Logger, LogLevel, LogRecord


def _logger(**kwargs):
    stream = io.StringIO()
    return Logger(stream=stream, **kwargs), stream


def test_info_is_echoed_with_prefix_and_newline():
    logger, stream = _logger()
    logger.info("hello")
    assert stream.getvalue() == "[NFO] hello\n"


def test_message_with_newline_not_doubled():
    logger, stream = _logger()
    logger.warn("careful\n")
    assert stream.getvalue() == "[WRN] careful\n"


def test_debug_is_not_echoed_but_stored():
    logger, stream = _logger()
    logger.debug("quiet")
    assert stream.getvalue() == ""
    assert logger.records() == [LogRecord(LogLevel.DEBUG, "quiet")]


def test_unknown_level_stored_as_error():
    logger, stream = _logger()
    logger.log(7, "odd")
    assert stream.getvalue() == "[???] odd\n"
    assert logger.records()[0].level is LogLevel.ERROR


def test_copy_text_labels():
    logger, _ = _logger()
    logger.debug("a")
    logger.info("b")
    logger.warn("c")
    logger.error("d")
    assert logger.copy_text() == "[DEBUG] a\n[INFO ] b\n[WARN ] c\n[ERROR] d\n"


def test_multiline_message_split_into_records():
    logger, _ = _logger()
    logger.info("one\ntwo")
    assert [r.text for r in logger.records()] == ["one", "two"]


def test_clear_empties_log():
    logger, _ = _logger()
    logger.error("x")
    logger.clear()
    assert logger.records() == []
    assert logger.copy_text() == ""


def test_capacity_evicts_oldest():
    logger, _ = _logger(capacity=10)
    logger.info("first1")
    logger.info("second")
    records = logger.records()
    assert [r.text for r in records] == ["second"]


def test_invalid_capacity_raises():
    with pytest.raises(ValueError):
        Logger(capacity=0, stream=io.StringIO())