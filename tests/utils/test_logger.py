import logging

import pytest

from classdebug.utils.logger import DEFAULT_FORMAT, REPORT_FORMAT, get_logger, get_report_logger


def installed_handlers(logger):
    """Handlers added by get_logger, leaving out pytest's capture handlers."""
    return [h for h in logger.handlers if type(h) in (logging.StreamHandler, logging.FileHandler)]


@pytest.fixture
def fresh_report_logger():
    """Start from a report logger without handlers and restore it afterwards."""
    report = logging.getLogger("classdebug.report")
    saved = (report.handlers[:], report.level, report.propagate)
    report.handlers.clear()
    yield report
    handlers, level, propagate = saved
    report.handlers[:] = handlers
    report.setLevel(level)
    report.propagate = propagate


def test_diagnostics_go_to_stdout_with_timestamped_format(capsys):
    logger = get_logger("tests.logger.console")
    logger.info("Resolving 'collections.OrderedDict'")

    out = capsys.readouterr().out
    assert " - tests.logger.console - INFO - Resolving 'collections.OrderedDict'" in out
    assert installed_handlers(logger)[0].formatter._fmt == DEFAULT_FORMAT


def test_log_file_is_created_with_its_directory(tmp_path):
    log_file = tmp_path / "runs" / "classdebug.log"
    logger = get_logger("tests.logger.file", level="DEBUG", log_file=str(log_file))
    logger.debug("Released external unit plugins/shapes.py")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text()
    assert "DEBUG - Released external unit plugins/shapes.py" in content


def test_log_file_without_directory(tmp_path, monkeypatch):
    """A bare file name is written to the working directory."""
    monkeypatch.chdir(tmp_path)
    logger = get_logger("tests.logger.bare_file", log_file="report.log")
    logger.warning("Option ignored")
    for handler in logger.handlers:
        handler.flush()

    assert "Option ignored" in (tmp_path / "report.log").read_text()


@pytest.mark.parametrize("level, shown, hidden", [
    ("DEBUG", ["skipped 0", "Parsed options"], []),
    ("INFO", ["Parsed options"], ["skipped 0"]),
    ("warning", [], ["skipped 0", "Parsed options"]),
])
def test_level_filters_records(capsys, level, shown, hidden):
    logger = get_logger(f"tests.logger.level_{level}", level=level)
    logger.debug("skipped 0")
    logger.info("Parsed options")

    out = capsys.readouterr().out
    assert all(message in out for message in shown)
    assert not any(message in out for message in hidden)


def test_repeated_calls_share_handlers(tmp_path):
    log_file = str(tmp_path / "shared.log")
    first = get_logger("tests.logger.shared", log_file=log_file)
    second = get_logger("tests.logger.shared", level="DEBUG", log_file=log_file)

    assert first is second
    assert len(installed_handlers(first)) == 2
    assert first.level == logging.INFO


@pytest.mark.parametrize("level", ["NOT_A_LEVEL", "BASIC_FORMAT"])
def test_unknown_level_name_falls_back_to_info(level):
    logger = get_logger(f"tests.logger.unknown_{level}", level=level)
    assert logger.level == logging.INFO


def test_report_lines_are_printed_verbatim(capsys, fresh_report_logger):
    report = get_report_logger()
    report.info("-- Fields")

    assert capsys.readouterr().out == "-- Fields\n"


def test_report_logger_does_not_propagate(fresh_report_logger):
    report = get_report_logger(level="DEBUG")

    assert report is fresh_report_logger
    assert report.propagate is False
    assert report.level == logging.DEBUG
    handlers = installed_handlers(report)
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == REPORT_FORMAT
