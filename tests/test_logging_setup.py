import logging

from shared.logging.logging_setup import ColorLogger, ConsoleFormatter, TimezoneFormatter, setup_logging


def _record(level: int, msg: str, *args, **attrs) -> logging.LogRecord:
    record = logging.LogRecord("tests", level, __file__, 1, msg, args, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


def test_warning_marker_leaves_shared_record_untouched():
    formatter = TimezoneFormatter("UTC")
    record = _record(logging.WARNING, "Upload of %s failed", "notes.pdf")

    line = formatter.format(record)

    assert line.endswith("WARNING - ⚠️ Upload of notes.pdf failed")
    assert record.msg == "Upload of %s failed"


def test_console_formatter_applies_requested_color():
    formatter = ConsoleFormatter("UTC")
    line = formatter.format(_record(logging.INFO, "ready", color="green"))
    assert line.startswith("\033[32m")
    assert line.endswith("\033[0m")
    assert formatter.format(_record(logging.INFO, "plain")).endswith("INFO - plain")


def test_setup_logging_writes_file_under_root_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("ROOT_DIR", str(tmp_path))
    monkeypatch.setenv("TIMEZONE", "UTC")

    logger = setup_logging()
    logger.info("Workspace closed.", color="cyan")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert isinstance(logger, ColorLogger)
    content = (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
    assert "INFO - Workspace closed." in content
    assert "\033[" not in content

    for handler in list(logging.getLogger().handlers):
        handler.close()
        logging.getLogger().removeHandler(handler)
