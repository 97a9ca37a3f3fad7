import logging

from marketplace_cli.logging_config import ColoredFormatter, LOGGER_NAME, get_logger, setup_logging


def test_get_logger_is_namespaced():
    assert get_logger('marketplace').name == f"{LOGGER_NAME}.marketplace"


def test_verbose_lowers_console_level():
    logger = setup_logging("WARNING", verbose=True)

    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_log_file_gets_everything(tmp_path):
    log_file = tmp_path / "mkpcli.log"

    logger = setup_logging("ERROR", log_file=str(log_file))
    get_logger('test').debug("written to file only")
    for handler in logger.handlers:
        handler.flush()

    assert logger.handlers[0].level == logging.ERROR
    assert "written to file only" in log_file.read_text()


def test_colored_formatter():
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)

    assert ColoredFormatter('%(levelname)s - %(message)s', use_colors=True).format(record) == \
        "\033[31mERROR\033[0m - boom"
    assert ColoredFormatter('%(levelname)s - %(message)s', use_colors=False).format(record) == "ERROR - boom"
