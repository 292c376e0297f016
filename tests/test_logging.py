import logging

from bsplayout import logging_setup
from bsplayout.logging_setup import is_debug, set_debug


def test_get_logger_uses_shared_handlers():
    logger = logging_setup.get_logger("unit")
    assert logger.name == "bsplayout.unit"
    assert logger.propagate is False
    for handler in logging_setup.LogObjects.handlers:
        assert handler in logger.handlers


def test_get_logger_level():
    previous = is_debug()
    try:
        set_debug(False)
        assert logging_setup.get_logger("quiet").level == logging.WARNING
        set_debug(True)
        assert logging_setup.get_logger("verbose").level == logging.DEBUG
        assert logging_setup.get_logger("forced", level=logging.ERROR).level == logging.ERROR
    finally:
        set_debug(previous)


def test_init_logger_with_file(tmp_path):
    logfile = tmp_path / "debug.log"
    try:
        logging_setup.init_logger(str(logfile), force_debug=True)
        assert is_debug()
        assert any(isinstance(h, logging.FileHandler) for h in logging_setup.LogObjects.handlers)

        logging_setup.get_logger("filetest").error("something broke")
        for handler in logging_setup.LogObjects.handlers:
            handler.flush()
        assert "something broke" in logfile.read_text()
    finally:
        logging_setup.init_logger("/dev/null", force_debug=True)
