from loguru import logger

from nattydb.logging import configure_logging


def test_configure_logging_level(capsys):
    configure_logging("warning")

    logger.info("hidden message")
    logger.warning("visible message")

    err = capsys.readouterr().err
    assert "visible message" in err
    assert "hidden message" not in err


def test_configure_logging_from_env(monkeypatch, capsys):
    monkeypatch.setenv("NATTYDB_LOG_LEVEL", "DEBUG")
    configure_logging()

    logger.debug("debug message")

    assert "debug message" in capsys.readouterr().err
