import pytest

from sdr.metadata.core.exceptions import CannotLoadConfiguration
from sdr.metadata.service.logging.configuration import LoggingConfiguration, LogLevel


def test_defaults() -> None:
    config = LoggingConfiguration()
    assert config.level == LogLevel.info
    assert config.verbose_level == LogLevel.warning
    assert config.json_format is True


def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SDR_LOG_JSON_FORMAT", "false")
    config = LoggingConfiguration()
    assert config.level == LogLevel.debug
    assert config.json_format is False


def test_invalid_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDR_LOG_LEVEL", "chatty")
    with pytest.raises(CannotLoadConfiguration) as execinfo:
        LoggingConfiguration()
    assert "SDR_LOG_LEVEL" in str(execinfo.value)


class TestLogLevel:
    def test_level_string(self) -> None:
        assert LogLevel.debug == "DEBUG"
        assert LogLevel.info == "INFO"  # type: ignore[unreachable]
        assert LogLevel.warning == "WARNING"
        assert LogLevel.error == "ERROR"

    def test_levelno(self) -> None:
        assert LogLevel.debug.levelno == 10
        assert LogLevel.info.levelno == 20
        assert LogLevel.warning.levelno == 30
        assert LogLevel.error.levelno == 40

    @pytest.mark.parametrize(
        "level, expected",
        [
            (10, LogLevel.debug),
            ("debug", LogLevel.debug),
            ("DEBUG", LogLevel.debug),
            ("info", LogLevel.info),
            ("INFO", LogLevel.info),
            (20, LogLevel.info),
        ],
    )
    def test_from_level(self, level: int | str, expected: LogLevel) -> None:
        assert LogLevel.from_level(level) == expected

    def test_from_level_invalid(self) -> None:
        with pytest.raises(ValueError, match="'chatty' is not a valid LogLevel"):
            LogLevel.from_level("chatty")
