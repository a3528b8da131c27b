"""Tests for the logging module."""

import pytest


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger_instance(self) -> None:
        from diffhue.logger import get_logger

        logger = get_logger("test_module")
        assert logger is not None

    def test_logger_has_bind_context(self) -> None:
        from diffhue.logger import get_logger

        logger = get_logger("test_module")
        assert hasattr(logger, "info")
        assert hasattr(logger, "debug")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "error")


class TestStderrSink:
    """Tests for add_stderr_sink and remove_stderr_sink."""

    def test_returns_sink_id(self) -> None:
        from diffhue.logger import _state, add_stderr_sink, remove_stderr_sink

        sink_id = add_stderr_sink()

        assert isinstance(sink_id, int)
        assert _state.stderr_handler_id == sink_id

        remove_stderr_sink(sink_id)
        assert _state.stderr_handler_id is None

    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        from diffhue.logger import add_stderr_sink, get_logger, remove_stderr_sink

        sink_id = add_stderr_sink(level="DEBUG")
        get_logger(__name__).warning("Message for stderr")
        remove_stderr_sink(sink_id)

        assert "Message for stderr" in capsys.readouterr().err

    def test_respects_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        from diffhue.logger import add_stderr_sink, get_logger, remove_stderr_sink

        sink_id = add_stderr_sink(level="ERROR")
        get_logger(__name__).warning("Quiet warning")
        remove_stderr_sink(sink_id)

        assert "Quiet warning" not in capsys.readouterr().err

    def test_adding_twice_replaces_previous_sink(self, capsys: pytest.CaptureFixture[str]) -> None:
        from diffhue.logger import add_stderr_sink, get_logger, remove_stderr_sink

        add_stderr_sink(level="DEBUG")
        sink_id = add_stderr_sink(level="DEBUG")
        get_logger(__name__).warning("Only once")
        remove_stderr_sink(sink_id)

        assert capsys.readouterr().err.count("Only once") == 1


class TestLoggingState:
    """Tests for _LoggingState class."""

    def test_initial_stderr_handler_is_none(self) -> None:
        from diffhue.logger import _LoggingState

        assert _LoggingState().stderr_handler_id is None
