from __future__ import annotations

import logging

import pytest

from keymode.runtime import telemetry


@pytest.fixture(autouse=True)
def restore_telemetry():
    yield
    telemetry.configure(preset="quiet")


def test_presets_apply_levels() -> None:
    telemetry.configure(preset="development")
    assert telemetry.active_config().level == "DEBUG"
    assert logging.getLogger("keymode").level == logging.DEBUG

    telemetry.configure(preset="quiet")
    assert telemetry.active_config().console is False
    assert logging.getLogger("keymode").level == logging.WARNING


def test_unknown_preset_and_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.TelemetryConfig(), preset="quiet")


def test_environment_drives_default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYMODE_LOG_LEVEL", "warning")
    monkeypatch.setenv("KEYMODE_DISABLE_CONSOLE", "1")

    telemetry.configure()

    config = telemetry.active_config()
    assert config.level == "WARNING"
    assert config.console is False


def test_loggers_nest_under_package_root() -> None:
    assert telemetry.get_logger("modes").name == "keymode.modes"
    assert telemetry.get_logger("keymode.sequences").name == "keymode.sequences"
    assert telemetry.get_logger().name == "keymode"


def test_span_reraises_and_logs_failure(tmp_path) -> None:
    log_file = tmp_path / "keymode.log"
    telemetry.configure(
        config=telemetry.TelemetryConfig(
            level="DEBUG", console=False, log_file=str(log_file)
        )
    )

    with pytest.raises(RuntimeError):
        with telemetry.span("test::boom", metadata={"key": "d"}):
            raise RuntimeError("boom")
    telemetry.record_event("mode.switch", data={"to": "insert"})

    text = log_file.read_text(encoding="utf-8")
    assert "span::fail" in text and "reason=boom" in text
    assert "event::mode.switch" in text and "to=insert" in text


def test_span_cancel_logs_warning(tmp_path) -> None:
    log_file = tmp_path / "keymode.log"
    telemetry.configure(
        config=telemetry.TelemetryConfig(
            level="WARNING", console=False, log_file=str(log_file)
        )
    )

    with telemetry.span("test::stale", metadata={"key": "g"}) as handle:
        handle.cancel("timeout")

    text = log_file.read_text(encoding="utf-8")
    assert "span::cancel" in text
    assert "reason=timeout" in text and "key=g" in text
