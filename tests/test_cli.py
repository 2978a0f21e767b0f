"""End-to-end tests of the check command with the SSH collector faked."""

import sys
from datetime import datetime

import pytest
from typer.testing import CliRunner

import main

runner = CliRunner()


class FakeCollector:
    """Stands in for BigIPCollector, records how it was built."""

    instances = []
    result = None

    def __init__(self, host, username, **kwargs):
        self.host = host
        self.username = username
        self.kwargs = kwargs
        FakeCollector.instances.append(self)

    def fetch_log_line(self, command=None):
        return dict(FakeCollector.result)


class FixedClock:
    @staticmethod
    def now():
        return datetime(2026, 1, 15, 11, 12, 38)


def _fetched(output="", error=None):
    return {"reachable": error is None, "output": output, "exit_status": 0, "error": error}


@pytest.fixture(autouse=True)
def fake_collector(monkeypatch):
    for name in ("BIGIP_USER", "BIGIP_PASS", "BIGIP_SSH_KEY"):
        monkeypatch.delenv(name, raising=False)
    FakeCollector.instances = []
    FakeCollector.result = _fetched()
    monkeypatch.setattr(main, "BigIPCollector", FakeCollector)
    monkeypatch.setattr(main, "datetime", FixedClock)
    return FakeCollector


def _invoke(*args):
    return runner.invoke(main.app, list(args))


def test_no_history():
    result = _invoke("-H", "192.0.2.10")

    assert result.exit_code == 0
    assert result.stdout.strip() == (
        "OK - No bandwidth overutilization history found in logs"
        " | bandwidth_percent=0%;75;80;0;150"
    )


def test_recent_overutilization_is_critical(log_line):
    FakeCollector.result = _fetched(log_line + "\n")

    result = _invoke("-H", "192.0.2.10")

    assert result.exit_code == 2
    assert result.stdout.strip() == (
        "CRITICAL - Bandwidth at 107.00% (1070/1000 Mbps) - alert 00d:00h:02m:00s ago"
        " | bandwidth_percent=107.00%;75;80;0;150"
    )


def test_custom_thresholds_are_used(log_line):
    FakeCollector.result = _fetched(log_line)

    result = _invoke("-H", "192.0.2.10", "-w", "100", "-c", "110")

    assert result.exit_code == 1
    assert result.stdout.startswith("WARNING - Bandwidth at 107.00%")
    assert "bandwidth_percent=107.00%;100;110;0;150" in result.stdout


def test_alert_window_options(log_line):
    FakeCollector.result = _fetched(log_line)

    result = _invoke("-H", "192.0.2.10", "--age-alert", "1", "--age-no-alert", "3")

    assert result.exit_code == 0
    assert "Last bandwidth overutilization at 107.00%" in result.stdout
    assert "bandwidth_percent=0%;75;80;0;150" in result.stdout


def test_invalid_thresholds_fail_before_connecting():
    result = _invoke("-H", "192.0.2.10", "-w", "80", "-c", "75")

    assert result.exit_code == 3
    assert result.stdout.strip() == (
        "UNKNOWN - Error: WARNING threshold (80) must be lower than CRITICAL threshold (75)"
        " | bandwidth_percent=U%;80;75;0;150"
    )
    assert FakeCollector.instances == []


def test_invalid_age_window_fails_before_connecting():
    result = _invoke("-H", "192.0.2.10", "--age-alert", "10", "--age-no-alert", "5")

    assert result.exit_code == 3
    assert "age-alert (10) must be lower than age-no-alert (5)" in result.stdout
    assert FakeCollector.instances == []


def test_missing_host():
    result = _invoke()

    assert result.exit_code == 3
    assert result.stdout.startswith("UNKNOWN - Error: The --host option is mandatory")


def test_transport_failure():
    FakeCollector.result = _fetched(None, error="SSH authentication failed: Authentication failed.")

    result = _invoke("-H", "192.0.2.10")

    assert result.exit_code == 3
    assert result.stdout.strip() == (
        "UNKNOWN - Error: SSH authentication failed: Authentication failed."
        " | bandwidth_percent=U%;75;80;0;150"
    )


def test_credentials_are_threaded_to_the_collector(monkeypatch):
    monkeypatch.setenv("BIGIP_USER", "monitor")
    monkeypatch.setenv("BIGIP_PASS", "from-env")

    result = _invoke("-H", "192.0.2.10", "-k", "/etc/icinga2/bigip_key", "--timeout", "20")

    assert result.exit_code == 0
    collector = FakeCollector.instances[0]
    assert collector.host == "192.0.2.10"
    assert collector.username == "monitor"
    assert collector.kwargs["password"] == "from-env"
    assert collector.kwargs["key_path"] == "/etc/icinga2/bigip_key"
    assert collector.kwargs["session_timeout"] == 20


def test_yaml_config(tmp_path, log_line):
    config = tmp_path / "bigip.yaml"
    config.write_text("warning: 100\ncritical: 120\nuser: svc-monitor\n")
    FakeCollector.result = _fetched(log_line)

    result = _invoke("-H", "192.0.2.10", "--config", str(config))

    assert result.exit_code == 1
    assert "bandwidth_percent=107.00%;100;120;0;150" in result.stdout
    assert FakeCollector.instances[0].username == "svc-monitor"


def test_broken_yaml_config(tmp_path):
    config = tmp_path / "bigip.yaml"
    config.write_text("colour: blue\n")

    result = _invoke("-H", "192.0.2.10", "--config", str(config))

    assert result.exit_code == 3
    assert result.stdout.startswith("UNKNOWN - Error: Unknown keys in")
    assert FakeCollector.instances == []


def test_usage_error_is_unknown(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["check-bigip-bandwidth", "-H", "bigip", "-w", "high"])

    with pytest.raises(SystemExit) as exc:
        main.run()

    assert exc.value.code == 3
    out = capsys.readouterr().out
    assert out.startswith("UNKNOWN - Error: ")
    assert "bandwidth_percent=U%;75;80;0;150" in out


def test_unknown_option_is_unknown(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["check-bigip-bandwidth", "-H", "bigip", "--colour", "blue"])

    with pytest.raises(SystemExit) as exc:
        main.run()

    assert exc.value.code == 3
    out = capsys.readouterr().out
    assert out.startswith("UNKNOWN - Error: ")
    assert "--colour" in out
    assert out.rstrip().endswith("| bandwidth_percent=U%;75;80;0;150")


def test_help_exits_ok(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["check-bigip-bandwidth", "--help"])

    with pytest.raises(SystemExit) as exc:
        main.run()

    assert exc.value.code == 0
    assert "--age-no-alert" in capsys.readouterr().out


def test_debug_makes_a_single_connection(log_line):
    FakeCollector.result = _fetched(log_line)
    calls = []
    original = FakeCollector.fetch_log_line

    def counting_fetch(self, command=None):
        calls.append(self.host)
        return original(self, command)

    FakeCollector.fetch_log_line = counting_fetch
    try:
        result = _invoke("-H", "192.0.2.10", "--debug")
    finally:
        FakeCollector.fetch_log_line = original

    assert result.exit_code == 2
    assert calls == ["192.0.2.10"]
    assert len(FakeCollector.instances) == 1
