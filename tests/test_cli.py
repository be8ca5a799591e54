"""Tests for the command line entry point."""

import signal

import pytest

import uptimed.sources
from uptimed import __version__
from uptimed.cli import main
from uptimed.errors import MetricSourceError
from uptimed.scheduler import Scheduler


@pytest.fixture
def fake_host(monkeypatch, source, tmp_path):
    """Route the CLI to the fake source and keep it out of cwd settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(uptimed.sources, "PsutilMetricSource", lambda: source)
    monkeypatch.setattr(signal, "signal", lambda *_args: None)
    return source


@pytest.mark.parametrize("argv", [
    [],
    ["stats.example.net"],
    ["stats.example.net", "servers", "/"],
    ["stats.example.net", "servers", "/", "eth0", "extra"],
])
def test_wrong_argument_count(argv, fake_host, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert out.startswith("Usage: uptimed")
    assert fake_host.calls == []


def test_help(capsys):
    main(["--help"])
    assert "net-rx" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_dry_run_prints_payload(fake_host, monkeypatch, capsys):
    original_run = Scheduler.run

    def run_once_then_stop(self):
        self.run_once()
        self.stop()
        original_run(self)

    monkeypatch.setattr(Scheduler, "run", run_once_then_stop)
    main(["stats.example.net", "servers", "/", "eth0", "--dry-run"])

    out = capsys.readouterr().out
    assert "servers.web1.net-rx:0|g\n" in out
    assert "servers.web1.load:25|g\n" in out


def test_startup_failure_exits(fake_host):
    fake_host.fail = "read_network_counter"
    with pytest.raises(SystemExit) as excinfo:
        main(["stats.example.net", "servers", "/", "eth9"])
    assert excinfo.value.code == 1


def test_runtime_fatal_exits(fake_host, monkeypatch):
    def failing_run(self):
        raise MetricSourceError("Unable to read load average")

    monkeypatch.setattr(Scheduler, "run", failing_run)
    with pytest.raises(SystemExit) as excinfo:
        main(["stats.example.net", "servers", "/", "eth0"])
    assert excinfo.value.code == 1


def test_bad_settings_file(fake_host, tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["stats.example.net", "servers", "/", "eth0", "-c", str(tmp_path / "nope.yaml")])
    assert excinfo.value.code == 1
    assert fake_host.calls == []


def test_unwritable_log_file(fake_host, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("UPTIMED_LOG_FILE", str(tmp_path / "missing" / "uptimed.log"))
    with pytest.raises(SystemExit) as excinfo:
        main(["stats.example.net", "servers", "/", "eth0", "--dry-run"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("uptimed: Cannot open log file")
    assert "Traceback" not in err
    assert fake_host.calls == []


def test_non_ascii_namespace_fails_at_startup(fake_host, monkeypatch):
    started = []
    monkeypatch.setattr(Scheduler, "run", lambda self: started.append(self))
    with pytest.raises(SystemExit) as excinfo:
        main(["stats.example.net", "servérs", "/", "eth0"])
    assert excinfo.value.code == 1
    assert started == []
