import io
import os
import tempfile

from audioswitch.cli import main
from audioswitch.config import Config, save_config
from audioswitch.session_io import load_timeline


def _prepare(tmp: str, scenario: str) -> tuple[str, str]:
    config_path = os.path.join(tmp, "audioswitch_config.yml")
    save_config(config_path, Config(log_dir=os.path.join(tmp, "logs")))
    scenario_path = os.path.join(tmp, "scenario.yml")
    with open(scenario_path, "w", encoding="utf-8") as handle:
        handle.write(scenario)
    return config_path, scenario_path


def test_devices_lists_catalog(capsys):
    assert main(["devices", "--config", "missing.yml", "--match", "hdmi"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "HDMI 1 (type: HDMI, priority: 1)",
        "HDMI 2 (type: HDMI, priority: 1)",
        "HDMI 3 (type: HDMI, priority: 1)",
    ]


def test_run_writes_trace(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        config_path, scenario_path = _prepare(
            tmp,
            "events:\n"
            "  - plug USB 1\n"
            "  - plug USB 2\n"
            "  - select USB 1\n"
            "  - select USB 2\n"
            "  - unplug USB 2\n"
            "  - plug USB 2\n",
        )
        out_path = os.path.join(tmp, "trace.timeline.json")
        code = main(["run", scenario_path, "--config", config_path, "--out", out_path])
        records = load_timeline(out_path)
        assert os.path.exists(os.path.join(tmp, "logs", "audioswitch.log"))

    assert code == 0
    assert records[-1].active == "USB 2"
    assert "6. Plug USB 2" in capsys.readouterr().out


def test_run_fails_on_disconnected_select(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        config_path, scenario_path = _prepare(
            tmp, "events:\n  - plug USB 1\n  - select HDMI 1\n"
        )
        code = main(["run", scenario_path, "--config", config_path])

    assert code == 1
    out = capsys.readouterr().out
    assert "event 2 (select HDMI 1)" in out
    assert "not connected" in out


def test_play_reports_errors_and_continues(monkeypatch, capsys):
    with tempfile.TemporaryDirectory() as tmp:
        config_path, _ = _prepare(tmp, "")
        monkeypatch.setattr(
            "sys.stdin",
            io.StringIO("plug Internal\nselect USB 1\nplug USB 1\nhistory\nquit\n"),
        )
        code = main(["play", "--config", config_path])

    assert code == 0
    out = capsys.readouterr().out
    assert "Error: USB 1 is not connected" in out
    assert "2. Plug USB 1" in out


def test_show_prints_trace(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        config_path, scenario_path = _prepare(tmp, "- plug HDMI 1\n")
        out_path = os.path.join(tmp, "trace.timeline.json")
        main(["run", scenario_path, "--config", config_path, "--out", out_path, "--quiet"])
        capsys.readouterr()
        assert main(["show", out_path]) == 0

    out = capsys.readouterr().out
    assert "1. Plug HDMI 1" in out
    assert "active: HDMI 1" in out
    assert "preference: HDMI 1" in out


def test_run_rejects_unknown_strategy(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        config_path, scenario_path = _prepare(tmp, "- plug USB 1\n")
        save_config(
            config_path,
            Config(strategy="round_robin", log_dir=os.path.join(tmp, "logs")),
        )
        code = main(["run", scenario_path, "--config", config_path])

    assert code == 1
    assert "Error: Unknown strategy 'round_robin'" in capsys.readouterr().out


def test_play_rejects_bad_catalog(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        config_path = os.path.join(tmp, "audioswitch_config.yml")
        with open(config_path, "w", encoding="utf-8") as handle:
            handle.write("catalog:\n  firewire: 2\n")
        code = main(["play", "--config", config_path])

    assert code == 1
    assert "bad catalog entry" in capsys.readouterr().out


def test_show_reports_missing_and_malformed_traces(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        assert main(["show", os.path.join(tmp, "missing.timeline.json")]) == 1
        bad_path = os.path.join(tmp, "bad.timeline.json")
        with open(bad_path, "w", encoding="utf-8") as handle:
            handle.write('{"label": "not a list"}')
        assert main(["show", bad_path]) == 1

    out = capsys.readouterr().out
    assert out.count("Error:") == 2
    assert "expected a list of step records" in out
