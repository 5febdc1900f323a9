# tests/test_main_full_trace.py
import sys, runpy
from pathlib import Path

def test_main_full_trace(capsys, monkeypatch, tmp_path):
    repo_root = Path(__file__).resolve().parents[1]
    main_py = repo_root / "main.py"

    monkeypatch.chdir(repo_root)
    monkeypatch.syspath_prepend(str(repo_root))

    argv = [
        "main.py",
        "--config", str(repo_root / "config" / "process.yaml"),
        "--out", str(tmp_path),
        "--run-id", "trace",
        "--log", "TRACE",
    ]
    monkeypatch.setattr(sys, "argv", argv, raising=False)

    runpy.run_path(str(main_py), run_name="__main__")

    out, err = capsys.readouterr()
    assert "OK | streams=22" in out
    assert "exit ok" in err
    assert (tmp_path / "trace_streams.csv").exists()
