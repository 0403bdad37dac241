from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from dinedash.api import serve


def test_serve_runs_app_with_defaults(monkeypatch) -> None:
    calls: list[tuple[str, dict]] = []
    monkeypatch.delenv("API_HOST", raising=False)
    monkeypatch.delenv("API_PORT", raising=False)
    monkeypatch.delenv("API_WORKERS", raising=False)
    monkeypatch.setattr(serve.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    assert serve.main([]) == 0

    assert calls == [
        (
            "dinedash.api.main:app",
            {"host": "0.0.0.0", "port": 8000, "workers": 1, "log_config": None},
        )
    ]


def test_serve_reads_port_from_environment(monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setenv("API_PORT", "9100")
    monkeypatch.setattr(serve.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    serve.main(["--host", "127.0.0.1"])

    assert calls[0]["host"] == "127.0.0.1"
    assert calls[0]["port"] == 9100
