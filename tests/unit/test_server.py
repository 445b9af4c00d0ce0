from unittest.mock import patch

from pulseboard_backend.app import server


def test_run_serves_the_app_with_local_defaults(monkeypatch):
    for var in ("HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    with patch("pulseboard_backend.app.server.uvicorn.run") as run:
        server.run()

    run.assert_called_once_with(
        "pulseboard_backend.app.main:app", host="127.0.0.1", port=8000, log_level="info"
    )


def test_run_reads_host_and_port_from_env(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9100")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    with patch("pulseboard_backend.app.server.uvicorn.run") as run:
        server.run()

    _, kwargs = run.call_args
    assert kwargs == {"host": "0.0.0.0", "port": 9100, "log_level": "debug"}
