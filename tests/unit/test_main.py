from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def entrypoint(monkeypatch):
    monkeypatch.syspath_prepend(str(REPO_ROOT))
    import main

    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    return main, calls


def test_main_serves_app_object(entrypoint, monkeypatch):
    main, calls = entrypoint
    monkeypatch.setattr("sys.argv", ["main.py", "--host", "0.0.0.0", "--port", "9000"])

    main.main()

    assert calls == [(main.app, {"host": "0.0.0.0", "port": 9000})]


def test_main_reload_uses_import_string(entrypoint, monkeypatch):
    main, calls = entrypoint
    monkeypatch.setattr("sys.argv", ["main.py", "--reload"])

    main.main()

    assert calls == [
        ("pokearena.api.app:app", {"host": "127.0.0.1", "port": 8000, "reload": True})
    ]


def test_help_describes_this_service(entrypoint, monkeypatch, capsys):
    main, _ = entrypoint
    monkeypatch.setattr("sys.argv", ["main.py", "--help"])

    with pytest.raises(SystemExit):
        main.main()

    out = capsys.readouterr().out
    assert "creature catalog, roster and battle history" in out
    assert "campaign" not in out.lower()
