"""End-to-end tests for the wanderword command using the mock backend."""

import json

import pytest

from wanderword import cli
from wanderword.settings import Settings


@pytest.fixture(autouse=True)
def quiet_cli(isolated_home, monkeypatch):
    """No mock delay, and leave the test runner's logging alone."""
    isolated_home.mkdir(parents=True, exist_ok=True)
    (isolated_home / "settings.json").write_text(json.dumps({"mock_delay": 0}))
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **kw: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda *a, **kw: False)


def test_mock_lookup(isolated_home, capsys):
    assert cli.main(["coffee", "--model", "mock"]) == 0

    out = capsys.readouterr().out
    assert "📖 COFFEE" in out
    assert "RAW JSON" not in out
    assert Settings(isolated_home / "settings.json").get("backend") == "mock"


def test_raw_json_from_env(monkeypatch, capsys):
    monkeypatch.setenv("OUTPUT_JSON", "1")
    assert cli.main(["tea", "--model", "mock"]) == 0

    out = capsys.readouterr().out
    raw = out.split("📦 RAW JSON:\n", 1)[1]
    assert json.loads(raw)["word"] == "tea"


def test_raw_json_flag(capsys):
    assert cli.main(["tea", "--model", "mock", "--json"]) == 0
    assert "📦 RAW JSON:" in capsys.readouterr().out


def test_missing_key(capsys):
    assert cli.main(["coffee", "--model", "openai-api"]) == 1
    assert "API key required for OpenAI API" in capsys.readouterr().err


def test_unknown_mock_word(capsys):
    assert cli.main(["zeitgeist", "--model", "mock"]) == 1
    assert "Mock data not available" in capsys.readouterr().err


def test_word_required():
    with pytest.raises(SystemExit) as exc:
        cli.main(["--model", "mock"])
    assert exc.value.code == 2


def test_defaults_to_gemini_cli(tmp_path):
    parser = cli.build_parser(Settings(tmp_path / "settings.json"))
    assert parser.parse_args(["coffee"]).model == "gemini"


def test_remembers_last_backend(tmp_path):
    settings = Settings(tmp_path / "settings.json")
    settings.set("backend", "ollama", save=False)
    assert cli.build_parser(settings).parse_args(["coffee"]).model == "ollama"


def test_list_backends(monkeypatch, capsys):
    monkeypatch.setattr(
        cli,
        "detect_backends_quick",
        lambda url: {"gemini": True, "claude": False, "codex": False, "qwen": False, "ollama": True},
    )
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")

    assert cli.main(["--list-backends"]) == 0
    lines = {line.split()[0]: line for line in capsys.readouterr().out.splitlines() if line.strip()}
    assert lines["gemini"].endswith("installed")
    assert lines["claude"].endswith("not found")
    assert lines["anthropic-api"].endswith("key set")
    assert lines["openai-api"].endswith("needs key")
    assert lines["mock"].endswith("built-in")


def test_show_log(isolated_home, capsys):
    (isolated_home / "debug.log").write_text("line one\nline two\n")
    assert cli.main(["--show-log"]) == 0
    out = capsys.readouterr().out
    assert str(isolated_home / "debug.log") in out
    assert "line two" in out


def test_wrong_shaped_answer_still_reports(monkeypatch, capsys):
    monkeypatch.setattr(
        "wanderword.backends.MockBackend.fetch",
        lambda self, word, language="English": {"word": "x", "journey": "none"},
    )
    assert cli.main(["coffee", "--model", "mock"]) == 0
    assert "📖 X" in capsys.readouterr().out


def test_wrong_shaped_answer_rejected_when_strict(monkeypatch, capsys):
    monkeypatch.setattr(
        "wanderword.backends.MockBackend.fetch",
        lambda self, word, language="English": {"word": "x", "journey": "none"},
    )
    assert cli.main(["coffee", "--model", "mock", "--strict"]) == 1
    assert "journey must be a list" in capsys.readouterr().err
