from typer.testing import CliRunner

from cli import main as cli_main
from core.domain.models import ServerConfig, ServerEntry
from core.errors import AuthError
from core.services.shutdown import SessionOutcome

runner = CliRunner()


def _use_servers(monkeypatch, servers):
    monkeypatch.setattr(cli_main, "load_server_config", lambda settings: ServerConfig(servers=servers))


def test_version_flag():
    for flag in ("-V", "--version"):
        result = runner.invoke(cli_main.app, [flag])

        assert result.exit_code == 0
        assert "Remdit Version: 0.1.0" in result.output
        assert "Commit:" in result.output


def test_help_flag():
    result = runner.invoke(cli_main.app, ["-h"])

    assert result.exit_code == 0
    assert "FILE" in result.output


def test_missing_argument_is_usage_error():
    result = runner.invoke(cli_main.app, [])

    assert result.exit_code == 2


def test_extra_argument_is_usage_error(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("a")
    second.write_text("b")

    result = runner.invoke(cli_main.app, [str(first), str(second)])

    assert result.exit_code == 2


def test_unknown_option_is_usage_error(tmp_path):
    target = tmp_path / "a.txt"
    target.write_text("a")

    result = runner.invoke(cli_main.app, ["--bogus", str(target)])

    assert result.exit_code == 2


def test_missing_file(tmp_path):
    result = runner.invoke(cli_main.app, [str(tmp_path / "nope.txt")])

    assert result.exit_code == 1
    assert "File does not exist" in result.output


def test_directory_is_rejected(tmp_path):
    result = runner.invoke(cli_main.app, [str(tmp_path)])

    assert result.exit_code == 1
    assert "is a directory, not a file" in result.output


def test_edit_url_is_printed(tmp_path, monkeypatch):
    target = tmp_path / "notes.txt"
    target.write_text("hi")
    _use_servers(monkeypatch, [ServerEntry(address="edit.example.com")])
    seen = {}

    async def fake_run(request, *, settings, hooks):
        seen["path"] = request.file_path
        hooks.edit_url(request.file_path.name, "https://x/e/abc")
        return SessionOutcome.PEER_CLOSED

    monkeypatch.setattr(cli_main, "run_edit_session", fake_run)

    result = runner.invoke(cli_main.app, ["-v", str(target)])

    assert result.exit_code == 0
    assert "Edit URL for file notes.txt: https://x/e/abc" in result.output
    assert "DO NOT SHARE TO STRANGERS!" in result.output
    assert seen["path"].is_absolute()


def test_fatal_error_exits_non_zero(tmp_path, monkeypatch):
    target = tmp_path / "notes.txt"
    target.write_text("hi")
    _use_servers(monkeypatch, [ServerEntry(address="edit.example.com")])

    async def fake_run(request, *, settings, hooks):
        raise AuthError("Unauthorized: check your API key")

    monkeypatch.setattr(cli_main, "run_edit_session", fake_run)

    result = runner.invoke(cli_main.app, [str(target)])

    assert result.exit_code == 1
    assert "Unauthorized: check your API key" in result.output


def test_no_servers_exits_non_zero(tmp_path, monkeypatch):
    target = tmp_path / "notes.txt"
    target.write_text("hi")
    _use_servers(monkeypatch, [])
    monkeypatch.delenv("REMDIT_DEFAULT_SERVER", raising=False)
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli_main.app, [str(target)])

    assert result.exit_code == 1
    assert "No servers configured" in result.output
