from typer.testing import CliRunner

from fitlog.__main__ import app


runner = CliRunner()


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--plain" in result.stdout
    for command in ["list", "show", "add", "edit", "delete", "seed", "exercise", "set", "export", "import"]:
        assert command in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.stdout


def test_json_and_plain_are_mutually_exclusive() -> None:
    result = runner.invoke(app, ["--json", "--plain", "list"])
    assert result.exit_code == 2
    assert "mutually exclusive" in result.stdout


def test_invalid_config_exits_with_usage_code(tmp_path) -> None:
    cfg = tmp_path / "config.json"
    cfg.write_text("{oops")
    result = runner.invoke(app, ["--config", str(cfg), "list"])
    assert result.exit_code == 2
    assert "Config error" in result.stdout
