"""Unit tests for the main CLI entry point."""

import pytest
from typer.testing import CliRunner

from toolup.arch import Architecture, UnsupportedArchitectureError
from toolup.context import INVALID_CONFIRMATION_MESSAGE
from toolup.main import app, handle_error, run_confirmation

runner = CliRunner()


def test_main_no_args_shows_welcome():
    """Test that running with no arguments shows the usage panel."""
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "toolup confirm" in result.output


def test_version_callback():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "toolup version 1.1.0-dev" in result.output


def test_show_config_callback(monkeypatch):
    monkeypatch.setenv("TOOLUP_SHELL", "/bin/fish")

    result = runner.invoke(app, ["--show-config"])

    assert result.exit_code == 0
    assert "toolup Configuration" in result.output
    assert "Shell: /bin/fish" in result.output
    assert "Rich output" not in result.output


def test_missing_config_file(temp_dir):
    result = runner.invoke(app, ["--config-file", str(temp_dir / "nope.toml"), "arch"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


class TestConfirmCommand:
    """Test the confirm subcommand end to end through stdin and stdout."""

    def test_yes(self):
        result = runner.invoke(app, ["confirm"], input="y\n")
        assert result.exit_code == 0
        assert "Proceed? (Y/n): \n" in result.output

    def test_enter_with_default_no(self):
        result = runner.invoke(app, ["confirm", "--default-no"], input="\n")
        assert result.exit_code == 1
        assert "Proceed? (y/N): \n" in result.output

    def test_end_of_input_uses_default(self):
        result = runner.invoke(app, ["confirm"], input="")
        assert result.exit_code == 0

    def test_message_and_reprompt(self):
        result = runner.invoke(app, ["confirm", "Remove toolchain 6.0?"], input="x\nN\n")

        assert result.exit_code == 1
        assert result.output.index("Remove toolchain 6.0?") < result.output.index(
            "Proceed?"
        )
        assert INVALID_CONFIRMATION_MESSAGE in result.output
        assert result.output.count("Proceed? (Y/n)") == 2


@pytest.mark.asyncio
async def test_run_confirmation_with_captured_io(make_context, capture, fake_executor):
    context = make_context(answers=["n"])

    accepted = await run_confirmation(context, "Uninstall?", default_behavior=True)

    assert accepted is False
    assert capture.lines == ["Uninstall?", "Proceed? (Y/n): \n"]
    assert fake_executor.closed is True


def test_arch_command(mocker):
    mocker.patch("toolup.main.cpu_arch", return_value=Architecture.AARCH64)

    result = runner.invoke(app, ["arch"])

    assert result.exit_code == 0
    assert result.output.strip() == "aarch64"


def test_arch_command_unsupported(mocker):
    mocker.patch(
        "toolup.main.cpu_arch",
        side_effect=UnsupportedArchitectureError("Unsupported processor architecture: i386"),
    )

    result = runner.invoke(app, ["arch"])

    assert result.exit_code == 1
    assert "i386" in result.output


def test_init_config(temp_dir, monkeypatch):
    monkeypatch.setenv("TOOLUP_SHELL", "/bin/zsh")
    target = temp_dir / "out" / "config.toml"

    result = runner.invoke(app, ["init-config", "--path", str(target)])

    assert result.exit_code == 0
    assert target.exists()
    assert 'shell = "/bin/zsh"' in target.read_text()
    assert "Configuration saved to" in result.output


def test_handle_error(capsys):
    """Test error handling."""
    handle_error(ValueError("test error"), debug=False)
    captured = capsys.readouterr()
    assert "Error:" in captured.out
    assert "test error" in captured.out

    try:
        raise ValueError("debug error")
    except ValueError as e:
        handle_error(e, debug=True)

    captured = capsys.readouterr()
    assert "Debug Error Details" in captured.out
    assert "debug error" in captured.out
