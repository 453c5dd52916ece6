"""Unit tests for the command line interface."""

from unittest.mock import patch

import pytest

from bedrock_gateway.cli import main


@pytest.fixture(autouse=True)
def quiet_setup():
    """Keep the CLI from reading .env files or installing log handlers."""
    with patch("bedrock_gateway.config.settings.load_dotenv"), \
            patch("bedrock_gateway.cli.configure_logging") as configure:
        yield configure


def test_status_without_credentials(clean_env, capsys):
    exit_code = main(["status"])

    assert exit_code == 1
    assert "not configured" in capsys.readouterr().out


def test_status_with_api_key(clean_env, capsys):
    clean_env.setenv("BEDROCK_API_KEY", "secret-key-value")
    clean_env.setenv("BEDROCK_REGION", "eu-west-1")

    exit_code = main(["status"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "API_KEY" in out
    assert "eu-west-1" in out
    assert "secret-key-value" not in out


def test_log_level_option(clean_env, quiet_setup):
    main(["--log-level", "debug", "status"])

    quiet_setup.assert_called_once_with("debug")


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "stream" in capsys.readouterr().out
