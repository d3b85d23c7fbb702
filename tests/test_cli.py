"""
Tests for the command-line interface.
"""

import json
import logging

import pytest

from sobject_codegen.cli import build_config, create_parser, main

TIMESTAMP = "2024-01-01 00:00:00 UTC"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers attached by setup_logging."""
    yield
    logger = logging.getLogger("sobject_codegen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def no_credentials_env(monkeypatch):
    for name in (
        "SALESFORCE_CLIENT_ID",
        "SALESFORCE_CLIENT_SECRET",
        "SALESFORCE_USERNAME",
        "SALESFORCE_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)


class TestGenerateCommand:
    """Tests for the generate subcommand."""

    def test_generate_from_metadata_file(self, metadata_file, tmp_path):
        out = tmp_path / "out"

        exit_code = main(
            [
                "generate",
                "--metadata-file", str(metadata_file),
                "--output-dir", str(out),
                "--package-name", "com.example.dto",
                "--timestamp", TIMESTAMP,
            ]
        )

        assert exit_code == 0
        pkg_dir = out / "com" / "example" / "dto"
        assert sorted(p.name for p in pkg_dir.iterdir()) == [
            "Account.java",
            "Contact.java",
            "IndustryEnum.java",
            "QueryRecordsAccount.java",
            "QueryRecordsContact.java",
        ]

    def test_generate_python_with_filters(self, metadata_file, tmp_path):
        exit_code = main(
            [
                "generate",
                "-l", "py",
                "--metadata-file", str(metadata_file),
                "-o", str(tmp_path),
                "--include", "Account",
                "--include", "Contact",
                "--exclude", "Contact",
            ]
        )

        assert exit_code == 0
        pkg_dir = tmp_path / "salesforce" / "dto"
        assert sorted(p.name for p in pkg_dir.iterdir()) == [
            "Account.py",
            "IndustryEnum.py",
            "QueryRecordsAccount.py",
        ]

    def test_invalid_package_name(self, metadata_file, tmp_path):
        exit_code = main(
            [
                "generate",
                "--metadata-file", str(metadata_file),
                "-o", str(tmp_path),
                "--package-name", "Bad.Package",
            ]
        )

        assert exit_code == 1
        assert list(tmp_path.iterdir()) == [metadata_file]

    def test_unknown_language(self, metadata_file):
        assert main(["generate", "-l", "cobol", "--metadata-file", str(metadata_file)]) == 1

    def test_missing_credentials(self, no_credentials_env, tmp_path):
        assert main(["generate", "-o", str(tmp_path)]) == 1

    def test_missing_metadata_file(self, tmp_path):
        assert main(["generate", "--metadata-file", str(tmp_path / "none.json")]) == 1

    def test_config_file(self, metadata_file, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "metadata_file": str(metadata_file),
                    "output_dir": str(tmp_path / "gen"),
                    "package_name": "com.acme",
                    "include_pattern": "Cont.*",
                }
            ),
            encoding="utf-8",
        )

        assert main(["generate", "--config", str(config_path)]) == 0
        assert (tmp_path / "gen" / "com" / "acme" / "Contact.java").exists()
        assert not (tmp_path / "gen" / "com" / "acme" / "Account.java").exists()


class TestBuildConfig:
    """Tests for turning arguments into a GeneratorConfig."""

    def test_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("SALESFORCE_CLIENT_ID", "env-id")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "env-password")
        args = create_parser().parse_args(["generate", "--client-id", "cli-id"])

        config = build_config(args)

        assert config.client_id == "cli-id"
        assert config.password == "env-password"

    def test_connection_options(self, no_credentials_env):
        args = create_parser().parse_args(
            ["generate", "--api-version", "60.0", "--login-url", "https://test.salesforce.com", "--timeout", "15"]
        )

        config = build_config(args)

        assert config.version == "60.0"
        assert config.login_url == "https://test.salesforce.com"
        assert config.timeout == 15.0

    def test_unset_options_keep_defaults(self, no_credentials_env):
        config = build_config(create_parser().parse_args(["generate"]))

        assert config.package_name == "org.fusesource.camel.salesforce.dto"
        assert config.includes == []
        assert config.generated_at is None


class TestOtherCommands:
    """Tests for list-languages and the bare command."""

    def test_list_languages(self, capsys):
        assert main(["list-languages"]) == 0

        output = capsys.readouterr().out
        assert "java" in output
        assert "python" in output

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_log_file(self, metadata_file, tmp_path):
        log_file = tmp_path / "run.log"

        main(
            [
                "--verbose",
                "--log-file", str(log_file),
                "generate",
                "--metadata-file", str(metadata_file),
                "-o", str(tmp_path / "out"),
            ]
        )

        log_text = log_file.read_text(encoding="utf-8")
        assert "Generating classes for all 2 Objects" in log_text
        assert "Successfully generated 5 files" in log_text
