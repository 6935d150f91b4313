"""
Tests for configuration system.
"""

from pathlib import Path

from common.config import Config, load_config


def test_config_creation():
    """Test basic Config creation."""
    config = Config()

    assert config.server.name == "gcloud-mcp"
    assert config.server.port == 8000
    assert config.gcloud.request_timeout > 0
    assert config.log_level == "INFO"


def test_config_string_representation():
    """Test that config can be represented as string."""
    config_str = str(Config())

    assert isinstance(config_str, str)
    assert len(config_str) > 0


def test_config_yaml_file_exists():
    """Test that config.yaml file exists."""
    config_path = Path("config.yaml")
    assert config_path.exists(), "config.yaml file should exist in the project root"


def test_load_config_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")

    assert config == Config()


def test_load_config_flattens_logging_block(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "server:\n"
        "  port: 9100\n"
        "gcloud:\n"
        "  request_timeout: 5\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  save_to_file: true\n"
        "  backup_count: 2\n",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.server.port == 9100
    assert config.server.host == "127.0.0.1"
    assert config.gcloud.request_timeout == 5.0
    assert config.log_level == "DEBUG"
    assert config.save_to_file is True
    assert config.backup_count == 2


def test_load_config_empty_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("", encoding="utf-8")

    assert load_config(config_file).server.name == "gcloud-mcp"
