import pytest

from marketplace_cli.config import Config, get_default_config_path, load_config, validate_config
from marketplace_cli.exceptions import ConfigurationError


def test_defaults_without_file():
    config = load_config(None, environ={})

    assert config.marketplace.host == "gtw.marketplace.cloud.vmware.com"
    assert config.marketplace.api_token is None
    assert config.marketplace.page_size == 20
    assert config.storage.bucket == "cspmarketplaceprd"
    assert config.storage.region == "us-west-2"
    assert config.output.default_format == "table"
    assert config.logging.level == "WARNING"


def test_loads_yaml_file(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text(
        "marketplace:\n"
        "  host: marketplace.example.com\n"
        "  api_token: from-file\n"
        "  timeout: 5\n"
        "  page_size: 50\n"
        "storage:\n"
        "  bucket: my-bucket\n"
        "  region: eu-west-1\n"
        "output:\n"
        "  default_format: json\n"
        "  pretty_json: true\n"
        "logging:\n"
        "  level: DEBUG\n"
    )

    config = load_config(str(config_file), environ={})

    assert config.marketplace.host == "marketplace.example.com"
    assert config.marketplace.api_token == "from-file"
    assert config.marketplace.timeout == 5.0
    assert config.marketplace.page_size == 50
    assert config.marketplace.max_pages == 500
    assert config.storage.bucket == "my-bucket"
    assert config.storage.region == "eu-west-1"
    assert config.output.default_format == "json"
    assert config.output.pretty_json is True
    assert config.logging.level == "DEBUG"


def test_environment_overrides_file(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text("marketplace:\n  api_token: from-file\n")

    config = load_config(str(config_file), environ={
        'CSP_API_TOKEN': 'from-env',
        'MKPCLI_HOST': 'staging.example.com',
        'MKPCLI_STORAGE_BUCKET': 'staging-bucket',
    })

    assert config.marketplace.api_token == "from-env"
    assert config.marketplace.host == "staging.example.com"
    assert config.storage.bucket == "staging-bucket"


def test_empty_file_keeps_defaults(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text("")

    assert load_config(str(config_file), environ={}) == Config()


def test_missing_file_keeps_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.yaml"), environ={}) == Config()


def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text("marketplace: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(str(config_file), environ={})


def test_file_must_hold_a_mapping(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        load_config(str(config_file), environ={})


@pytest.mark.parametrize("section, attribute, value, message", [
    ("output", "default_format", "xml", "Unsupported output format 'xml'"),
    ("marketplace", "page_size", 0, "page_size must be at least 1"),
    ("marketplace", "max_pages", 0, "max_pages must be at least 1"),
    ("marketplace", "host", "", "host must not be empty"),
])
def test_validate_config(section, attribute, value, message):
    config = Config()
    setattr(getattr(config, section), attribute, value)

    with pytest.raises(ConfigurationError, match=message):
        validate_config(config)


def test_default_config_path_prefers_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    assert get_default_config_path() is None

    (tmp_path / "mkpcli.yml").write_text("{}\n")

    assert get_default_config_path() == "mkpcli.yml"


def test_unknown_settings_are_ignored(tmp_path, caplog):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text(
        "marketplace:\n"
        "  hots: typo.example.com\n"
        "telemetry:\n"
        "  enabled: true\n"
    )

    config = load_config(str(config_file), environ={})

    assert config == Config()
    assert "marketplace.hots" in caplog.text
    assert "'telemetry'" in caplog.text


def test_non_numeric_page_size(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text("marketplace:\n  page_size: lots\n")

    with pytest.raises(ConfigurationError, match="Invalid value for marketplace.page_size"):
        load_config(str(config_file), environ={})


def test_section_must_be_a_mapping(tmp_path):
    config_file = tmp_path / "mkpcli.yaml"
    config_file.write_text("storage: my-bucket\n")

    with pytest.raises(ConfigurationError, match="'storage' must be a mapping"):
        load_config(str(config_file), environ={})
