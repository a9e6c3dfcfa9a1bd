"""
Тесты загрузки конфигурации: defaults -> YAML -> env.
"""

import pytest

from oxidized_wrapper.config import (
    Settings,
    load_settings,
    split_listen,
    validate_settings,
)
from oxidized_wrapper.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def no_config_in_cwd(tmp_path, monkeypatch):
    """Тесты не должны подхватывать ./config.yaml из рабочей директории."""
    monkeypatch.chdir(tmp_path)


class TestDefaults:

    def test_empty_env(self):
        settings = load_settings(environ={})
        assert settings.wrapper_token == ""
        assert settings.netbox_url == ""
        assert settings.netbox_ca_file is None
        assert settings.credentials_file == "./cred-sets.json"
        assert settings.listen == "0.0.0.0:8081"
        assert settings.logging.level == "INFO"
        assert settings.logging.json_format is False


class TestEnv:

    def test_env_values(self):
        settings = load_settings(environ={
            "WRAPPER_TOKEN": "RIGHT",
            "NETBOX_URL": "https://netbox.local/api/dcim/devices/?limit=0",
            "NETBOX_TOKEN": "nbtoken",
            "NETBOX_CA_FILE": "/etc/ssl/netbox.pem",
            "CREDENTIALS_FILE": "/etc/creds.json",
            "LISTEN": "127.0.0.1:9000",
            "LOG_LEVEL": "debug",
            "LOG_JSON": "yes",
        })
        assert settings.wrapper_token == "RIGHT"
        assert settings.netbox_url == "https://netbox.local/api/dcim/devices/?limit=0"
        assert settings.netbox_token == "nbtoken"
        assert settings.netbox_ca_file == "/etc/ssl/netbox.pem"
        assert settings.credentials_file == "/etc/creds.json"
        assert settings.listen_host == "127.0.0.1"
        assert settings.listen_port == 9000
        assert settings.logging.level == "DEBUG"
        assert settings.logging.json_format is True

    def test_empty_env_value_ignored(self):
        settings = load_settings(environ={"CREDENTIALS_FILE": ""})
        assert settings.credentials_file == "./cred-sets.json"

    def test_url_kept_verbatim(self):
        """URL не нормализуется: query string сохраняется."""
        url = "https://netbox.local/api/dcim/devices/?limit=0&tag=oxidized"
        assert load_settings(environ={"NETBOX_URL": url}).netbox_url == url

    def test_invalid_url(self):
        with pytest.raises(ConfigError) as exc_info:
            load_settings(environ={"NETBOX_URL": "netbox.local"})
        assert exc_info.value.key == "netbox_url"

    def test_invalid_listen(self):
        with pytest.raises(ConfigError):
            load_settings(environ={"LISTEN": "localhost"})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError):
            load_settings(environ={"LOG_LEVEL": "verbose"})


class TestYaml:

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / "wrapper.yaml"
        config_file.write_text(
            "netbox_url: https://nb.example.com/api/dcim/devices/\n"
            "listen: 0.0.0.0:8181\n"
            "logging:\n"
            "  level: WARNING\n",
            encoding="utf-8",
        )
        settings = load_settings(str(config_file), environ={})
        assert settings.netbox_url == "https://nb.example.com/api/dcim/devices/"
        assert settings.listen_port == 8181
        assert settings.logging.level == "WARNING"

    def test_env_overrides_yaml(self, tmp_path):
        config_file = tmp_path / "wrapper.yaml"
        config_file.write_text("listen: 0.0.0.0:8181\n", encoding="utf-8")
        settings = load_settings(str(config_file), environ={"LISTEN": "0.0.0.0:9191"})
        assert settings.listen_port == 9191

    def test_config_from_env_var(self, tmp_path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("wrapper_token: fromyaml\n", encoding="utf-8")
        settings = load_settings(environ={"WRAPPER_CONFIG": str(config_file)})
        assert settings.wrapper_token == "fromyaml"

    def test_default_file_in_cwd(self, tmp_path):
        (tmp_path / "config.yaml").write_text("wrapper_token: cwd\n", encoding="utf-8")
        assert load_settings(environ={}).wrapper_token == "cwd"

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(str(tmp_path / "missing.yaml"), environ={})

    def test_broken_yaml(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("listen: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_settings(str(config_file), environ={})

    def test_yaml_not_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(str(config_file), environ={})


class TestListen:

    @pytest.mark.parametrize("address, expected", [
        ("0.0.0.0:8081", ("0.0.0.0", 8081)),
        ("127.0.0.1:80", ("127.0.0.1", 80)),
        ("[::]:8081", ("::", 8081)),
        (":8081", ("0.0.0.0", 8081)),
    ])
    def test_split(self, address, expected):
        assert split_listen(address) == expected

    @pytest.mark.parametrize("address", ["8081", "host:", "host:0", "host:70000", "host:abc"])
    def test_invalid(self, address):
        with pytest.raises(ValueError):
            split_listen(address)


class TestValidateSettings:

    def test_empty_dict_uses_defaults(self):
        assert validate_settings({}) == Settings()

    def test_error_has_location(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_settings({"logging": {"backup_count": 0}})
        assert exc_info.value.key == "logging.backup_count"
