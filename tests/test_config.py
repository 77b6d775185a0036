import json

import pytest

from quizsync.config import AgentConfig
from quizsync.constants import DEFAULT_BASE_URL
from quizsync.main import build_agent, build_parser, load_config


def test_defaults_without_file():
    config = AgentConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.missing_id_policy == "skip"
    assert config.timeout is None
    assert config.seed is None


def test_file_overrides_only_given_values(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"sync": {"api_key": "k1"}, "scraper": {"missing_id_policy": "fail"}}))

    config = AgentConfig(str(settings))

    assert config.api_key == "k1"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.missing_id_policy == "fail"
    assert config.section('logging')['level'] == "INFO"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        AgentConfig(str(tmp_path / "absent.json"))


def test_invalid_policy_rejected():
    with pytest.raises(ValueError):
        AgentConfig.from_dict({"scraper": {"missing_id_policy": "maybe"}})


def test_command_line_overrides_file(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"sync": {"base_url": "http://file.test/api", "api_key": "k1"}}))

    args = build_parser().parse_args([
        "--html", "page.html", "--config", str(settings),
        "--api", "http://cli.test/api", "--seed", "5", "--missing-id-policy", "fail",
    ])
    config = load_config(args)

    assert config.base_url == "http://cli.test/api"
    assert config.api_key == "k1"
    assert config.seed == 5
    assert config.missing_id_policy == "fail"
    assert config.verbose is False
    assert config.token is None


def test_token_flag_replaces_api_key_credential():
    args = build_parser().parse_args(["--html", "page.html", "--api-key", "k1", "--token", "dG9rZW4="])
    config = load_config(args)

    agent = build_agent(config)

    assert config.token == "dG9rZW4="
    assert agent.client.session.headers['Authorization'] == "Basic dG9rZW4="


def test_api_key_credential_without_token():
    args = build_parser().parse_args(["--html", "page.html", "--api-key", "k1"])

    agent = build_agent(load_config(args))

    # base64("k1:")
    assert agent.client.session.headers['Authorization'] == "Basic azE6"
