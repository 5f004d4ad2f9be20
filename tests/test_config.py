import pytest
from pydantic import ValidationError

from core.config import KibanaSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # no stray .env from the working directory
    monkeypatch.chdir(tmp_path)
    for name in ("KIBANA_URL", "KIBANA_USERNAME", "KIBANA_PASSWORD", "KIBANA_API_KEY", "KIBANA_HEADERS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = KibanaSettings()
    assert settings.url == ["http://localhost:5601"]
    assert settings.xsrf_header_value == "true"
    assert settings.retry_on_status == [502, 503, 504]
    assert settings.max_retries == 3
    assert settings.enable_metrics is False


def test_comma_separated_urls(monkeypatch):
    monkeypatch.setenv("KIBANA_URL", "http://kb1:5601, http://kb2:5601")
    assert KibanaSettings().url == ["http://kb1:5601", "http://kb2:5601"]


def test_json_urls_and_statuses(monkeypatch):
    monkeypatch.setenv("KIBANA_URL", '["https://kb.example.com"]')
    monkeypatch.setenv("KIBANA_RETRY_ON_STATUS", "429,503")
    settings = KibanaSettings()
    assert settings.url == ["https://kb.example.com"]
    assert settings.retry_on_status == [429, 503]


def test_headers_pairs_and_json(monkeypatch):
    monkeypatch.setenv("KIBANA_HEADERS", "X-Team: ops, Elastic-Api-Version:2023-10-31")
    assert KibanaSettings().headers == {"X-Team": "ops", "Elastic-Api-Version": "2023-10-31"}

    monkeypatch.setenv("KIBANA_HEADERS", '{"X-Team": "sec"}')
    assert KibanaSettings().headers == {"X-Team": "sec"}


def test_malformed_header_pair(monkeypatch):
    monkeypatch.setenv("KIBANA_HEADERS", "no-colon-here")
    with pytest.raises(ValidationError):
        KibanaSettings()


def test_password_requires_username(monkeypatch):
    monkeypatch.setenv("KIBANA_PASSWORD", "secret")
    with pytest.raises(ValidationError, match="password is set without a username"):
        KibanaSettings()


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("KIBANA_API_KEY=abc\nKIBANA_ENABLE_METRICS=true\n")
    settings = KibanaSettings()
    assert settings.api_key == "abc"
    assert settings.enable_metrics is True
