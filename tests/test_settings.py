from eideasy_sign.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings


def test_defaults(monkeypatch):
    for name in ("EIDEASY_BASE_URL", "EIDEASY_CLIENT_ID", "EIDEASY_SECRET", "EIDEASY_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    s = Settings()

    assert s.get_base_url() == DEFAULT_BASE_URL
    assert s.EIDEASY_TIMEOUT == DEFAULT_TIMEOUT
    assert s.LOG_LEVEL == "WARNING"
    assert not s.has_client_credentials()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("EIDEASY_BASE_URL", "https://test.eideasy.com/")
    monkeypatch.setenv("EIDEASY_CLIENT_ID", "client")
    monkeypatch.setenv("EIDEASY_SECRET", "secret")
    monkeypatch.setenv("EIDEASY_TIMEOUT", "12.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = Settings()

    assert s.get_base_url() == "https://test.eideasy.com"
    assert s.EIDEASY_TIMEOUT == 12.5
    assert s.LOG_LEVEL == "DEBUG"
    assert s.has_client_credentials()


def test_invalid_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("EIDEASY_TIMEOUT", "soon")

    assert Settings().EIDEASY_TIMEOUT == DEFAULT_TIMEOUT
