from shared import load_config, MAX_ATTACHMENT_BYTES


def test_load_config_from_environment(monkeypatch):
    monkeypatch.setenv('BOT_TOKEN', '123:abc')
    monkeypatch.setenv('CHAT_ID', '-100200')
    monkeypatch.setenv('ALLOWED_ORIGIN', 'https://site.example')
    monkeypatch.delenv('TELEGRAM_API_BASE', raising=False)
    monkeypatch.delenv('MAX_ATTACHMENT_BYTES', raising=False)

    config = load_config()

    assert config.is_configured
    assert config.allowed_origin == 'https://site.example'
    assert config.api_base == 'https://api.telegram.org'
    assert config.max_attachment_bytes == MAX_ATTACHMENT_BYTES


def test_load_config_missing_credentials(monkeypatch):
    monkeypatch.delenv('BOT_TOKEN', raising=False)
    monkeypatch.setenv('CHAT_ID', '-100200')

    assert not load_config().is_configured


def test_load_config_overrides(monkeypatch):
    monkeypatch.setenv('TELEGRAM_API_BASE', 'http://localhost:8081/')
    monkeypatch.setenv('MAX_ATTACHMENT_BYTES', '1024')

    config = load_config()

    assert config.api_base == 'http://localhost:8081'
    assert config.max_attachment_bytes == 1024


def test_load_config_ignores_unparseable_limit(monkeypatch):
    monkeypatch.setenv('MAX_ATTACHMENT_BYTES', '8MB')

    assert load_config().max_attachment_bytes == MAX_ATTACHMENT_BYTES
