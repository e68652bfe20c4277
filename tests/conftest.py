import pytest

from shared import FeedbackConfig, DeliveryFailed
from feedback.app import create_app


class FakeBot:
    """Records delivery calls instead of talking to Telegram."""

    def __init__(self, fail_with=None):
        self.messages = []
        self.documents = []
        self.fail_with = fail_with

    def __call__(self, config):
        self.config = config
        return self

    def send_message(self, text):
        if self.fail_with:
            raise self.fail_with
        self.messages.append(text)

    def send_document(self, filename, mime, content, caption):
        if self.fail_with:
            raise self.fail_with
        self.documents.append({
            'filename': filename,
            'mime': mime,
            'content': content,
            'caption': caption
        })


@pytest.fixture
def config():
    return FeedbackConfig(bot_token='123:abc', chat_id='-100200', allowed_origin='')


@pytest.fixture
def bot():
    return FakeBot()


@pytest.fixture
def make_client(bot):
    def _make(config, delivery=None):
        app = create_app(config_loader=lambda: config, client_factory=delivery or bot)
        app.config['TESTING'] = True
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client, config):
    return make_client(config)


@pytest.fixture
def failing_bot():
    return FakeBot(fail_with=DeliveryFailed('sendMessage', 400, 'Bad Request: chat not found'))


@pytest.fixture
def fake_bot():
    return FakeBot
