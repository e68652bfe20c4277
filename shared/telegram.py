# Dot Shared Telegram Functions
# Outbound delivery to the Telegram Bot API

import httpx

from .errors import DeliveryFailed
from .helpers import safe_str, MAX_CAPTION_LENGTH, DEFAULT_FILENAME, DEFAULT_MIME


class TelegramClient:
    """Sends feedback to one chat through the Bot API.

    No retries: a failed call raises DeliveryFailed straight away.
    """

    def __init__(self, config, http_client=None):
        self.config = config
        # None means one-shot httpx.post calls, closed after each request
        self.http_client = http_client

    def _url(self, method):
        return f"{self.config.api_base}/bot{self.config.bot_token}/{method}"

    def _post(self, method, **kwargs):
        kwargs.setdefault('timeout', 10.0)
        post = self.http_client.post if self.http_client is not None else httpx.post
        try:
            response = post(self._url(method), **kwargs)
        except httpx.HTTPError as e:
            # str(e) can carry the URL, and with it the token
            raise DeliveryFailed(method, None, e.__class__.__name__) from e

        if not response.is_success:
            raise DeliveryFailed(method, response.status_code, response.text)

        return response

    def send_message(self, text):
        self._post('sendMessage', json={
            'chat_id': self.config.chat_id,
            'text': text,
            'disable_web_page_preview': True
        })

    def send_document(self, filename, mime, content, caption):
        files = {
            'document': (filename or DEFAULT_FILENAME, content, mime or DEFAULT_MIME)
        }
        data = {
            'chat_id': self.config.chat_id,
            'caption': safe_str(caption, MAX_CAPTION_LENGTH),
            'disable_web_page_preview': 'true'
        }
        self._post('sendDocument', data=data, files=files, timeout=30.0)
