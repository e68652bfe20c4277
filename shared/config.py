# Dot Shared Config
# Central configuration for the Dot Feedback relay

import os
from dataclasses import dataclass

# Telegram
TELEGRAM_API_BASE = 'https://api.telegram.org'

# Attachments larger than this are dropped and the text is sent alone
MAX_ATTACHMENT_BYTES = 8 * 1024 * 1024


@dataclass(frozen=True)
class FeedbackConfig:
    bot_token: str = ''
    chat_id: str = ''
    allowed_origin: str = ''
    api_base: str = TELEGRAM_API_BASE
    max_attachment_bytes: int = MAX_ATTACHMENT_BYTES

    @property
    def is_configured(self):
        return bool(self.bot_token and self.chat_id)


def _read_int(name, default):
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"Ignoring {name}={raw!r}: not a whole number, using {default}")
        return default


def load_config():
    """Build a FeedbackConfig from the environment.

    Read at call time so each request sees the current environment.
    """
    return FeedbackConfig(
        bot_token=os.environ.get('BOT_TOKEN', '').strip(),
        chat_id=os.environ.get('CHAT_ID', '').strip(),
        allowed_origin=os.environ.get('ALLOWED_ORIGIN', '').strip(),
        api_base=os.environ.get('TELEGRAM_API_BASE', TELEGRAM_API_BASE).rstrip('/'),
        max_attachment_bytes=_read_int('MAX_ATTACHMENT_BYTES', MAX_ATTACHMENT_BYTES)
    )
