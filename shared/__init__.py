# Dot Shared Module
# Common functions used by the Dot Feedback relay

from .config import (
    FeedbackConfig,
    load_config,
    MAX_ATTACHMENT_BYTES
)

from .errors import (
    FeedbackError,
    MethodNotAllowed,
    OriginRejected,
    NotConfigured,
    InvalidPayload,
    DeliveryFailed
)

from .helpers import (
    Attachment,
    safe_str,
    format_message,
    skipped_attachment_note,
    decode_data_url,
    origin_allowed,
    cors_headers
)

from .telegram import TelegramClient
