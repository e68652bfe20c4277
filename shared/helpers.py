# Dot Shared Helpers
# Formatting, attachment decoding and CORS helpers for the feedback relay

import base64
import binascii
import re
from dataclasses import dataclass

from .config import MAX_ATTACHMENT_BYTES

TRUNCATION_MARKER = '…'

MAX_TEXT_LENGTH = 3900
MAX_CAPTION_LENGTH = 900

DEFAULT_FILENAME = 'attachment'
DEFAULT_MIME = 'application/octet-stream'

# type/subtype, optional ;key=value parameters, then ;base64,
DATA_URL_PATTERN = re.compile(
    r'^data:([\w.+-]+/[\w.+-]+)(?:;[\w.+-]+=[^;,\s]*)*;base64,(.*)$', re.DOTALL
)


@dataclass
class Attachment:
    filename: str
    mime: str
    content: bytes


def safe_str(value, max_length=4000):
    """Stringify, strip and cut a value to max_length.

    None becomes ''. A cut value gets the truncation marker appended.
    """
    text = '' if value is None else str(value).strip()
    if len(text) > max_length:
        return text[:max_length] + TRUNCATION_MARKER
    return text


def format_message(payload):
    """Render a feedback payload as a single Telegram text block.

    Args:
        payload: Dict with any of type, firstName, lang, email, timestamp,
            userAgent, message

    Returns:
        The text, fields in fixed order, empty fields left out
    """
    lines = [f"📝 Feedback: {safe_str(payload.get('type') or 'unknown', 40)}"]

    if payload.get('firstName'):
        lines.append(f"👤 name: {safe_str(payload['firstName'], 80)}")
    if payload.get('lang'):
        lines.append(f"🌐 lang: {safe_str(payload['lang'], 20)}")
    if payload.get('email'):
        lines.append(f"✉️ email: {safe_str(payload['email'], 200)}")
    if payload.get('timestamp'):
        lines.append(f"⏱ {safe_str(payload['timestamp'], 80)}")
    if payload.get('userAgent'):
        lines.append(f"🖥 {safe_str(payload['userAgent'], 300)}")
    if payload.get('message'):
        lines.append(f"\n{safe_str(payload['message'], 3500)}")

    return safe_str('\n'.join(lines), MAX_TEXT_LENGTH)


def skipped_attachment_note(size):
    return safe_str(f"📎 Attachment skipped: too large, {size} bytes", 200)


def decode_data_url(data_url, name=None, max_bytes=MAX_ATTACHMENT_BYTES):
    """Decode a base64 data URI into an Attachment.

    Args:
        data_url: String of the form data:<mime>;base64,<payload>
        name: Filename to attach (defaults to 'attachment')
        max_bytes: Largest decoded size accepted

    Returns:
        (attachment, None) on success,
        (None, approx_size) when the payload is over max_bytes,
        (None, None) when the string is not a usable data URI
    """
    if not isinstance(data_url, str):
        return None, None

    match = DATA_URL_PATTERN.match(data_url.strip())
    if not match:
        return None, None

    mime, encoded = match.groups()
    approx_size = len(encoded) * 3 // 4
    if approx_size > max_bytes:
        return None, approx_size

    try:
        content = base64.b64decode(encoded)
    except (binascii.Error, ValueError):
        return None, None

    filename = safe_str(name, 200) or DEFAULT_FILENAME
    return Attachment(filename=filename, mime=mime, content=content), None


def origin_allowed(request_origin, allowed_origin):
    """True unless an allowed origin is configured and the request sent a different one."""
    if not allowed_origin or not request_origin:
        return True
    return request_origin.rstrip('/') == allowed_origin.rstrip('/')


def cors_headers(request_origin, allowed_origin):
    """Build the CORS header set for a response.

    The allow-origin header is left out for a mismatched origin so the
    browser blocks the response.
    """
    headers = {
        'Access-Control-Allow-Methods': 'POST, OPTIONS',
        'Access-Control-Allow-Headers': 'Content-Type, Authorization',
        'Access-Control-Max-Age': '86400',
        'Vary': 'Origin'
    }

    if not allowed_origin:
        headers['Access-Control-Allow-Origin'] = '*'
    elif origin_allowed(request_origin, allowed_origin):
        headers['Access-Control-Allow-Origin'] = allowed_origin

    return headers
