# Dot Feedback
# Relays website feedback (with optional attachment) to a Telegram chat
#
# Accepts JSON or multipart/form-data from the browser, formats the fields
# into one text block and sends it as a message, or as a document caption
# when a file comes with it.

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify, make_response

from shared import (
    load_config,
    TelegramClient,
    Attachment,
    FeedbackError,
    MethodNotAllowed,
    OriginRejected,
    NotConfigured,
    InvalidPayload,
    format_message,
    skipped_attachment_note,
    decode_data_url,
    origin_allowed,
    cors_headers,
    safe_str
)

ALL_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']

FORM_FIELDS = ['type', 'lang', 'email', 'firstName', 'message', 'timestamp', 'userAgent']


def _respond(data, status, headers):
    response = make_response(jsonify(data), status)
    response.headers.update(headers)
    return response


def _read_form():
    """Pull feedback fields and the optional file out of a multipart body."""
    payload = {field: request.form.get(field, '') for field in FORM_FIELDS}
    if not payload['message']:
        payload['message'] = request.form.get('details', '')

    attachment = None
    upload = request.files.get('attachment')
    if upload is not None:
        content = upload.read()
        if upload.filename or content:
            attachment = Attachment(
                filename=upload.filename or 'attachment',
                mime=upload.mimetype or 'application/octet-stream',
                content=content
            )

    return payload, attachment


def _read_json():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise InvalidPayload()

    payload = dict(data)
    if not payload.get('message'):
        payload['message'] = payload.get('details', '')
    return payload


def _resolve_attachment(raw, max_bytes):
    """Turn the JSON attachment field into an Attachment.

    Returns (attachment, skipped_size). Bad input yields (None, None).
    """
    if not isinstance(raw, dict):
        return None, None
    return decode_data_url(raw.get('dataUrl'), raw.get('name'), max_bytes)


def create_app(config_loader=load_config, client_factory=TelegramClient):
    """Build the Flask app.

    Args:
        config_loader: Callable returning a FeedbackConfig, called per request
        client_factory: Callable taking the config and returning an object
            with send_message(text) and send_document(filename, mime, content, caption)
    """
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'service': 'Dot Feedback',
            'version': '1.0'
        })

    @app.route('/', defaults={'path': ''}, methods=ALL_METHODS)
    @app.route('/<path:path>', methods=ALL_METHODS)
    def feedback(path):
        """Relay one feedback submission to Telegram.

        Accepts:
            - JSON: type, lang, email, firstName, message (or details),
              timestamp, userAgent, attachment {name, dataUrl}
            - multipart/form-data: the same fields plus a file field 'attachment'

        Returns:
            - ok: True on delivery
            - delivered: 'message' or 'document'
            - attachment: 'skipped_too_large' when the file was dropped
        """
        origin = request.headers.get('Origin', '')
        try:
            config = config_loader()
        except Exception as e:
            print(f"Error loading config: {e.__class__.__name__}")
            config = None

        headers = cors_headers(origin, config.allowed_origin if config else '')

        if request.method == 'OPTIONS':
            response = make_response('', 204)
            response.headers.update(headers)
            return response

        try:
            if request.method != 'POST':
                raise MethodNotAllowed()

            if config is None:
                raise NotConfigured()

            if not origin_allowed(origin, config.allowed_origin):
                raise OriginRejected()

            if not config.is_configured:
                raise NotConfigured()

            content_type = request.content_type or ''
            skipped_size = None

            if 'multipart/form-data' in content_type:
                payload, attachment = _read_form()
                if attachment and len(attachment.content) > config.max_attachment_bytes:
                    skipped_size = len(attachment.content)
                    attachment = None
            else:
                payload = _read_json()
                attachment, skipped_size = _resolve_attachment(
                    payload.get('attachment'), config.max_attachment_bytes
                )

            if not payload.get('userAgent'):
                payload['userAgent'] = request.headers.get('User-Agent', '')

            text = format_message(payload)
            client = client_factory(config)

            result = {'ok': True}

            if attachment:
                client.send_document(attachment.filename, attachment.mime, attachment.content, text)
                result['delivered'] = 'document'
                print(f"Delivered document '{attachment.filename}' ({len(attachment.content)} bytes)")
            else:
                if skipped_size is not None:
                    text = f"{text}\n\n{skipped_attachment_note(skipped_size)}"
                    result['attachment'] = 'skipped_too_large'
                    print(f"Attachment skipped: {skipped_size} bytes over limit")
                client.send_message(text)
                result['delivered'] = 'message'
                print(f"Delivered message ({len(text)} chars)")

            return _respond(result, 200, headers)

        except FeedbackError as e:
            print(f"Feedback rejected ({e.status_code}): {safe_str(e.message, 300)}")
            return _respond({'ok': False, 'error': e.message}, e.status_code, headers)
        except Exception as e:
            print(f"Error relaying feedback: {e.__class__.__name__}")
            return _respond({'ok': False, 'error': 'Internal server error'}, 500, headers)

    return app


app = create_app()


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
