# Dot Shared Errors
# Request-terminal errors, each mapped to an HTTP status


class FeedbackError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MethodNotAllowed(FeedbackError):
    status_code = 405

    def __init__(self, message='Method not allowed'):
        super().__init__(message)


class OriginRejected(FeedbackError):
    status_code = 403

    def __init__(self, message='Origin not allowed'):
        super().__init__(message)


class NotConfigured(FeedbackError):
    status_code = 500

    def __init__(self, message='Server not configured'):
        super().__init__(message)


class InvalidPayload(FeedbackError):
    status_code = 400

    def __init__(self, message='Invalid JSON'):
        super().__init__(message)


class DeliveryFailed(FeedbackError):
    """Telegram rejected the call or could not be reached.

    upstream_status is None when the request never got a response.
    """
    status_code = 500

    def __init__(self, method, upstream_status=None, upstream_body=''):
        if upstream_status is None:
            message = f"Telegram {method} failed: {upstream_body}"
        else:
            message = f"Telegram {method} failed: {upstream_status} {upstream_body}"
        super().__init__(message)
        self.method = method
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
