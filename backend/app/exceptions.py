"""
Error taxonomy shared by services and routers.

Each error carries the HTTP status code and the `status` string rendered in
the response envelope. Handlers are registered in app.main.
"""


class QuotesAPIError(Exception):
    status_code = 500
    status = "error"


class NotFoundError(QuotesAPIError):
    # Empty result sets answer 400, matching the public API clients rely on
    status_code = 400
    status = "not found"


class BadRequestError(QuotesAPIError):
    status_code = 400
    status = "bad request"


class InternalError(QuotesAPIError):
    status_code = 500
    status = "error"
