"""
Error taxonomy for the front-end.

Raised by the API gateway client, the navigation gate and the views;
translated into responses by the handlers registered in jobboard.main.
"""

from typing import Optional


class JobBoardError(Exception):
    """Base class for all front-end errors."""

    status_code = 500
    title = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(JobBoardError):
    """Token missing, expired or rejected by the API (HTTP 401)."""

    status_code = 401
    title = "Session expired"

    def __init__(self, message: str = "Please log in again"):
        super().__init__(message)


class LoginFailedError(AuthenticationError):
    """Credentials rejected by the API on login. `message` is the API's text."""

    title = "Login failed"


class PermissionDeniedError(JobBoardError):
    """The API refused the action for the current role (HTTP 403)."""

    status_code = 403
    title = "Access denied"

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message)


class ApiError(JobBoardError):
    """Any other non-2xx answer from the API. `message` is the API's own text."""

    title = "Error"

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class ApiUnavailableError(JobBoardError):
    """Transport failure: API unreachable, connection reset, timeout."""

    status_code = 502
    title = "Error"

    def __init__(self, message: str = "The service is unavailable, please try again later"):
        super().__init__(message)


class ApplyNotAllowedError(JobBoardError):
    """Pre-flight eligibility check blocked an apply action."""

    status_code = 409
    title = "Cannot apply"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class NavigationRedirect(Exception):
    """Raised by the route gate; answered with a redirect to `location`."""

    def __init__(self, location: str, notice: Optional[str] = None):
        super().__init__(location)
        self.location = location
        self.notice = notice
