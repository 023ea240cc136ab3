from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class ValidationError(HTTPException):
    """Raised when request validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class PreconditionError(HTTPException):
    """Raised when an operation needs state that has not been produced yet."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=message,
        )


class AuthenticationError(HTTPException):
    """Raised when the bearer session token is missing or invalid."""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ServiceUnavailableError(HTTPException):
    """Raised when an optional integration is not configured."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=message,
        )


class ProcessError(HTTPException):
    """A local version-control command failed or could not be started."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.message = message
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )


class UpstreamError(HTTPException):
    """An upstream HTTP API answered with an error or could not be reached."""

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.upstream_status = upstream_status
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=message,
        )
