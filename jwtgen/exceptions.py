class JwtGenError(Exception):
    """Base error for token generation. Always terminal for the CLI."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JwtGenError):
    """Raised when a requested claim value is not allowed."""

    def __init__(self, value: str):
        super().__init__(f'Provided error value "{value}" not valid')
        self.value = value


class SigningError(JwtGenError):
    """Raised when the private key cannot be loaded or signing fails."""
