class SimDeviceCommandError(Exception):
    """Base error for simulated device command operations."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class CommandValidationError(SimDeviceCommandError):
    """Missing required field or malformed id, detected before touching the store."""


class CommandNotFoundError(SimDeviceCommandError):
    def __init__(self, command_id: int):
        self.command_id = command_id
        super().__init__("NOT_FOUND", f"Sim device command {command_id} not found")


class CommandStoreError(SimDeviceCommandError):
    """A store call failed after the retry budget was spent."""

    def __init__(self, code: str, operation: str, error: Exception):
        self.operation = operation
        self.error = error
        super().__init__(code, f"{operation} failed: {error}")
