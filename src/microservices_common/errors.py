"""Error taxonomy of the service bootstrap."""


class InitializationError(Exception):
    """Raised by the runtime wiring when a service cannot be brought up.

    Always fatal to the bootstrap: never retried, mapped to a non-zero
    process exit code.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LifecycleError(RuntimeError):
    """Raised on misuse of the service lifecycle (illegal transition, double start)."""
