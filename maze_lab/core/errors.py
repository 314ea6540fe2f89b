class MazeLabError(Exception):
    """Base class for every error raised by maze_lab."""


class ConfigurationError(MazeLabError, ValueError):
    """A run parameter was out of range. Corrected by clamping, never fatal."""

    def __init__(self, field: str, given, used):
        self.field = field
        self.given = given
        self.used = used
        super().__init__(f"{field}={given} is out of range, using {used}")


class UnknownPolicy(MazeLabError, KeyError):
    """No search policy is registered under the requested name."""

    def __init__(self, name: str, known=()):
        self.name = name
        self.known = tuple(known)
        super().__init__(name)

    def __str__(self):
        if self.known:
            return f"Unknown solver '{self.name}'. Available: {', '.join(self.known)}"
        return f"Unknown solver '{self.name}'"


class EngineRuntimeFault(MazeLabError, RuntimeError):
    """An engine raised while stepping. The engine is stopped, the run goes on."""

    def __init__(self, engine_name: str, cause: BaseException):
        self.engine_name = engine_name
        self.cause = cause
        super().__init__(f"ERROR in {engine_name}: {cause}")
