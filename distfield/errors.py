class DistanceFieldError(Exception):
    """Base error; `stage` names the pipeline step that rejected the input."""

    def __init__(self, message: str, stage: str = "core"):
        super().__init__(message)
        self.stage = stage

    def __str__(self):
        return f"[{self.stage}] {super().__str__()}"


class ConfigurationError(DistanceFieldError, ValueError):
    pass


class ResourceExhaustedError(DistanceFieldError, MemoryError):
    pass
