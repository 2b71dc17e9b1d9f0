from typing import Any

from watchbuild.models import PluginFile


class BuildError(Exception):
    """A failure tied to one build step, e.g. ``BuildError("Compiling", "unexpected token")``."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class PluginCallbackError(Exception):
    """Raised when a callback-style plugin reports an error that is not an exception."""

    def __init__(self, error: Any) -> None:
        super().__init__(str(error))
        self.error = error


def format_error(file: PluginFile) -> str:
    error = file.error
    code = getattr(error, "code", None) or type(error).__name__
    return f"{code} of {file.path} failed. {error}"
