"""
Free-form formats: printf with a caller-supplied renderer, and passthrough.
"""

from typing import Callable, Optional, Union

from ..errors import ConfigurationError, FormatError
from ..schemas.log_info import LogInfo
from .base import Format


class Printf(Format):
    """
    Renders a record with a caller-supplied function.

    A string result becomes the new message; a LogInfo result replaces the
    record.
    """

    def __init__(self, template: Callable[[LogInfo], Union[str, LogInfo]]):
        if not callable(template):
            raise ConfigurationError("printf template must be callable")
        self.template = template

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        result = self.template(info)
        if isinstance(result, str):
            return info.replace(message=result)
        if isinstance(result, LogInfo):
            return result
        raise FormatError(f"printf template returned {type(result).__name__}, expected str or LogInfo")


def printf(template: Callable[[LogInfo], Union[str, LogInfo]]) -> Printf:
    return Printf(template)


class PassthroughFormat(Format):
    """Returns the record unchanged."""

    input_type = object

    def transform(self, info):
        return info


def passthrough() -> PassthroughFormat:
    return PassthroughFormat()
