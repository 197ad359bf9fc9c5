"""
The format contract and the chain combinator.

A format is a single transformation step. ``transform`` returns the value to
hand to the next format, or None to drop the record: the chain stops and
nothing is emitted.
"""

import logging
from typing import Any, Callable, Optional

from ..errors import ConfigurationError
from ..schemas.log_info import LogInfo

logger = logging.getLogger(__name__)


class Format:
    """
    Base class for every format.

    Subclasses implement ``transform``. ``input_type`` tags the type of value
    the format consumes and produces; chaining checks that neighbouring
    formats agree on it. ``object`` accepts anything.
    """

    input_type: type = LogInfo

    def transform(self, info: Any) -> Optional[Any]:
        raise NotImplementedError

    def chain(self, next_format: 'Format') -> 'ChainedFormat':
        """
        Run ``next_format`` on whatever this format returns.

        Args:
            next_format: Format to run second

        Returns:
            Combined format

        Raises:
            ConfigurationError: If the two formats work on different types
        """
        return ChainedFormat(self, next_format)

    def __call__(self, info: Any) -> Optional[Any]:
        return self.transform(info)


def _resolve_type(first: Format, second: Format) -> type:
    if first.input_type is object:
        return second.input_type
    if second.input_type is object or second.input_type is first.input_type:
        return first.input_type
    raise ConfigurationError(
        f"Cannot chain {type(first).__name__} ({first.input_type.__name__}) "
        f"with {type(second).__name__} ({second.input_type.__name__})"
    )


class ChainedFormat(Format):
    """Two formats run in order, stopping early when the first drops."""

    def __init__(self, first: Format, next_format: Format):
        self.input_type = _resolve_type(first, next_format)
        self.first = first
        self.next = next_format

    def transform(self, info: Any) -> Optional[Any]:
        result = self.first.transform(info)
        if result is None:
            return None
        return self.next.transform(result)


class FunctionFormat(Format):
    """Wraps a plain callable as a format."""

    def __init__(self, fn: Callable[[Any], Optional[Any]], input_type: type = LogInfo):
        if not callable(fn):
            raise ConfigurationError(f"Format function must be callable, got {type(fn).__name__}")
        self.fn = fn
        self.input_type = input_type

    def transform(self, info: Any) -> Optional[Any]:
        return self.fn(info)


def create_format(fn: Callable[[Any], Optional[Any]], input_type: type = LogInfo) -> FunctionFormat:
    """
    Turn a function into a format.

    The function receives the value and returns the transformed value, or
    None to drop it. This is the usual way to write filters::

        hide_private = create_format(
            lambda info: None if info.meta.get('private') else info
        )

    Args:
        fn: Transformation function
        input_type: Type of value the function consumes and produces

    Returns:
        Format wrapping ``fn``
    """
    return FunctionFormat(fn, input_type)


def chain(*formats: Format) -> Format:
    """
    Compose formats left to right.

    ``chain(a, b, c)`` behaves exactly like ``a.chain(b).chain(c)``.

    Args:
        formats: Formats in the order they should run

    Returns:
        Combined format (the format itself when only one is given)

    Raises:
        ConfigurationError: If no formats are given or neighbouring formats
            work on different types
    """
    if not formats:
        raise ConfigurationError("chain() requires at least one format")

    combined = formats[0]
    for next_format in formats[1:]:
        combined = combined.chain(next_format)

    logger.debug(f"Built chain of {len(formats)} formats")
    return combined
