"""Coercion of textual HTTP responses into typed property values."""

import logging
import math
import re

from httpthings.ports.descriptors import ValueType

__all__ = ["PropertyValue", "coerce_value"]

logger = logging.getLogger(__name__)

PropertyValue = str | float | int | bool

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")
# Base 10 only: "0x1A" reads as 0, unlike a radix-sniffing parseInt
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return math.nan
    return float(match.group(1))


def _parse_int(text: str) -> int | float:
    match = _INT_PREFIX.match(text)
    if match is None:
        return math.nan
    return int(match.group(1))


def coerce_value(
    text: str,
    value_type: ValueType,
    log: logging.Logger | None = None,
) -> PropertyValue:
    """Coerce a response body into the declared value type.

    Numeric types parse the longest leading numeric prefix, so trailing
    content is ignored ("42abc" is 42). Text with no numeric prefix yields
    NaN, which is still returned so the caller can publish it.

    Booleans follow string truthiness: the empty string is False and any
    other text is True, including "false" and "0".

    Args:
        text: Raw response body.
        value_type: Declared type of the property.
        log: Logger receiving coercion anomaly warnings.

    Returns:
        The coerced value.
    """
    log = log or logger
    value_type = ValueType(value_type)

    if value_type is ValueType.NUMBER:
        value: PropertyValue = _parse_float(text)
    elif value_type is ValueType.INTEGER:
        value = _parse_int(text)
    elif value_type is ValueType.BOOLEAN:
        return bool(text)
    else:
        return text

    if isinstance(value, float) and math.isnan(value):
        log.warning(f"Response {text!r} is not a valid {value_type.value}, publishing NaN")
    return value
