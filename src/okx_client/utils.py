"""
Utility functions for OKX client.

Numeric helpers for step rounding and canonical decimal rendering, plus small
response-parsing helpers. All functions are pure.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Dict, Optional, Union

from .constants import FALLBACK_DECIMALS

Number = Union[Decimal, float, int, str]

# Working precision for step arithmetic; the default 28 digits is too narrow
# for large values on fine steps
STEP_PRECISION = 60


def to_decimal(value: Any, default: Optional[Decimal] = Decimal("0")) -> Optional[Decimal]:
    """Convert an API value to Decimal; empty or malformed values give the default."""
    if value is None or value == "":
        return default
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default
    return result if result.is_finite() else default


def parse_amount(value: Number, name: str = "value") -> Decimal:
    """
    Strictly convert a caller-supplied quantity or price.

    Raises:
        ValueError: If the value is empty, unparsable or not finite
    """
    if value is None or isinstance(value, bool) or value == "":
        raise ValueError(f"Invalid {name}: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"Invalid {name}: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Invalid {name}: {value!r} is not a finite number")
    return result


def decimal_places(step_text: str) -> int:
    """Number of digits after the decimal point in a step's own representation."""
    text = str(step_text).strip()
    if "e" in text.lower():
        exponent = to_decimal(text).normalize().as_tuple().exponent
        return max(0, -exponent)
    if "." in text:
        return len(text.split(".", 1)[1])
    return 0


def strip_trailing_zeros(text: str) -> str:
    """Drop trailing zeros and a trailing decimal point; empty becomes "0"."""
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-", "-0"):
        return "0"
    return text


def round_to_step(value: Number, step: Decimal) -> Decimal:
    """Round to the nearest multiple of step, ties away from zero."""
    try:
        with localcontext() as ctx:
            ctx.prec = STEP_PRECISION
            steps = (to_decimal(value) / step).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            return steps * step
    except InvalidOperation as e:
        raise ValueError(f"Cannot align {value} to step {step}: out of range") from e


def format_decimal(value: Decimal, decimals: int) -> str:
    """Render with exactly `decimals` places (no exponent), then strip zeros."""
    quantizer = Decimal(1).scaleb(-decimals)
    try:
        with localcontext() as ctx:
            ctx.prec = STEP_PRECISION
            quantized = value.quantize(quantizer, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Cannot render {value} with {decimals} decimals: out of range") from e
    return strip_trailing_zeros(f"{quantized:.{decimals}f}")


def format_fixed(value: Number, decimals: int = FALLBACK_DECIMALS) -> str:
    """Fixed-precision rendering used when no step is known."""
    return format_decimal(to_decimal(value), decimals)


def format_to_step(value: Number, step_text: str) -> Optional[str]:
    """
    Align value to a step and render it canonically.

    Returns None when the step is missing or not positive so the caller can
    choose its fallback.

    Examples:
        >>> format_to_step(0.127, "0.01")
        '0.13'
        >>> format_to_step(64321.26, "0.1")
        '64321.3'
    """
    step = to_decimal(step_text)
    if step <= 0:
        return None
    return format_decimal(round_to_step(value, step), decimal_places(step_text))


def safe_get(data: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Safely get nested dictionary values using dot notation."""
    keys = path.split(".")
    current = data

    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default

    return current
