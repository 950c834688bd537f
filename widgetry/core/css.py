"""CSS value helpers shared by the input, output and layout constructors."""

import re
from typing import Optional, Union

from widgetry.core.exceptions import InvalidCSSUnitError

CSS_UNIT_PATTERN = re.compile(
    r"^(auto|inherit|initial|fit-content|calc\(.*\)|"
    r"((\.\d+)|(\d+(\.\d+)?))(%|in|cm|mm|ch|em|ex|rem|pt|pc|px|vh|vw|vmin|vmax))$"
)


def validate_css_unit(value: Union[int, float, str, None]) -> Optional[str]:
    """
    Normalise a width/height to a CSS length.

    Numbers are taken as pixels; strings must already carry a CSS unit or be
    one of the CSS keywords.

    Raises:
        InvalidCSSUnitError: If the value is not a valid CSS length
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidCSSUnitError(f"'{value}' is not a valid CSS unit")
    if isinstance(value, (int, float)):
        if value < 0:
            raise InvalidCSSUnitError(f"'{value}' is not a valid CSS unit (negative)")
        number = int(value) if float(value).is_integer() else value
        return f"{number}px"
    text = str(value).strip()
    if text.isdigit():
        return f"{text}px"
    if not CSS_UNIT_PATTERN.match(text):
        raise InvalidCSSUnitError(
            f"'{value}' is not a valid CSS unit (e.g., \"100%\", \"400px\", \"auto\")"
        )
    return text


def style_width(width: Union[int, float, str, None]) -> Optional[str]:
    unit = validate_css_unit(width)
    return f"width: {unit};" if unit else None
