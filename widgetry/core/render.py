"""
Rendering Functions
===================

Pure conversions from Python values to the content of an output
placeholder, paired with the placeholders in ``outputs``:

- render_text / render_print -> text_output, verbatim_text_output
- render_table -> table_output (or ui_output)
- render_data_table -> data_table_output
- render_plot / render_image -> plot_output, image_output
- render_ui -> ui_output
- render_download -> download_button, download_link

``fill_outputs`` places rendered values into a copy of a page, producing a
static snapshot. Nothing here re-executes when inputs change.
"""

import base64
import json
import math
import mimetypes
import pprint
from io import BytesIO
from numbers import Number
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from widgetry.config.logging import get_logger
from widgetry.core.css import validate_css_unit
from widgetry.core.exceptions import (
    InvalidArgumentError,
    OutputTypeError,
    UnknownOutputError,
)
from widgetry.core.tags import HTML, Tag, TagList, collect_dependencies, escape_html
from widgetry.models.schemas import (
    OUTPUT_COMPATIBILITY,
    BindingKind,
    RenderedOutput,
    RenderKind,
)

logger = get_logger(__name__)

TABLE_SPACING = ("xs", "s", "m", "l")
ALIGNMENTS = {"l": "left", "c": "center", "r": "right"}


# Text ---------------------------------------------------------------------

def render_text(*values: Any, sep: str = " ") -> RenderedOutput:
    """Join values into plain text; ``None`` values are skipped."""
    text = sep.join(str(v) for v in values if v is not None)
    return RenderedOutput(kind=RenderKind.TEXT, html=escape_html(text))


def render_print(value: Any, width: int = 80) -> RenderedOutput:
    """Text as it would be printed at a console, for verbatim_text_output."""
    text = value if isinstance(value, str) else pprint.pformat(value, width=width)
    return RenderedOutput(kind=RenderKind.PRINT, html=escape_html(text))


# Tables -------------------------------------------------------------------

def _table_data(data: Any, columns: Optional[Sequence[str]]) -> Tuple[List[str], List[List[Any]]]:
    if hasattr(data, "to_dict") and not isinstance(data, Mapping):
        data = data.to_dict("records")

    if isinstance(data, Mapping):
        names = [str(k) for k in data]
        series = [list(v) for v in data.values()]
        lengths = {len(s) for s in series}
        if len(lengths) > 1:
            raise InvalidArgumentError("All table columns must have the same length")
        return names, [list(row) for row in zip(*series)]

    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise InvalidArgumentError(f"Cannot render {type(data).__name__} as a table")

    rows = list(data)
    if not rows:
        return list(columns or []), []

    if all(isinstance(row, Mapping) for row in rows):
        names: List[str] = list(columns or [])
        if not names:
            for row in rows:
                for key in row:
                    if str(key) not in names:
                        names.append(str(key))
        return names, [[row.get(name) for name in names] for row in rows]

    if any(isinstance(row, Mapping) or not isinstance(row, Sequence) or isinstance(row, str) for row in rows):
        raise InvalidArgumentError("Table rows must all be mappings or all be sequences")

    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise InvalidArgumentError("All table rows must have the same length")
    names = list(columns) if columns else [f"V{i}" for i in range(1, width + 1)]
    if len(names) != width:
        raise InvalidArgumentError(f"Got {len(names)} column names for {width} columns")
    return names, [list(row) for row in rows]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _format_cell(value: Any, digits: Optional[int], na: str) -> str:
    if _is_missing(value):
        return na
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and digits is not None:
        return f"{value:.{digits}f}"
    return str(value)


def _column_alignment(align: Optional[str], count: int, numeric: List[bool]) -> List[str]:
    if align is None:
        return ["right" if is_num else "left" for is_num in numeric]
    letters = list(align)
    if len(letters) == 1:
        letters = letters * count
    if len(letters) != count:
        raise InvalidArgumentError(f"align needs 1 or {count} letters, got '{align}'")
    result = []
    for letter, is_num in zip(letters, numeric):
        if letter == "?":
            result.append("right" if is_num else "left")
        elif letter in ALIGNMENTS:
            result.append(ALIGNMENTS[letter])
        else:
            raise InvalidArgumentError(f"align letters must be l, c, r or ?, got '{letter}'")
    return result


def render_table(
    data: Any,
    columns: Optional[Sequence[str]] = None,
    striped: bool = False,
    hover: bool = False,
    bordered: bool = False,
    spacing: str = "s",
    width: Any = "auto",
    align: Optional[str] = None,
    rownames: bool = False,
    colnames: bool = True,
    digits: Optional[int] = None,
    na: str = "NA",
) -> RenderedOutput:
    """
    Static HTML table for table_output.

    Args:
        data: Records (list of mappings), a mapping of column -> values, a
            list of row sequences, or any object with ``to_dict("records")``
        columns: Column names for row sequences, or column order for records
        striped, hover, bordered: Bootstrap table styles
        spacing: Cell padding, one of xs, s, m, l
        width: Table width as a CSS unit
        align: One letter (l, c, r, ?) for all columns or one per column;
            ``?`` right-aligns numbers and left-aligns everything else
        rownames: Prefix each row with its 1-based number
        colnames: Include the header row
        digits: Decimal places for floats; None leaves them as they are
        na: Text shown for missing values

    Returns:
        RenderedOutput holding the table markup
    """
    if spacing not in TABLE_SPACING:
        raise InvalidArgumentError(f"spacing must be one of {TABLE_SPACING}, got '{spacing}'")
    if digits is not None and digits < 0:
        raise InvalidArgumentError("digits must not be negative")

    names, rows = _table_data(data, columns)
    if rownames:
        names = [""] + names
        rows = [[index] + row for index, row in enumerate(rows, start=1)]

    numeric = [
        bool(rows) and all(
            _is_missing(row[i]) or (isinstance(row[i], Number) and not isinstance(row[i], bool)) for row in rows
        )
        for i in range(len(names))
    ]
    alignment = _column_alignment(align, len(names), numeric) if names else []

    table = Tag(
        "table",
        class_=[
            "table",
            "shiny-table",
            "table-striped" if striped else None,
            "table-hover" if hover else None,
            "table-bordered" if bordered else None,
            f"spacing-{spacing}",
        ],
        style=f"width: {validate_css_unit(width)};",
    )
    if colnames:
        table.append(
            Tag(
                "thead",
                Tag(
                    "tr",
                    *[Tag("th", name, style=f"text-align: {side};") for name, side in zip(names, alignment)],
                ),
            )
        )
    body = Tag("tbody")
    for row in rows:
        body.append(
            Tag(
                "tr",
                *[
                    Tag("td", _format_cell(cell, digits, na), style=f"text-align: {side};")
                    for cell, side in zip(row, alignment)
                ],
            )
        )
    table.append(body)
    return RenderedOutput(kind=RenderKind.TABLE, html=table.render())


def _json_cell(value: Any) -> Any:
    if _is_missing(value):
        return None
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def render_data_table(
    data: Any,
    columns: Optional[Sequence[str]] = None,
    options: Optional[Dict[str, Any]] = None,
) -> RenderedOutput:
    """Columns and rows as a JSON payload for the client-side data table."""
    names, rows = _table_data(data, columns)
    payload = {
        "columns": names,
        "data": [[_json_cell(cell) for cell in row] for row in rows],
        "options": {"pageLength": 25, **(options or {})},
    }
    return RenderedOutput(kind=RenderKind.DATA_TABLE, payload=payload)


# Graphics -----------------------------------------------------------------

def sniff_content_type(data: bytes) -> Optional[str]:
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    head = data[:256].lstrip()
    if head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in data[:1024]):
        return "image/svg+xml"
    return None


def _data_uri(data: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def _image_tag(src: str, width: Any, height: Any, alt: str) -> Tag:
    styles = []
    if width is not None:
        styles.append(f"width: {validate_css_unit(width)};")
    if height is not None:
        styles.append(f"height: {validate_css_unit(height)};")
    return Tag("img", src=src, alt=alt, style=" ".join(styles) or None)


def render_plot(
    image: Any,
    width: Any = None,
    height: Any = None,
    alt: str = "Plot",
    dpi: int = 96,
) -> RenderedOutput:
    """
    Embed a plot as a data URI image.

    ``image`` is PNG/JPEG/SVG bytes, a path to such a file, or a figure-like
    object with a ``savefig`` method (saved as PNG).
    """
    if hasattr(image, "savefig"):
        buffer = BytesIO()
        image.savefig(buffer, format="png", dpi=dpi)
        data = buffer.getvalue()
    elif isinstance(image, (bytes, bytearray)):
        data = bytes(image)
    elif isinstance(image, (str, Path)):
        data = Path(image).read_bytes()
    else:
        raise InvalidArgumentError(f"Cannot render {type(image).__name__} as a plot")

    content_type = sniff_content_type(data)
    if content_type is None:
        raise InvalidArgumentError("Plot data is not a PNG, JPEG, GIF or SVG image")
    tag = _image_tag(_data_uri(data, content_type), width, height, alt)
    return RenderedOutput(kind=RenderKind.PLOT, html=tag.render())


def render_image(
    src: Union[str, Path, bytes],
    content_type: Optional[str] = None,
    width: Any = None,
    height: Any = None,
    alt: str = "",
) -> RenderedOutput:
    """
    Show an existing image: a URL is linked directly, a file path or raw
    bytes are embedded as a data URI.
    """
    if isinstance(src, str) and src.startswith(("http://", "https://", "data:")):
        url = src
    else:
        if isinstance(src, (bytes, bytearray)):
            data = bytes(src)
        else:
            path = Path(src)
            data = path.read_bytes()
            content_type = content_type or mimetypes.guess_type(path.name)[0]
        content_type = content_type or sniff_content_type(data)
        if content_type is None:
            raise InvalidArgumentError("render_image needs a content_type for this image")
        url = _data_uri(data, content_type)
    tag = _image_tag(url, width, height, alt)
    return RenderedOutput(kind=RenderKind.IMAGE, html=tag.render())


# Markup and downloads -----------------------------------------------------

def render_ui(*children: Any) -> RenderedOutput:
    """Markup generated by the application, for ui_output."""
    content = TagList(*children)
    return RenderedOutput(
        kind=RenderKind.UI,
        html=content.render(),
        dependencies=collect_dependencies(content),
    )


def render_download(href: str, filename: Optional[str] = None) -> RenderedOutput:
    """Point a download button or link at the file to fetch."""
    if not href:
        raise InvalidArgumentError("render_download needs a non-empty href")
    return RenderedOutput(
        kind=RenderKind.DOWNLOAD,
        attributes={"href": href, "download": filename or ""},
    )


# Filling placeholders -----------------------------------------------------

def fill_outputs(page: Union[Tag, TagList], values: Mapping[str, RenderedOutput]) -> Union[Tag, TagList]:
    """
    Return a copy of ``page`` with each output placeholder filled.

    Raises:
        UnknownOutputError: If a value targets an id with no placeholder
        OutputTypeError: If a value's kind does not fit its placeholder
    """
    filled = page.copy() if isinstance(page, Tag) else TagList(*[c.copy() if isinstance(c, Tag) else c for c in page])
    roots = [filled] if isinstance(filled, Tag) else [c for c in filled if isinstance(c, Tag)]

    placeholders: Dict[str, Tag] = {}
    for root in roots:
        for tag in root.walk():
            if tag.binding is not None and tag.binding.kind == BindingKind.OUTPUT:
                placeholders.setdefault(tag.binding.id, tag)

    for output_id, rendered in values.items():
        if output_id not in placeholders:
            raise UnknownOutputError(f"No output placeholder with id '{output_id}'")
        if not isinstance(rendered, RenderedOutput):
            raise OutputTypeError(
                f"Value for output '{output_id}' must come from a render function, got {type(rendered).__name__}"
            )
        target = placeholders[output_id]
        accepted = OUTPUT_COMPATIBILITY[target.binding.output_kind]
        if rendered.kind not in accepted:
            raise OutputTypeError(
                f"Output '{output_id}' is a {target.binding.output_kind.value} placeholder and cannot show "
                f"{rendered.kind.value} content (use {' or '.join('render_' + k.value for k in accepted)})"
            )

        if rendered.html is not None:
            target.children = [HTML(rendered.html)]
        if rendered.payload is not None:
            target.children = [
                Tag(
                    "script",
                    HTML(json.dumps(rendered.payload).replace("</", "<\\/")),
                    type="application/json",
                    data_for=output_id,
                )
            ]
        target.attrs.update(rendered.attributes)
        target.add_dependency(*rendered.dependencies)
        target.metadata["filled"] = True

    logger.debug("Filled output placeholders", count=len(values))
    return filled
