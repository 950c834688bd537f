"""
Input Controls
==============

Constructors for the widgets that collect a value from the user. Every
control is wrapped in a ``form-group shiny-input-container`` div which is
bound to the control's input id, so pages can check that ids are unique.
"""

import json
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from widgetry.config.logging import get_logger
from widgetry.core.css import style_width, validate_css_unit
from widgetry.core.dependencies import (
    datepicker_dependency,
    font_awesome_dependency,
    ion_rangeslider_dependency,
    selectize_dependency,
)
from widgetry.core.exceptions import InvalidArgumentError
from widgetry.core.ids import validate_id
from widgetry.core.tags import Tag, div, span
from widgetry.models.schemas import BindingKind

logger = get_logger(__name__)

Number = Union[int, float]
SliderValue = Union[Number, date, datetime]
Choices = Union[Sequence[Any], Mapping[str, Any]]

DATE_STARTVIEWS = ("month", "year", "decade")
TEXTAREA_RESIZE = ("none", "both", "horizontal", "vertical")


# Shared building blocks ---------------------------------------------------

def shiny_input_label(input_id: str, label: Any = None) -> Tag:
    """Label tag of an input control; ``None`` keeps an empty, hidden label."""
    tag = Tag("label", class_="control-label", id=f"{input_id}-label", for_=input_id)
    if label is None:
        tag.add_class("shiny-label-null")
    else:
        tag.append(label)
    return tag


def _input_container(input_id: str, *children: Any, width: Any = None, **attrs: Any) -> Tag:
    extra_class = attrs.pop("class_", None)
    tag = div(*children, **attrs)
    tag.add_class("form-group", "shiny-input-container", extra_class)
    width_style = style_width(width)
    if width_style:
        tag.set_attrs(style=width_style)
    return tag.bind(BindingKind.INPUT, input_id)


def _json_bool(value: bool) -> str:
    return "true" if value else "false"


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def icon(name: str, lib: str = "font-awesome", class_: Optional[str] = None) -> Tag:
    """Icon for buttons and tab titles."""
    if lib == "font-awesome":
        tag = Tag("i", class_=f"fa fa-{name}", role="presentation", aria_label=f"{name} icon")
        tag.add_dependency(font_awesome_dependency())
    elif lib == "glyphicon":
        tag = Tag("i", class_=f"glyphicon glyphicon-{name}", role="presentation", aria_label=f"{name} icon")
    else:
        raise InvalidArgumentError(f"Unknown icon library '{lib}'; use 'font-awesome' or 'glyphicon'")
    tag.add_class(class_)
    return tag


# Free text ----------------------------------------------------------------

def text_input(
    input_id: str,
    label: Any,
    value: str = "",
    width: Any = None,
    placeholder: Optional[str] = None,
) -> Tag:
    """Single line text box."""
    validate_id(input_id)
    return _input_container(
        input_id,
        shiny_input_label(input_id, label),
        Tag("input", id=input_id, type="text", class_="form-control", value=value, placeholder=placeholder),
        width=width,
    )


def password_input(
    input_id: str,
    label: Any,
    value: str = "",
    width: Any = None,
    placeholder: Optional[str] = None,
) -> Tag:
    """Text box whose contents are masked."""
    validate_id(input_id)
    return _input_container(
        input_id,
        shiny_input_label(input_id, label),
        Tag("input", id=input_id, type="password", class_="form-control", value=value, placeholder=placeholder),
        width=width,
    )


def text_area_input(
    input_id: str,
    label: Any,
    value: str = "",
    width: Any = None,
    height: Any = None,
    cols: Optional[int] = None,
    rows: Optional[int] = None,
    placeholder: Optional[str] = None,
    resize: Optional[str] = None,
) -> Tag:
    """Multi line text box."""
    validate_id(input_id)
    if resize is not None and resize not in TEXTAREA_RESIZE:
        raise InvalidArgumentError(f"resize must be one of {TEXTAREA_RESIZE}, got '{resize}'")

    styles = []
    if width is not None:
        styles.append(f"width: {validate_css_unit(width)};")
    if height is not None:
        styles.append(f"height: {validate_css_unit(height)};")
    if resize is not None:
        styles.append(f"resize: {resize};")

    area = Tag(
        "textarea",
        value or None,
        id=input_id,
        class_="form-control",
        placeholder=placeholder,
        style=" ".join(styles) or None,
        rows=rows,
        cols=cols,
    )
    # Width applies to both the container and the textarea
    return _input_container(
        input_id,
        shiny_input_label(input_id, label),
        area,
        width=width,
    )


# Numbers, sliders and dates -----------------------------------------------

def numeric_input(
    input_id: str,
    label: Any,
    value: Optional[Number],
    min: Optional[Number] = None,
    max: Optional[Number] = None,
    step: Optional[Number] = None,
    width: Any = None,
) -> Tag:
    """Box that only accepts numbers."""
    validate_id(input_id)
    for name, given in (("value", value), ("min", min), ("max", max), ("step", step)):
        if given is not None and not _is_number(given):
            raise InvalidArgumentError(f"numeric_input {name} must be a number, got {given!r}")
    if min is not None and max is not None and min > max:
        raise InvalidArgumentError(f"numeric_input min ({min}) must not exceed max ({max})")
    if step is not None and step <= 0:
        raise InvalidArgumentError("numeric_input step must be positive")

    field = Tag(
        "input",
        id=input_id,
        type="number",
        class_="form-control",
        value=_format_number(value) if value is not None else "",
        min=_format_number(min) if min is not None else None,
        max=_format_number(max) if max is not None else None,
        step=_format_number(step) if step is not None else None,
    )
    return _input_container(input_id, shiny_input_label(input_id, label), field, width=width)


def _to_epoch_ms(value: Union[date, datetime]) -> int:
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    else:
        moment = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def _slider_data_type(values: Sequence[Any]) -> str:
    if all(isinstance(v, datetime) for v in values):
        return "datetime"
    if all(isinstance(v, date) and not isinstance(v, datetime) for v in values):
        return "date"
    if all(_is_number(v) for v in values):
        return "number"
    raise InvalidArgumentError(
        "slider_input min, max and value must all be numbers, all dates or all datetimes"
    )


def _pretty_step(raw: float) -> float:
    """Round a raw step up to 1, 2 or 5 times a power of ten."""
    if raw <= 0:
        return 1
    magnitude = 10 ** math.floor(math.log10(raw))
    for factor in (1, 2, 5, 10):
        if raw <= factor * magnitude:
            step = factor * magnitude
            return int(step) if float(step).is_integer() else step
    return 10 * magnitude


def find_step_size(min: Number, max: Number, step: Optional[Number] = None) -> Number:
    """Default slider step: 1 for integer ranges of at least 2, else about 1/100 of the range."""
    if step is not None:
        return step
    span_ = max - min
    if span_ >= 2 and float(min).is_integer() and float(max).is_integer():
        return 1
    return _pretty_step(span_ / 100) if span_ > 0 else 1


def slider_input(
    input_id: str,
    label: Any,
    min: SliderValue,
    max: SliderValue,
    value: Union[SliderValue, Sequence[SliderValue]],
    step: Optional[Number] = None,
    round: bool = False,
    ticks: bool = True,
    animate: Union[bool, Dict[str, Any]] = False,
    width: Any = None,
    sep: str = ",",
    pre: Optional[str] = None,
    post: Optional[str] = None,
    time_format: Optional[str] = None,
    drag_range: bool = True,
) -> Tag:
    """
    Slider for a single number, or a range when ``value`` has two elements.

    Numbers, dates and datetimes are supported; dates travel to the client as
    epoch milliseconds.

    Raises:
        InvalidArgumentError: If min exceeds max, the value lies outside
            [min, max] or the value types are mixed
    """
    validate_id(input_id)

    values = list(value) if isinstance(value, (list, tuple)) else [value]
    if len(values) not in (1, 2):
        raise InvalidArgumentError("slider_input value must have one or two elements")
    is_range = len(values) == 2

    data_type = _slider_data_type([min, max] + values)
    if min > max:
        raise InvalidArgumentError(f"slider_input min ({min}) must not exceed max ({max})")
    for v in values:
        if v < min or v > max:
            raise InvalidArgumentError(f"slider_input value {v} is outside [{min}, {max}]")
    if is_range and values[0] > values[1]:
        raise InvalidArgumentError("slider_input range start must not exceed its end")

    if data_type == "number":
        encode = _format_number
        low, high = min, max
        step_value = find_step_size(min, max, step)
    else:
        encode = lambda v: str(_to_epoch_ms(v))  # noqa: E731
        low, high = _to_epoch_ms(min), _to_epoch_ms(max)
        unit = 86400000 if data_type == "date" else 1000
        step_value = (step if step is not None else 1) * unit

    if step_value <= 0:
        raise InvalidArgumentError("slider_input step must be positive")

    n_steps = (high - low) / step_value if step_value else 0
    scale_factor = math.ceil(n_steps / 10) if n_steps > 0 else 1
    n_ticks = n_steps / scale_factor

    attrs: Dict[str, Any] = {
        "class_": "js-range-slider",
        "id": input_id,
        "data_skin": "shiny",
        "data_type": "double" if is_range else None,
        "data_min": encode(min),
        "data_max": encode(max),
        "data_from": encode(values[0]),
        "data_to": encode(values[1]) if is_range else None,
        "data_step": _format_number(step_value),
        "data_grid": _json_bool(ticks),
        "data_grid_num": _format_number(float(n_ticks)),
        "data_grid_snap": "false",
        "data_prettify_separator": sep,
        "data_prettify_enabled": _json_bool(sep != ""),
        "data_prefix": pre,
        "data_postfix": post,
        "data_keyboard": "true",
        "data_round": "true" if round else None,
        "data_drag_interval": _json_bool(drag_range) if is_range else None,
        "data_data_type": data_type,
        "data_time_format": time_format,
    }
    slider = Tag("input", **attrs)

    children: List[Any] = [shiny_input_label(input_id, label), slider]
    if animate:
        options = animate if isinstance(animate, dict) else {}
        children.append(
            div(
                Tag(
                    "a",
                    span("Play", class_="play"),
                    span("Pause", class_="pause"),
                    href="#",
                    class_="slider-animate-button",
                    data_target_id=input_id,
                    data_interval=str(options.get("interval", 1000)),
                    data_loop=_json_bool(options.get("loop", False)),
                ),
                class_="slider-animate-container",
            )
        )

    tag = _input_container(input_id, *children, width=width)
    tag.add_dependency(ion_rangeslider_dependency())
    return tag


def _coerce_date(value: Union[str, date, None], name: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value).isoformat()
        except ValueError:
            raise InvalidArgumentError(f"{name} must be an ISO date (yyyy-mm-dd), got '{value}'")
    raise InvalidArgumentError(f"{name} must be a date or ISO date string, got {value!r}")


def _check_date_options(startview: str, weekstart: int) -> None:
    if startview not in DATE_STARTVIEWS:
        raise InvalidArgumentError(f"startview must be one of {DATE_STARTVIEWS}, got '{startview}'")
    if not isinstance(weekstart, int) or not 0 <= weekstart <= 6:
        raise InvalidArgumentError(f"weekstart must be an integer between 0 and 6, got {weekstart!r}")


def _date_field(
    initial: Optional[str],
    min: Optional[str],
    max: Optional[str],
    format: str,
    startview: str,
    weekstart: int,
    language: str,
    autoclose: bool,
    **extra: Any,
) -> Tag:
    return Tag(
        "input",
        type="text",
        class_="form-control",
        title=f"Date format: {format}",
        data_date_language=language,
        data_date_week_start=str(weekstart),
        data_date_format=format,
        data_date_start_view=startview,
        data_min_date=min,
        data_max_date=max,
        data_initial_date=initial or "",
        data_date_autoclose=_json_bool(autoclose),
        **extra,
    )


def date_input(
    input_id: str,
    label: Any,
    value: Union[str, date, None] = None,
    min: Union[str, date, None] = None,
    max: Union[str, date, None] = None,
    format: str = "yyyy-mm-dd",
    startview: str = "month",
    weekstart: int = 0,
    language: str = "en",
    width: Any = None,
    autoclose: bool = True,
    datesdisabled: Optional[Sequence[Union[str, date]]] = None,
    daysofweekdisabled: Optional[Sequence[int]] = None,
) -> Tag:
    """Calendar date picker. ``value=None`` means today, chosen in the browser."""
    validate_id(input_id)
    _check_date_options(startview, weekstart)
    initial = _coerce_date(value, "value")
    low = _coerce_date(min, "min")
    high = _coerce_date(max, "max")
    if low and high and low > high:
        raise InvalidArgumentError(f"date_input min ({low}) must not be after max ({high})")
    if initial and ((low and initial < low) or (high and initial > high)):
        raise InvalidArgumentError(f"date_input value {initial} is outside [{low}, {high}]")

    disabled = [_coerce_date(d, "datesdisabled") for d in datesdisabled] if datesdisabled else None
    if daysofweekdisabled and any(not 0 <= d <= 6 for d in daysofweekdisabled):
        raise InvalidArgumentError("daysofweekdisabled entries must be between 0 and 6")

    field = _date_field(
        initial,
        low,
        high,
        format,
        startview,
        weekstart,
        language,
        autoclose,
        data_date_dates_disabled=json.dumps(disabled) if disabled else None,
        data_date_days_of_week_disabled=json.dumps(list(daysofweekdisabled)) if daysofweekdisabled else None,
    )
    tag = _input_container(
        input_id,
        shiny_input_label(input_id, label),
        field,
        width=width,
        id=input_id,
        class_="shiny-date-input",
    )
    tag.add_dependency(datepicker_dependency())
    return tag


def date_range_input(
    input_id: str,
    label: Any,
    start: Union[str, date, None] = None,
    end: Union[str, date, None] = None,
    min: Union[str, date, None] = None,
    max: Union[str, date, None] = None,
    format: str = "yyyy-mm-dd",
    startview: str = "month",
    weekstart: int = 0,
    language: str = "en",
    separator: str = " to ",
    width: Any = None,
    autoclose: bool = True,
) -> Tag:
    """Pair of date pickers for a start and end date."""
    validate_id(input_id)
    _check_date_options(startview, weekstart)
    first = _coerce_date(start, "start")
    last = _coerce_date(end, "end")
    low = _coerce_date(min, "min")
    high = _coerce_date(max, "max")
    if first and last and first > last:
        raise InvalidArgumentError(f"date_range_input start ({first}) must not be after end ({last})")
    if low and high and low > high:
        raise InvalidArgumentError(f"date_range_input min ({low}) must not be after max ({high})")
    for name, day in (("start", first), ("end", last)):
        if day and ((low and day < low) or (high and day > high)):
            raise InvalidArgumentError(f"date_range_input {name} {day} is outside [{low}, {high}]")

    options = (low, high, format, startview, weekstart, language, autoclose)
    group = div(
        _date_field(first, *options),
        span(
            span(separator, class_="input-group-text"),
            class_="input-group-addon input-group-prepend input-group-append",
        ),
        _date_field(last, *options),
        class_="input-daterange input-group input-group-sm",
    )
    tag = _input_container(
        input_id,
        shiny_input_label(input_id, label),
        group,
        width=width,
        id=input_id,
        class_="shiny-date-range-input",
    )
    tag.add_dependency(datepicker_dependency())
    return tag


# Limited choices ----------------------------------------------------------

def normalize_choices(choices: Choices) -> List[Tuple[str, Any]]:
    """
    Turn choices into ``(label, value)`` pairs; groups become
    ``(group_name, [(label, value), ...])`` where the value is a list.

    A plain sequence uses each item as both label and value; a mapping maps
    labels to values, and a mapping value that is itself a sequence or
    mapping forms a named group.
    """
    if isinstance(choices, Mapping):
        pairs: List[Tuple[str, Any]] = []
        for name, value in choices.items():
            if isinstance(value, (Mapping, list, tuple)):
                pairs.append((str(name), normalize_choices(value)))
            else:
                pairs.append((str(name), str(value)))
        return pairs
    if isinstance(choices, (str, bytes)) or not isinstance(choices, Sequence):
        raise InvalidArgumentError(f"choices must be a sequence or mapping, got {type(choices).__name__}")
    return [(str(item), str(item)) for item in choices]


def _flat_values(pairs: List[Tuple[str, Any]]) -> List[str]:
    values: List[str] = []
    for _, value in pairs:
        if isinstance(value, list):
            values.extend(_flat_values(value))
        else:
            values.append(value)
    return values


def _selected_values(selected: Any) -> List[str]:
    if selected is None:
        return []
    if isinstance(selected, (list, tuple, set)):
        return [str(v) for v in selected]
    return [str(selected)]


def _select_options(pairs: List[Tuple[str, Any]], selected: List[str]) -> List[Tag]:
    options: List[Tag] = []
    for name, value in pairs:
        if isinstance(value, list):
            options.append(Tag("optgroup", *_select_options(value, selected), label=name))
        else:
            options.append(Tag("option", name, value=value, selected=value in selected))
    return options


def select_input(
    input_id: str,
    label: Any,
    choices: Choices,
    selected: Any = None,
    multiple: bool = False,
    selectize: bool = True,
    width: Any = None,
    size: Optional[int] = None,
) -> Tag:
    """
    Drop-down list of choices.

    Single selects default to the first choice; multiple selects start with
    nothing selected.
    """
    validate_id(input_id)
    if size is not None and selectize:
        raise InvalidArgumentError("select_input size is not compatible with selectize=True")

    pairs = normalize_choices(choices)
    values = _flat_values(pairs)
    chosen = _selected_values(selected)
    if not chosen and not multiple and values:
        chosen = [values[0]]
    if not multiple and len(chosen) > 1:
        raise InvalidArgumentError("select_input selected must be a single value unless multiple=True")

    select = Tag(
        "select",
        *_select_options(pairs, chosen),
        id=input_id,
        class_=None if selectize else "form-control",
        multiple=multiple,
        size=size,
    )
    inner: List[Any] = [select]
    if selectize:
        config = {"plugins": ["remove_button"]} if multiple else {}
        inner.append(
            Tag(
                "script",
                json.dumps(config),
                type="application/json",
                data_for=input_id,
                data_nonempty="" if not multiple else None,
            )
        )

    tag = _input_container(input_id, shiny_input_label(input_id, label), div(*inner), width=width)
    if selectize:
        tag.add_dependency(selectize_dependency())
    return tag


def _choice_pairs(
    kind: str,
    choices: Optional[Choices],
    choice_names: Optional[Sequence[Any]],
    choice_values: Optional[Sequence[Any]],
) -> List[Tuple[Any, str]]:
    if choices is not None and (choice_names is not None or choice_values is not None):
        raise InvalidArgumentError(f"{kind}: use either choices or choice_names/choice_values, not both")
    if choices is not None:
        pairs = normalize_choices(choices)
        if any(isinstance(value, list) for _, value in pairs):
            raise InvalidArgumentError(f"{kind}: choice groups are only supported by select_input")
        return pairs
    if choice_names is None or choice_values is None:
        raise InvalidArgumentError(f"{kind}: choice_names and choice_values must both be given")
    if len(choice_names) != len(choice_values):
        raise InvalidArgumentError(f"{kind}: choice_names and choice_values must have the same length")
    return [(name, str(value)) for name, value in zip(choice_names, choice_values)]


def _options_group(
    input_id: str,
    input_type: str,
    pairs: List[Tuple[Any, str]],
    selected: List[str],
    inline: bool,
) -> Tag:
    wrapper_class = "radio" if input_type == "radio" else "checkbox"
    items: List[Tag] = []
    for name, value in pairs:
        box = Tag("input", type=input_type, name=input_id, value=value, checked=value in selected)
        if inline:
            items.append(Tag("label", box, span(name), class_=f"{wrapper_class}-inline"))
        else:
            items.append(div(Tag("label", box, span(name)), class_=wrapper_class))
    return div(*items, class_="shiny-options-group")


def radio_buttons(
    input_id: str,
    label: Any,
    choices: Optional[Choices] = None,
    selected: Any = None,
    inline: bool = False,
    width: Any = None,
    choice_names: Optional[Sequence[Any]] = None,
    choice_values: Optional[Sequence[Any]] = None,
) -> Tag:
    """
    Set of mutually exclusive options; defaults to the first choice.

    ``choice_names`` may hold tags to show rich labels, paired with the plain
    ``choice_values`` sent to the application.
    """
    validate_id(input_id)
    pairs = _choice_pairs("radio_buttons", choices, choice_names, choice_values)
    values = [value for _, value in pairs]
    chosen = _selected_values(selected)
    if len(chosen) > 1:
        raise InvalidArgumentError("radio_buttons selected must be a single value")
    for value in chosen:
        if value not in values:
            raise InvalidArgumentError(f"radio_buttons selected value '{value}' is not one of the choices")
    if not chosen and values:
        chosen = [values[0]]

    return _input_container(
        input_id,
        shiny_input_label(input_id, label),
        _options_group(input_id, "radio", pairs, chosen, inline),
        width=width,
        id=input_id,
        class_=["shiny-input-radiogroup", "shiny-input-container-inline" if inline else None],
        role="radiogroup",
        aria_labelledby=f"{input_id}-label",
    )


def checkbox_group_input(
    input_id: str,
    label: Any,
    choices: Optional[Choices] = None,
    selected: Any = None,
    inline: bool = False,
    width: Any = None,
    choice_names: Optional[Sequence[Any]] = None,
    choice_values: Optional[Sequence[Any]] = None,
) -> Tag:
    """Set of independent check boxes; nothing is checked by default."""
    validate_id(input_id)
    pairs = _choice_pairs("checkbox_group_input", choices, choice_names, choice_values)
    values = [value for _, value in pairs]
    chosen = _selected_values(selected)
    unknown = [value for value in chosen if value not in values]
    if unknown:
        raise InvalidArgumentError(f"checkbox_group_input selected values {unknown} are not choices")

    return _input_container(
        input_id,
        shiny_input_label(input_id, label),
        _options_group(input_id, "checkbox", pairs, chosen, inline),
        width=width,
        id=input_id,
        class_=["shiny-input-checkboxgroup", "shiny-input-container-inline" if inline else None],
        role="group",
        aria_labelledby=f"{input_id}-label",
    )


def checkbox_input(input_id: str, label: Any, value: bool = False, width: Any = None) -> Tag:
    """Single check box for a yes/no question."""
    validate_id(input_id)
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"checkbox_input value must be True or False, got {value!r}")
    box = Tag("input", id=input_id, type="checkbox", class_="shiny-input-checkbox", checked=value)
    return _input_container(
        input_id,
        div(Tag("label", box, span(label)), class_="checkbox"),
        width=width,
    )


# File uploads -------------------------------------------------------------

def file_input(
    input_id: str,
    label: Any,
    multiple: bool = False,
    accept: Union[str, Sequence[str], None] = None,
    width: Any = None,
    button_label: str = "Browse...",
    placeholder: str = "No file selected",
    capture: Optional[str] = None,
) -> Tag:
    """Upload control for one or more files, optionally limited by ``accept``."""
    validate_id(input_id)
    if isinstance(accept, (list, tuple)):
        accept = ",".join(accept)
    if capture is not None and capture not in ("user", "environment"):
        raise InvalidArgumentError("file_input capture must be 'user' or 'environment'")

    picker = Tag(
        "input",
        id=input_id,
        name=input_id,
        type="file",
        style="position: absolute !important; top: -99999px !important; left: -99999px !important;",
        multiple=multiple,
        accept=accept or None,
        capture=capture,
        data_restore="",
    )
    group = div(
        Tag(
            "label",
            span(button_label, picker, class_="btn btn-default btn-file"),
            class_="input-group-btn input-group-prepend",
        ),
        Tag("input", type="text", class_="form-control", placeholder=placeholder, readonly=True),
        class_="input-group",
    )
    progress = div(
        div(class_="progress-bar"),
        id=f"{input_id}_progress",
        class_="progress active shiny-file-input-progress",
    )
    return _input_container(input_id, shiny_input_label(input_id, label), group, progress, width=width)


# Action buttons -----------------------------------------------------------

def action_button(
    input_id: str,
    label: Any,
    icon: Optional[Tag] = None,
    width: Any = None,
    class_: Optional[str] = None,
    block: bool = False,
    disabled: bool = False,
) -> Tag:
    """
    Button the application can react to.

    ``class_`` takes Bootstrap modifiers such as ``"btn-danger"`` or
    ``"btn-lg"``; ``block`` stretches the button to the container width.
    """
    validate_id(input_id)
    button = Tag(
        "button",
        icon,
        label,
        id=input_id,
        type="button",
        class_=["btn", "btn-default", "action-button", class_, "btn-block" if block else None],
        style=style_width(width),
        disabled=disabled,
    )
    return button.bind(BindingKind.INPUT, input_id)


def action_link(input_id: str, label: Any, icon: Optional[Tag] = None) -> Tag:
    """Hyperlink that behaves like an action button."""
    validate_id(input_id)
    link = Tag("a", icon, label, id=input_id, href="#", class_="action-button")
    return link.bind(BindingKind.INPUT, input_id)
