# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.


"""Rendering of one form row: the input itself, its hints and its errors."""

from __future__ import annotations

import calendar
import datetime
import enum
import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Final

import htpy
import markupsafe

import semform.errors as errors
import semform.htm as htm
import semform.i18n as i18n
import semform.labels as labels
import semform.log as log
import semform.models.form as form
import semform.orm as orm
import semform.util as util

if TYPE_CHECKING:
    import semform.builder as builder

type Renderer = Callable[[builder.FormBuilder, form.FieldDescriptor], markupsafe.Markup]

_DATE_POSITIONS: Final = {"year": 1, "month": 2, "day": 3, "hour": 4, "minute": 5, "second": 6}
_ID_VALUE_SPACES: Final = re.compile(r"\s")
_ID_VALUE_OTHER: Final = re.compile(r"\W")
_TEXT_INPUT_TYPES: Final = {
    form.InputKind.EMAIL: "email",
    form.InputKind.NUMERIC: "number",
    form.InputKind.PASSWORD: "password",
    form.InputKind.PHONE: "tel",
    form.InputKind.SEARCH: "search",
    form.InputKind.STRING: "text",
    form.InputKind.URL: "url",
}


def default_input_type(form_builder: builder.FormBuilder, method: str) -> form.InputKind:
    """Infer the input kind: file attachments, then column types, then annotations, then text."""
    obj = form_builder.object
    if obj is None:
        return form.InputKind.STRING

    value = orm.read(obj, method)
    if (value is not None) and any(hasattr(value, name) for name in form_builder.config.file_methods):
        return form.InputKind.FILE

    column = orm.column(obj, method)
    if column is not None:
        if (column.kind is form.InputKind.NUMERIC) and method.endswith("_id"):
            return form.InputKind.SELECT
        if (column.kind is form.InputKind.STRING) and ("password" in method):
            return form.InputKind.PASSWORD
        return column.kind

    if orm.association(obj, method) is not None:
        return form.InputKind.SELECT

    kind = orm.annotation_kind(obj, method)
    if kind is not None:
        return kind

    if "password" in method:
        return form.InputKind.PASSWORD
    return form.InputKind.STRING


def inline_errors_for(form_builder: builder.FormBuilder, method: str) -> markupsafe.Markup | None:
    match form_builder.config.inline_errors:
        case form.InlineErrors.NONE:
            return None
        case form.InlineErrors.SENTENCE:
            as_list = False
        case form.InlineErrors.LIST:
            as_list = True

    if not form_builder.has_errors:
        return None
    field_errors = form_builder.errors_on(method)
    if not field_errors:
        return None

    if as_list:
        return htm.markup(htpy.ul(class_="errors")[(htpy.li[error] for error in field_errors)])
    return htm.markup(htpy.p(class_="inline-errors")[util.to_sentence(field_errors)])


def method_required(form_builder: builder.FormBuilder, method: str) -> bool:
    if form_builder.object is not None:
        reflected = orm.is_required(form_builder.object, method)
        if reflected is not None:
            return reflected
    return form_builder.config.all_fields_required_by_default


def render(form_builder: builder.FormBuilder, method: str, options: Mapping[str, Any]) -> markupsafe.Markup:
    """Render the <li> row for method, containing the parts named by the inline order."""
    options = dict(options)
    explicit = resolve_kind(options.pop("as", None))
    if "required" not in options:
        options["required"] = method_required(form_builder, method)
    kind = explicit or default_input_type(form_builder, method)
    if explicit is None:
        log.debug(f"Inferred input kind {kind.value} for {form_builder.object_name}.{method}")

    wrapper_html = dict(options.pop("wrapper_html", None) or {})
    classes = [kind.value, "required" if options["required"] else "optional"]
    if form_builder.has_errors and form_builder.errors_on(method):
        classes.append("error")
    if wrapper_html.get("class"):
        classes.append(wrapper_html["class"])
    wrapper_html["class"] = " ".join(classes)
    wrapper_html.setdefault("id", form_builder.row_id(method))

    input_html = options.get("input_html") or {}
    if input_html.get("id"):
        options["label_html"] = htm.attrs({"for": input_html["id"]}, options.get("label_html"))

    field = form.FieldDescriptor(name=method, kind=kind, options=options)
    parts = []
    for part in form_builder.config.inline_order:
        match part:
            case form.InlinePart.INPUT:
                parts.append(renderer_for(kind)(form_builder, field))
            case form.InlinePart.HINTS:
                parts.append(labels.inline_hints_for(form_builder, method, options))
            case form.InlinePart.ERRORS:
                parts.append(inline_errors_for(form_builder, method))
    return htm.markup(htpy.li(wrapper_html)[htm.join(parts, "\n")])


def renderer_for(kind: form.InputKind) -> Renderer:  # noqa: C901
    match kind:
        case form.InputKind.BOOLEAN:
            return _render_boolean
        case form.InputKind.CHECK_BOXES:
            return _render_check_boxes
        case form.InputKind.DATE | form.InputKind.DATETIME | form.InputKind.TIME:
            return _render_date_or_time
        case form.InputKind.FILE:
            return _render_file
        case form.InputKind.HIDDEN:
            return _render_hidden
        case form.InputKind.RADIO:
            return _render_radio
        case form.InputKind.SELECT:
            return _render_select
        case form.InputKind.TEXT:
            return _render_text
        case (
            form.InputKind.EMAIL
            | form.InputKind.NUMERIC
            | form.InputKind.PASSWORD
            | form.InputKind.PHONE
            | form.InputKind.SEARCH
            | form.InputKind.STRING
            | form.InputKind.URL
        ):
            return _render_text_like
    raise errors.ConfigurationError(f"No renderer for input kind {kind!r}")


def resolve_kind(value: Any) -> form.InputKind | None:
    if value is None:
        return None
    if isinstance(value, form.InputKind):
        return value
    try:
        return form.InputKind(str(value))
    except ValueError:
        known = ", ".join(kind.value for kind in form.InputKind)
        raise errors.ConfigurationError(f"Unknown input type {value!r}, expected one of: {known}") from None


def _choice_fieldset(
    form_builder: builder.FormBuilder,
    field: form.FieldDescriptor,
    items: list[htm.Element],
    before_list: htm.Node = None,
) -> markupsafe.Markup:
    legend = htpy.legend[htpy.span(class_="label")[labels.label_text(form_builder, field.name, field.options)]]
    return htm.markup(htpy.fieldset[legend, before_list, htpy.ol[items]])


def _collection(
    form_builder: builder.FormBuilder, field: form.FieldDescriptor, association: form.Association | None
) -> list[tuple[str, Any]]:
    options = field.options
    raw = options.get("collection")
    if raw is None:
        if association is not None:
            raw = orm.query_collection(form_builder.session, association.target)
            if raw is None:
                log.warning(
                    f"No collection or session given for association {field.name} on {form_builder.object_name}"
                )
                raw = []
        elif _is_boolean(form_builder, field.name):
            return _yes_no(form_builder)
        else:
            return orm.choices(form_builder.object, field.name)

    if isinstance(raw, Mapping):
        return [(str(label), value) for label, value in raw.items()]

    pairs = []
    for item in raw:
        if isinstance(item, (tuple, list)) and (len(item) == 2):
            pairs.append((str(item[0]), item[1]))
        elif isinstance(item, enum.Enum):
            pairs.append((str(item.value), item.value))
        elif isinstance(item, (str, int, float, bool)):
            pairs.append((str(item), item))
        else:
            pairs.append((_member_label(form_builder, item, options), _member_value(item, options)))
    return pairs


def _input_method(form_builder: builder.FormBuilder, method: str) -> tuple[str, form.Association | None]:
    association = orm.association(form_builder.object, method) if (form_builder.object is not None) else None
    if association is None:
        return method, None
    if association.macro is form.Macro.BELONGS_TO:
        return association.foreign_key or f"{method}_id", association
    if association.macro.is_collection:
        return f"{util.underscore(association.target.__name__)}_ids", association
    return f"{method}_id", association


def _is_boolean(form_builder: builder.FormBuilder, method: str) -> bool:
    if form_builder.object is None:
        return False
    column = orm.column(form_builder.object, method)
    if column is not None:
        return column.kind is form.InputKind.BOOLEAN
    return orm.annotation_kind(form_builder.object, method) is form.InputKind.BOOLEAN


def _is_selected(value: Any, current: Any) -> bool:
    if current is None:
        return False
    if isinstance(current, (list, tuple, set, frozenset)):
        return any(_is_selected(value, item) for item in current)
    if isinstance(current, enum.Enum):
        current = current.value
    return (value == current) or (_value_str(value) == _value_str(current))


def _member_label(form_builder: builder.FormBuilder, item: Any, options: Mapping[str, Any]) -> str:
    if "label_method" in options:
        return str(util.call_or_get(options["label_method"], item))
    for name in form_builder.config.collection_label_methods:
        if hasattr(item, name):
            return str(util.call_or_get(name, item))
    return str(item)


def _member_value(item: Any, options: Mapping[str, Any]) -> Any:
    return util.call_or_get(options.get("value_method", "id"), item)


def _render_boolean(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    options = field.options
    input_id = form_builder.input_id(field.name)
    name = form_builder.input_name(field.name)
    checked_value = options.get("checked_value", "1")
    unchecked_value = options.get("unchecked_value", "0")
    checkbox_attrs = htm.attrs(
        {"type": "checkbox", "id": input_id, "name": name, "value": str(checked_value)},
        options.get("input_html"),
    )
    if form_builder.value(field.name):
        checkbox_attrs["checked"] = True
    hidden = htpy.input(type="hidden", name=name, value=str(unchecked_value))
    label_attrs = htm.attrs({"for": checkbox_attrs["id"]}, options.get("label_html"))
    text = labels.label_text(form_builder, field.name, options)
    return htm.markup(htpy.label(label_attrs)[hidden, htpy.input(checkbox_attrs), " ", text])


def _render_check_boxes(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    input_method, association = _input_method(form_builder, field.name)
    collection = _collection(form_builder, field, association)
    current = _selected(form_builder, field, input_method, association)
    name = form_builder.input_name(input_method, multiple=True)
    items = []
    for label, value in collection:
        checkbox_id = form_builder.input_id(input_method, _id_suffix(value))
        checkbox_attrs = htm.attrs(
            {"type": "checkbox", "id": checkbox_id, "name": name, "value": _value_str(value)},
            field.options.get("input_html"),
        )
        if _is_selected(value, current):
            checkbox_attrs["checked"] = True
        items.append(htpy.li[htpy.label(for_=checkbox_id)[htpy.input(checkbox_attrs), " ", label]])
    hidden = htpy.input(type="hidden", name=name, value="")
    return _choice_fieldset(form_builder, field, items, before_list=hidden)


def _render_date_or_time(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    options = field.options
    config = form_builder.config
    match field.kind:
        case form.InputKind.DATE:
            default_order = list(config.date_order)
        case form.InputKind.TIME:
            default_order = list(config.time_order)
        case _:
            default_order = [*config.date_order, *config.time_order]
    order = list(options.get("order") or default_order)
    if options.get("include_seconds") and ("second" not in order):
        order.append("second")

    current = options["selected"] if ("selected" in options) else form_builder.value(field.name)
    include_blank = options.get("include_blank", current is None)
    today = datetime.date.today()
    base_year = getattr(current, "year", today.year)
    start_year = options.get("start_year", base_year - config.year_span)
    end_year = options.get("end_year", base_year + config.year_span)

    items = []
    for part in order:
        if part not in _DATE_POSITIONS:
            raise errors.ConfigurationError(f"Unknown date or time part {part!r}")
        position = _DATE_POSITIONS[part]
        part_method = f"{field.name}({position}i)"
        part_id = form_builder.input_id(f"{field.name}_{position}i")
        part_label = form_builder.catalog.translate(part, scope="datetime.prompts", default=util.humanize(part))
        selected = getattr(current, part, None)
        choices = _date_part_choices(form_builder.catalog, part, start_year, end_year)
        select_options = [htpy.option(value="")[""]] if include_blank else []
        select_options.extend(
            htpy.option(value=_value_str(value), selected=(value == selected))[label] for label, value in choices
        )
        items.append(
            htpy.li[
                htpy.label(for_=part_id)[part_label],
                htpy.select(id=part_id, name=form_builder.input_name(part_method))[select_options],
            ]
        )
    return _choice_fieldset(form_builder, field, items)


def _date_part_choices(
    catalog: i18n.Catalog, part: str, start_year: int, end_year: int
) -> list[tuple[str, int]]:
    match part:
        case "year":
            step = 1 if (end_year >= start_year) else -1
            return [(str(year), year) for year in range(start_year, end_year + step, step)]
        case "month":
            return [
                (catalog.translate(str(month), scope="date.month_names", default=calendar.month_name[month]), month)
                for month in range(1, 13)
            ]
        case "day":
            return [(str(day), day) for day in range(1, 32)]
        case "hour":
            return [(f"{hour:02d}", hour) for hour in range(24)]
        case _:
            return [(f"{minute:02d}", minute) for minute in range(60)]


def _id_suffix(value: Any) -> str:
    text = _ID_VALUE_SPACES.sub("_", _value_str(value))
    return _ID_VALUE_OTHER.sub("", text).lower()


def _render_file(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    attrs = htm.attrs(
        {"type": "file", "id": form_builder.input_id(field.name), "name": form_builder.input_name(field.name)},
        field.options.get("input_html"),
    )
    return htm.join([labels.label(form_builder, field.name, field.options, attrs["id"]), htpy.input(attrs)])


def _render_hidden(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    attrs = {"type": "hidden", "id": form_builder.input_id(field.name), "name": form_builder.input_name(field.name)}
    value = field.options.get("value", form_builder.value(field.name))
    if value is not None:
        attrs["value"] = _value_str(value)
    return htm.markup(htpy.input(htm.attrs(attrs, field.options.get("input_html"))))


def _render_radio(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    input_method, association = _input_method(form_builder, field.name)
    collection = _collection(form_builder, field, association)
    current = _selected(form_builder, field, input_method, association)
    name = form_builder.input_name(input_method)
    value_as_class = field.options.get("value_as_class", False)
    items = []
    for label, value in collection:
        radio_id = form_builder.input_id(input_method, _id_suffix(value))
        radio_attrs = htm.attrs(
            {"type": "radio", "id": radio_id, "name": name, "value": _value_str(value)},
            field.options.get("input_html"),
        )
        if _is_selected(value, current):
            radio_attrs["checked"] = True
        li_attrs = {"class": _value_str(value).lower()} if value_as_class else {}
        items.append(htpy.li(li_attrs)[htpy.label(for_=radio_id)[htpy.input(radio_attrs), " ", label]])
    return _choice_fieldset(form_builder, field, items)


def _render_select(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    options = field.options
    input_method, association = _input_method(form_builder, field.name)
    multiple = options.get("multiple", (association is not None) and association.macro.is_collection)
    collection = _collection(form_builder, field, association)
    current = _selected(form_builder, field, input_method, association)

    select_options: list[htm.Element] = []
    if "prompt" in options:
        select_options.append(htpy.option(value="")[options["prompt"]])
    elif not multiple:
        include_blank = options.get("include_blank", form_builder.config.include_blank_for_select_by_default)
        if include_blank:
            blank_text = include_blank if isinstance(include_blank, str) else ""
            select_options.append(htpy.option(value="")[blank_text])
    for label, value in collection:
        select_options.append(htpy.option(value=_value_str(value), selected=_is_selected(value, current))[label])

    attrs = htm.attrs(
        {
            "id": form_builder.input_id(input_method),
            "name": form_builder.input_name(input_method, multiple=multiple),
            "multiple": bool(multiple),
        },
        options.get("input_html"),
    )
    select = htpy.select(attrs)[select_options]
    return htm.join([labels.label(form_builder, field.name, options, attrs["id"]), select])


def _render_text(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    attrs = htm.attrs(
        {"id": form_builder.input_id(field.name), "name": form_builder.input_name(field.name)},
        field.options.get("input_html"),
    )
    value = form_builder.value(field.name)
    textarea = htpy.textarea(attrs)["" if (value is None) else _value_str(value)]
    return htm.join([labels.label(form_builder, field.name, field.options, attrs["id"]), textarea])


def _render_text_like(form_builder: builder.FormBuilder, field: form.FieldDescriptor) -> markupsafe.Markup:
    kind = field.kind or form.InputKind.STRING
    attrs: dict[str, Any] = {
        "type": _TEXT_INPUT_TYPES[kind],
        "id": form_builder.input_id(field.name),
        "name": form_builder.input_name(field.name),
        "size": str(field.options.get("size", form_builder.config.default_text_field_size)),
    }
    if form_builder.object is not None:
        column = orm.column(form_builder.object, field.name)
        if (column is not None) and column.limit:
            attrs["maxlength"] = str(column.limit)
    value = form_builder.value(field.name)
    if (value is not None) and (kind is not form.InputKind.PASSWORD):
        attrs["value"] = _value_str(value)
    attrs = htm.attrs(attrs, field.options.get("input_html"))
    return htm.join([labels.label(form_builder, field.name, field.options, attrs["id"]), htpy.input(attrs)])


def _selected(
    form_builder: builder.FormBuilder,
    field: form.FieldDescriptor,
    input_method: str,
    association: form.Association | None,
) -> Any:
    if "selected" in field.options:
        return field.options["selected"]
    if (association is not None) and association.macro.is_collection:
        members = form_builder.value(field.name) or []
        value_method = field.options.get("value_method", "id")
        return [util.call_or_get(value_method, member) for member in members]
    return form_builder.value(input_method)


def _value_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def _yes_no(form_builder: builder.FormBuilder) -> list[tuple[str, Any]]:
    catalog = form_builder.catalog
    yes = catalog.translate("yes", scope="formtastic", default="Yes") or "Yes"
    no = catalog.translate("no", scope="formtastic", default="No") or "No"
    return [(yes, True), (no, False)]