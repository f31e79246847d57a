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


from __future__ import annotations

from typing import TYPE_CHECKING, Any

import htpy
import markupsafe

import semform.htm as htm
import semform.localize as localize
import semform.models.form as form
import semform.orm as orm
import semform.util as util

if TYPE_CHECKING:
    from collections.abc import Mapping

    import semform.builder as builder


def humanized_attribute_name(form_builder: builder.FormBuilder, method: str) -> str:
    if form_builder.object is not None:
        name = orm.human_attribute_name(form_builder.object, method)
        if name:
            return name
    return util.label_str(method, form_builder.config.label_str_method)


def inline_hints_for(
    form_builder: builder.FormBuilder, method: str, options: Mapping[str, Any]
) -> markupsafe.Markup | None:
    hint = localize.localized_string(form_builder, method, options.get("hint"), form.LookupKind.HINT)
    if not hint:
        return None
    return htm.markup(htpy.p(class_="inline-hints")[_text(hint)])


def label(
    form_builder: builder.FormBuilder,
    method: str,
    options: Mapping[str, Any],
    input_id: str | None = None,
) -> markupsafe.Markup:
    label_attrs = htm.attrs({"for": input_id or form_builder.input_id(method)}, options.get("label_html"))
    return htm.markup(htpy.label(label_attrs)[label_text(form_builder, method, options)])


def label_text(form_builder: builder.FormBuilder, method: str, options: Mapping[str, Any]) -> markupsafe.Markup:
    """The label for method with its required or optional indicator appended."""
    text = localize.localized_string(form_builder, method, options.get("label"), form.LookupKind.LABEL)
    if text is None:
        text = humanized_attribute_name(form_builder, method)
    return _text(text) + required_or_optional_string(form_builder, options.get("required"))


def required_or_optional_string(form_builder: builder.FormBuilder, required: bool | None) -> markupsafe.Markup:
    if not required:
        return markupsafe.Markup(form_builder.config.optional_string)
    if form_builder.config.required_string is not None:
        return markupsafe.Markup(form_builder.config.required_string)
    title = form_builder.catalog.translate("required", scope="formtastic", default="required")
    return htm.markup(htpy.abbr(title=title)["*"])


def _text(value: Any) -> markupsafe.Markup:
    # Markup passes through, plain strings are escaped
    return markupsafe.escape(value)
