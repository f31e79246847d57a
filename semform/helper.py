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


"""Entry points that open a form for a record or a bare name."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import htpy
import markupsafe

import semform.builder as builder
import semform.htm as htm
import semform.nested as nested
import semform.orm as orm
import semform.util as util
import semform.web as web

if TYPE_CHECKING:
    import semform.template as template


def semantic_fields_for(
    tmpl: template.Template,
    record_or_name: Any,
    obj: Any = None,
    *,
    block: Callable[[builder.FormBuilder], Any],
    **builder_options: Any,
) -> markupsafe.Markup:
    """Run block with a builder for record_or_name without opening a form element."""
    nested.require_builder_block(block, "semantic_fields_for needs a block that accepts the builder")
    form_builder = _builder(tmpl, record_or_name, obj, builder_options)
    return tmpl.concat(tmpl.capture(block, form_builder))


def semantic_form_for(
    tmpl: template.Template,
    record_or_name: Any,
    obj: Any = None,
    *,
    block: Callable[[builder.FormBuilder], Any],
    url: str | None = None,
    method: str = "post",
    html: Mapping[str, Any] | None = None,
    csrf_token: str | bool | None = None,
    **builder_options: Any,
) -> markupsafe.Markup:
    """Render a form element of class formtastic around the output of block.

    The form id is new_post for a new record and edit_post_1 for a persisted
    one. With csrf_token=True the token of the current Quart session is
    embedded as a hidden input.
    """
    nested.require_builder_block(block, "semantic_form_for needs a block that accepts the builder")
    form_builder = _builder(tmpl, record_or_name, obj, builder_options)

    model = _model_name(form_builder)
    form_attrs: dict[str, Any] = {
        "action": url if (url is not None) else tmpl.params.get("path"),
        "method": method,
        "class": f"formtastic {model}",
    }
    if form_builder.object is not None:
        if orm.is_new_record(form_builder.object):
            form_attrs["id"] = f"new_{model}"
        else:
            form_attrs["id"] = f"edit_{model}_{orm.record_id(form_builder.object)}"
    html_options = util.normalise_options(html or {})
    form_attrs = htm.attrs(form_attrs, html_options)

    match csrf_token:
        case True:
            token_input = web.csrf_input()
        case str():
            token_input = htm.markup(htpy.input(type="hidden", name="csrf_token", value=csrf_token))
        case _:
            token_input = None

    body = tmpl.capture(block, form_builder)
    return tmpl.concat(htpy.form(form_attrs)[token_input, body])


def _builder(
    tmpl: template.Template, record_or_name: Any, obj: Any, builder_options: Mapping[str, Any]
) -> builder.FormBuilder:
    if isinstance(record_or_name, (list, tuple)):
        # The last element is the record, the rest only shape the URL
        record_or_name = record_or_name[-1]
    if isinstance(record_or_name, str):
        object_name = record_or_name
    else:
        obj = record_or_name
        object_name = orm.model_name(obj)
    return builder.FormBuilder(object_name, obj, template=tmpl, **builder_options)


def _model_name(form_builder: builder.FormBuilder) -> str:
    if form_builder.object is not None:
        return orm.model_name(form_builder.object)
    return util.sanitise_id(form_builder.object_name)
