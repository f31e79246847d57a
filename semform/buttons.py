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

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

import htpy
import markupsafe

import semform.errors as errors
import semform.fieldsets as fieldsets
import semform.htm as htm
import semform.localize as localize
import semform.log as log
import semform.models.form as form
import semform.orm as orm
import semform.util as util

if TYPE_CHECKING:
    import semform.builder as builder

type ButtonRenderer = Callable[[builder.FormBuilder], markupsafe.Markup]


def button_for(name: str) -> ButtonRenderer:
    match name:
        case "commit":
            return commit_button
    raise errors.ConfigurationError(f"Unknown button {name!r}, expected one of: commit")


def buttons(
    form_builder: builder.FormBuilder,
    names: Iterable[str],
    html_options: Mapping[str, Any],
    block: Callable[[], Any] | None = None,
) -> markupsafe.Markup:
    """A fieldset of class buttons holding the named buttons, or the commit button by default."""
    html_options = dict(html_options)
    html_options.setdefault("class", "buttons")
    if block is not None:
        return fieldsets.wrap(form_builder, html_options, block=block)
    renderers = [button_for(name) for name in (list(names) or ["commit"])]
    contents = [renderer(form_builder) for renderer in renderers]
    return fieldsets.wrap(form_builder, html_options, contents)


def commit_button(form_builder: builder.FormBuilder, text: Any = None, **options: Any) -> markupsafe.Markup:
    """A submit input reading Create, Save or Submit followed by the model name.

    The text can be overridden with text or label, and it can be looked up in
    the catalog under formtastic.actions with a Key.
    """
    options = util.normalise_options(options)
    label = options.pop("label", None)
    if label is not None:
        text = label

    if form_builder.object is not None:
        key = "create" if orm.is_new_record(form_builder.object) else "update"
        object_name = orm.human_name(form_builder.object)
    else:
        key = "submit"
        object_name = util.label_str(form_builder.object_name, form_builder.config.label_str_method)

    if key == "update":
        # The update button falls back on formtastic.save
        log.debug("Using formtastic.save as the fallback for the update button")
        fallback = form_builder.catalog.translate(
            "save", scope="formtastic", default="Save %{model}", model=object_name
        ) or f"Save {object_name}"
    else:
        fallback = f"{util.humanize(key)} %{{model}}"

    if not isinstance(text, str):
        text = localize.localized_string(
            form_builder, key, text, form.LookupKind.ACTION, model=object_name
        ) or form_builder.catalog.translate(key, scope="formtastic", default=fallback, model=object_name)

    button_html = dict(options.pop("button_html", None) or {})
    button_html["class"] = " ".join(part for part in (button_html.get("class"), key) if part)
    if "accesskey" not in button_html:
        accesskey = options.pop("accesskey", None) or form_builder.config.default_commit_button_accesskey
        if accesskey:
            button_html["accesskey"] = accesskey
    element_class = " ".join(part for part in ("commit", options.pop("class", None)) if part)

    submit = htpy.input(htm.attrs({"type": "submit", "name": "commit", "value": text}, button_html))
    return htm.markup(htpy.li(class_=element_class)[submit])
