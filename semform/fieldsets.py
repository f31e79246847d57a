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


"""Fieldset and ordered list wrapping for groups of rows.

Groups are titled with a legend when a name or title is given. Nested groups
of a collection may put %i in the title; it is replaced by the position of the
member, counting from one, so that

    form.inputs(name="Task #%i", for_="tasks")

renders legends reading Task #1, Task #2, Task #3 and so on.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Final

import htpy
import markupsafe

import semform.htm as htm
import semform.i18n as i18n
import semform.localize as localize
import semform.models.form as form

if TYPE_CHECKING:
    import semform.builder as builder

BOOKKEEPING_KEYS: Final = frozenset({"builder", "for", "for_options", "name", "parent", "title"})


def html_attributes(html_options: Mapping[str, Any]) -> dict[str, Any]:
    attrs = {}
    for key, value in html_options.items():
        if (key in BOOKKEEPING_KEYS) or (value is None):
            continue
        attrs[key] = value if isinstance(value, bool) else str(value)
    return attrs


def legend_text(form_builder: builder.FormBuilder, html_options: Mapping[str, Any]) -> str:
    name = html_options.get("name")
    if name is None:
        name = html_options.get("title")
    if name is None:
        return ""
    if isinstance(name, i18n.Key):
        name = localize.localized_string(form_builder, name, name, form.LookupKind.TITLE) or name.name
    legend = str(name)
    if form_builder.nesting is not None:
        legend = legend.replace("%i", str(form_builder.nesting.display_index))
    return legend


def wrap(
    form_builder: builder.FormBuilder,
    html_options: Mapping[str, Any],
    contents: Iterable[Any] | None = None,
    block: Callable[[], Any] | None = None,
) -> markupsafe.Markup:
    """Wrap contents, or the output of block, in a fieldset with an optional legend.

    In block form the fieldset is also written to the template buffer.
    """
    legend = legend_text(form_builder, html_options)
    legend_element = htpy.legend[htpy.span[legend]] if legend.strip() else None

    if block is not None:
        body = form_builder.template.capture(block)
    else:
        body = htm.join(contents or [])

    fieldset = htm.markup(htpy.fieldset(html_attributes(html_options))[legend_element, htpy.ol[body]])
    if block is not None:
        form_builder.template.concat(fieldset)
    return fieldset
