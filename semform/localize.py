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


"""Catalog lookups for labels, hints, titles and button text.

An explicit string always wins. Otherwise the catalog is searched from the
most specific path to the least specific one, for example:

    formtastic.labels.post.edit.title
    formtastic.labels.post.title
    formtastic.labels.title

Lookups only happen when the caller asks for one (a Key or True) or when
i18n_lookups_by_default is enabled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import semform.i18n as i18n
import semform.log as log
import semform.orm as orm
import semform.util as util
import semform.web as web

if TYPE_CHECKING:
    import semform.builder as builder
    import semform.models.form as form
    import semform.template as template

LOOKUP_SCOPES: Final[tuple[str, ...]] = (
    "{model}.{action}.{attribute}",
    "{model}.{attribute}",
    "{attribute}",
)


def action_name(tmpl: template.Template | None) -> str:
    """The action of the current request, or the empty string when there is none."""
    try:
        return str(tmpl.params["action"])  # type: ignore[union-attr]
    except (AttributeError, KeyError, TypeError):
        pass
    try:
        return web.request_action()
    except Exception as e:
        log.debug(f"No action name available for localization: {e}")
        return ""


def localized_string(
    form_builder: builder.FormBuilder,
    key: str | i18n.Key,
    value: Any,
    kind: form.LookupKind,
    **interpolations: Any,
) -> str | None:
    if isinstance(value, i18n.Key):
        key = value.name

    if isinstance(value, str):
        return value

    if value is None:
        use_i18n = form_builder.config.i18n_lookups_by_default
    else:
        use_i18n = value is not False
    if not use_i18n:
        return None

    paths = lookup_paths(model_name(form_builder), action_name(form_builder.template), str(key))
    found = form_builder.catalog.translate(paths[0], scope=kind.scope, default=paths[1:], **interpolations)
    return found or None


def lookup_paths(model: str, action: str, attribute: str) -> list[str]:
    """Catalog paths from most to least specific, ending with the empty sentinel."""
    paths = []
    for scope in LOOKUP_SCOPES:
        path = scope.replace("{action}", action).replace("{model}", model).replace("{attribute}", attribute)
        while ".." in path:
            path = path.replace("..", ".")
        paths.append(path)
    paths.append("")
    return paths


def model_name(form_builder: builder.FormBuilder) -> str:
    if form_builder.object is not None:
        return orm.model_name(form_builder.object)
    return util.underscore(util.label_str(form_builder.object_name, form_builder.config.label_str_method))
