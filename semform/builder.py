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


"""The form builder handed to templates.

A builder binds a form to an object, or to a bare name when there is no
object, and renders semantic markup for it:

    builder = FormBuilder("post", post, template=tmpl)
    builder.inputs("title", "body", name="Basic details")
    builder.inputs(name="Task #%i", for_="tasks")
    builder.buttons()

Options are plain keyword arguments. Python keywords take a trailing
underscore (as_, for_, class_) which is stripped before use.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import semform.buttons as buttons
import semform.config as config
import semform.fieldsets as fieldsets
import semform.i18n as i18n
import semform.inputs as inputs
import semform.labels as labels
import semform.localize as localize
import semform.models.form as form
import semform.nested as nested
import semform.orm as orm
import semform.util as util

if TYPE_CHECKING:
    import markupsafe
    import sqlmodel

    import semform.template as template


class FormBuilder:
    def __init__(
        self,
        object_name: str,
        obj: Any = None,
        *,
        template: template.Template,
        config: config.FormConfig | None = None,
        catalog: i18n.Catalog | None = None,
        nesting: form.NestingContext | None = None,
        errors: Mapping[str, list[str] | str] | None = None,
        session: sqlmodel.Session | None = None,
    ) -> None:
        self.object_name = str(object_name)
        self.object = obj
        self.template = template
        self.config = config or _default_config()
        self.catalog = catalog or i18n.Catalog.bundled()
        self.nesting = nesting
        self.errors = errors
        self.session = session

    def __repr__(self) -> str:
        return f"FormBuilder({self.object_name!r}, {type(self.object).__name__})"

    # Markup

    def buttons(self, *names: str, block: Callable[[], Any] | None = None, **options: Any) -> markupsafe.Markup:
        return buttons.buttons(self, names, util.normalise_options(options), block=block)

    button_field_set = buttons

    def commit_button(self, text: Any = None, **options: Any) -> markupsafe.Markup:
        return buttons.commit_button(self, text, **options)

    def field_set_and_list_wrapping(
        self,
        html_options: Mapping[str, Any],
        contents: list[Any] | None = None,
        block: Callable[[], Any] | None = None,
    ) -> markupsafe.Markup:
        return fieldsets.wrap(self, util.normalise_options(html_options), contents, block=block)

    def inline_errors_for(self, method: str) -> markupsafe.Markup | None:
        return inputs.inline_errors_for(self, method)

    def inline_hints_for(self, method: str, **options: Any) -> markupsafe.Markup | None:
        return labels.inline_hints_for(self, method, util.normalise_options(options))

    def input(self, method: str, **options: Any) -> markupsafe.Markup:
        return inputs.render(self, method, util.normalise_options(options))

    def inputs(self, *fields: str, block: Callable[..., Any] | None = None, **options: Any) -> markupsafe.Markup:
        """A fieldset of rows for the named fields.

        With for_ the fieldset is rendered for an associated object, once per
        member of a collection, and block receives the nested builder. Without
        for_, block takes no arguments and its output becomes the list body.
        Without fields or block the fields are inferred from the object.
        """
        options = util.normalise_options(options)
        options.setdefault("class", "inputs")

        if options.get("for") is not None:
            return nested.inputs_for_nested_attributes(self, fields, options, block)
        if block is not None:
            return fieldsets.wrap(self, options, block=block)

        names = list(fields)
        if (not names) and (self.object is not None):
            names = self.quick_form_fields()
        contents = [self.input(name) for name in names]
        return fieldsets.wrap(self, options, contents)

    input_field_set = inputs

    def label(self, method: str, text: Any = None, **options: Any) -> markupsafe.Markup:
        options = util.normalise_options(options)
        if text is not None:
            options["label"] = text
        if "required" not in options:
            options["required"] = inputs.method_required(self, method)
        return labels.label(self, method, options, options.pop("input_id", None))

    def localized_string(
        self, key: str | i18n.Key, value: Any, kind: form.LookupKind, **interpolations: Any
    ) -> str | None:
        return localize.localized_string(self, key, value, kind, **interpolations)

    def semantic_fields_for(
        self, record_or_name: Any, obj: Any = None, *, block: Callable[[FormBuilder], Any], **options: Any
    ) -> markupsafe.Markup:
        return nested.semantic_fields_for(self, record_or_name, obj, block=block, **options)

    # Naming and reflection

    def child(self, object_name: str, obj: Any, nesting: form.NestingContext) -> FormBuilder:
        return FormBuilder(
            object_name,
            obj,
            template=self.template,
            config=self.config,
            catalog=self.catalog,
            nesting=nesting,
            session=self.session,
        )

    def errors_on(self, method: str) -> list[str]:
        if self.errors is not None:
            found = self.errors.get(method)
            if not found:
                return []
            return [found] if isinstance(found, str) else list(found)
        if self.object is None:
            return []
        return orm.errors_on(self.object, method)

    @property
    def has_errors(self) -> bool:
        """Errors are only shown for a builder bound to an object."""
        if self.object is None:
            return False
        if self.errors is not None:
            return True
        return orm.has_errors(self.object)

    def input_id(self, method: str, suffix: str | None = None) -> str:
        base = f"{util.sanitise_id(self.object_name)}_{method}"
        return f"{base}_{suffix}" if suffix else base

    def input_name(self, method: str, multiple: bool = False) -> str:
        name = f"{self.object_name}[{method}]"
        return f"{name}[]" if multiple else name

    def quick_form_fields(self) -> list[str]:
        """Belongs-to associations followed by the content columns of the object."""
        associated = [
            association.name
            for association in orm.associations(self.object)
            if association.macro is form.Macro.BELONGS_TO
        ]
        return associated + orm.content_columns(self.object)

    def row_id(self, method: str) -> str:
        return f"{self.input_id(method)}_input"

    def value(self, method: str) -> Any:
        return orm.read(self.object, method)


def _default_config() -> config.FormConfig:
    return config.get()
