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


"""Process-wide rendering defaults.

The configuration is an immutable value. It is read from the environment once
by get() and then passed to every builder; derive variants with
FormConfig.model_copy(update={...}) rather than changing it in place.
"""

from typing import Final

import decouple
import pydantic

import semform.models.form as form
import semform.models.schema as schema

_COLLECTION_LABEL_METHODS: Final = (
    "to_label",
    "display_name",
    "full_name",
    "name",
    "title",
    "username",
    "login",
    "value",
)
_INLINE_ORDER: Final = (form.InlinePart.INPUT, form.InlinePart.HINTS, form.InlinePart.ERRORS)

_global_config: "FormConfig | None" = None


class FormConfig(schema.Frozen):
    default_text_field_size: int = 50
    all_fields_required_by_default: bool = True
    include_blank_for_select_by_default: bool = True
    # None renders <abbr title="required">*</abbr> with a localized title
    required_string: str | None = None
    optional_string: str = ""
    inline_errors: form.InlineErrors = form.InlineErrors.SENTENCE
    label_str_method: form.LabelStrategy = form.LabelStrategy.HUMANIZE
    collection_label_methods: tuple[str, ...] = _COLLECTION_LABEL_METHODS
    inline_order: tuple[form.InlinePart, ...] = _INLINE_ORDER
    file_methods: tuple[str, ...] = ("filename", "public_filename")
    i18n_lookups_by_default: bool = False
    default_commit_button_accesskey: str | None = None
    date_order: tuple[str, ...] = ("year", "month", "day")
    time_order: tuple[str, ...] = ("hour", "minute")
    year_span: int = pydantic.Field(default=5, ge=0)

    @pydantic.field_validator("inline_order")
    @classmethod
    def inline_order_unique(cls, value: tuple[form.InlinePart, ...]) -> tuple[form.InlinePart, ...]:
        if len(set(value)) != len(value):
            raise ValueError("inline_order must not repeat a part")
        return value


def from_environment() -> FormConfig:
    """Build a configuration from SEMFORM_* environment variables or a .env file."""
    accesskey = decouple.config("SEMFORM_DEFAULT_COMMIT_BUTTON_ACCESSKEY", default="")
    inline_order = decouple.config("SEMFORM_INLINE_ORDER", default="input,hints,errors", cast=decouple.Csv())
    return FormConfig(
        default_text_field_size=decouple.config("SEMFORM_DEFAULT_TEXT_FIELD_SIZE", default=50, cast=int),
        all_fields_required_by_default=decouple.config(
            "SEMFORM_ALL_FIELDS_REQUIRED_BY_DEFAULT", default=True, cast=bool
        ),
        include_blank_for_select_by_default=decouple.config(
            "SEMFORM_INCLUDE_BLANK_FOR_SELECT_BY_DEFAULT", default=True, cast=bool
        ),
        inline_errors=form.InlineErrors(decouple.config("SEMFORM_INLINE_ERRORS", default="sentence")),
        label_str_method=form.LabelStrategy(decouple.config("SEMFORM_LABEL_STR_METHOD", default="humanize")),
        inline_order=tuple(form.InlinePart(part) for part in inline_order),
        i18n_lookups_by_default=decouple.config("SEMFORM_I18N_LOOKUPS_BY_DEFAULT", default=False, cast=bool),
        default_commit_button_accesskey=accesskey or None,
    )


def get() -> FormConfig:
    global _global_config

    if _global_config is None:
        _global_config = from_environment()
    return _global_config
