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


import pytest

import semform.builder as builder
import semform.config as config
import semform.i18n as i18n
import semform.localize as localize
import semform.models.form as form
import semform.template as template


@pytest.fixture
def catalog() -> i18n.Catalog:
    return i18n.Catalog(
        {
            "en": {
                "formtastic": {
                    "labels": {
                        "title": "Any title",
                        "post": {"title": "Post title", "edit": {"title": "Edited post title"}},
                    },
                    "hints": {"title": "Choose a good title"},
                },
            },
        }
    )


def _builder(catalog: i18n.Catalog, post, action: str = "", **config_options) -> builder.FormBuilder:
    return builder.FormBuilder(
        "post",
        post,
        template=template.Template({"action": action}),
        config=config.FormConfig(**config_options),
        catalog=catalog,
    )


def test_action_name_from_template_params():
    assert localize.action_name(template.Template({"action": "edit"})) == "edit"


def test_action_name_outside_request_is_empty():
    assert localize.action_name(template.Template()) == ""
    assert localize.action_name(None) == ""


def test_explicit_string_wins_with_lookups_enabled(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post, i18n_lookups_by_default=True)
    assert localize.localized_string(form_builder, "title", "Explicit", form.LookupKind.LABEL) == "Explicit"


def test_explicit_string_wins_with_lookups_disabled(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post)
    assert localize.localized_string(form_builder, "title", "Explicit", form.LookupKind.LABEL) == "Explicit"


def test_false_suppresses_lookup(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post, i18n_lookups_by_default=True)
    assert localize.localized_string(form_builder, "title", False, form.LookupKind.LABEL) is None


def test_key_value_looks_up_its_own_name(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post)
    found = localize.localized_string(form_builder, "ignored", i18n.Key("title"), form.LookupKind.LABEL)
    assert found == "Post title"


def test_lookup_prefers_action_specific_path(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post, action="edit")
    assert localize.localized_string(form_builder, "title", True, form.LookupKind.LABEL) == "Edited post title"


def test_lookup_uses_kind_scope(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post)
    assert localize.localized_string(form_builder, "title", True, form.LookupKind.HINT) == "Choose a good title"


def test_lookup_without_policy_is_skipped(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post)
    assert localize.localized_string(form_builder, "title", None, form.LookupKind.LABEL) is None


def test_lookup_with_policy_finds_generic_entry(catalog: i18n.Catalog):
    form_builder = builder.FormBuilder(
        "comment",
        template=template.Template(),
        config=config.FormConfig(i18n_lookups_by_default=True),
        catalog=catalog,
    )
    assert localize.localized_string(form_builder, "title", None, form.LookupKind.LABEL) == "Any title"


def test_lookup_missing_everywhere_is_none(catalog: i18n.Catalog, post):
    form_builder = _builder(catalog, post)
    assert localize.localized_string(form_builder, "body", True, form.LookupKind.LABEL) is None


def test_lookup_paths_are_ordered_most_specific_first():
    assert localize.lookup_paths("post", "edit", "title") == ["post.edit.title", "post.title", "title", ""]


def test_lookup_paths_without_action_collapse_separators():
    assert localize.lookup_paths("post", "", "title") == ["post.title", "post.title", "title", ""]


def test_model_name_without_object_uses_object_name(catalog: i18n.Catalog):
    form_builder = builder.FormBuilder("Comment", template=template.Template(), catalog=catalog)
    assert localize.model_name(form_builder) == "comment"
