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


import markupsafe

import semform.builder as builder
import semform.config as config
import semform.labels as labels


def test_humanized_attribute_name_prefers_field_description(profile_builder: builder.FormBuilder):
    assert labels.humanized_attribute_name(profile_builder, "nickname") == "Display name"
    assert labels.humanized_attribute_name(profile_builder, "homepage") == "Homepage"


def test_hint_is_rendered_when_given(post_builder: builder.FormBuilder):
    assert post_builder.inline_hints_for("title", hint="Keep it short") == '<p class="inline-hints">Keep it short</p>'


def test_hint_is_omitted_by_default(post_builder: builder.FormBuilder):
    assert post_builder.inline_hints_for("title") is None


def test_label_for_optional_field_has_no_indicator(post_builder: builder.FormBuilder):
    assert post_builder.label("body") == '<label for="post_body">Body</label>'


def test_label_for_required_field_has_abbr(post_builder: builder.FormBuilder):
    assert post_builder.label("title") == '<label for="post_title">Title<abbr title="required">*</abbr></label>'


def test_label_html_is_merged(post_builder: builder.FormBuilder):
    html = post_builder.label("body", label_html={"class": "wide"})
    assert html == '<label for="post_body" class="wide">Body</label>'


def test_label_text_is_escaped(post_builder: builder.FormBuilder):
    html = post_builder.label("body", "<b>Body</b>")
    assert "&lt;b&gt;Body&lt;/b&gt;" in html


def test_label_text_markup_is_kept(post_builder: builder.FormBuilder):
    html = post_builder.label("body", markupsafe.Markup("<b>Body</b>"))
    assert html == '<label for="post_body"><b>Body</b></label>'


def test_label_text_override(post_builder: builder.FormBuilder):
    html = post_builder.label("title", "Heading")
    assert html == '<label for="post_title">Heading<abbr title="required">*</abbr></label>'


def test_required_and_optional_strings_from_config(post_builder: builder.FormBuilder):
    post_builder.config = config.FormConfig(required_string="(required)", optional_string="(optional)")
    assert post_builder.label("title") == '<label for="post_title">Title(required)</label>'
    assert post_builder.label("body") == '<label for="post_body">Body(optional)</label>'
