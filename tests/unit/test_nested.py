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


import logging
import types

import pytest

import semform.builder as builder
import semform.errors as errors
import semform.nested as nested
import semform.template as template


@pytest.fixture
def tasks_builder(post_with_tasks, tmpl: template.Template, form_config) -> builder.FormBuilder:
    return builder.FormBuilder("post", post_with_tasks, template=tmpl, config=form_config)


def test_block_form_receives_each_nested_builder(tasks_builder: builder.FormBuilder, tmpl: template.Template):
    seen = []

    def task_fields(task_form: builder.FormBuilder):
        seen.append(task_form.nesting.display_index)
        return task_form.input("name")

    html = tasks_builder.inputs(name="Task #%i", for_="tasks", block=task_fields)
    assert seen == [1, 2, 3]
    assert html.count("<fieldset") == 3
    assert tmpl.output() == html


def test_block_without_parameter_raises_before_output(tasks_builder: builder.FormBuilder, tmpl: template.Template):
    with pytest.raises(errors.ConfigurationError):
        tasks_builder.inputs(name="Task #%i", for_="tasks", block=lambda: None)
    assert tmpl.output() == ""


def test_child_index_replaces_position(tasks_builder: builder.FormBuilder):
    html = tasks_builder.semantic_fields_for(
        "tasks", block=lambda task_form: task_form.input("name"), child_index="new"
    )
    assert html.count('name="post[tasks_attributes][new][name]"') == 3


def test_collection_legends_count_from_one(tasks_builder: builder.FormBuilder):
    html = tasks_builder.inputs("name", name="Task #%i", for_="tasks")
    first = html.index("<legend><span>Task #1</span></legend>")
    second = html.index("<legend><span>Task #2</span></legend>")
    third = html.index("<legend><span>Task #3</span></legend>")
    assert first < second < third
    assert "Task #0" not in html
    assert "Task #4" not in html


def test_collection_members_are_named_by_position(tasks_builder: builder.FormBuilder):
    html = tasks_builder.inputs("name", for_="tasks")
    assert 'name="post[tasks_attributes][0][name]" size="50" value="Draft"' in html
    assert 'id="post_tasks_attributes_2_name"' in html
    assert 'value="Publish"' in html


def test_for_accepts_name_and_object(tasks_builder: builder.FormBuilder):
    html = tasks_builder.inputs("name", for_=("tasks", [types.SimpleNamespace(name="Only")]))
    assert 'name="post[tasks_attributes][0][name]"' in html
    assert "Draft" not in html


def test_non_callable_block_is_rejected():
    with pytest.raises(errors.ConfigurationError):
        nested.require_builder_block("not a block", "needs a block")


def test_single_association_uses_attributes_suffix(post_builder: builder.FormBuilder):
    author = types.SimpleNamespace(name="Ada")
    html = post_builder.semantic_fields_for("author", author, block=lambda author_form: author_form.input("name"))
    assert 'id="post_author_attributes_name"' in html
    assert 'name="post[author_attributes][name]"' in html


def test_single_object_without_association_is_nested_by_name(post_builder: builder.FormBuilder):
    settings = types.SimpleNamespace(theme="dark")
    html = post_builder.semantic_fields_for(
        "settings", settings, block=lambda settings_form: settings_form.input("theme")
    )
    assert 'name="post[settings][theme]"' in html
    assert 'value="dark"' in html


def test_unsupported_options_are_logged(tasks_builder: builder.FormBuilder, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="semform"):
        tasks_builder.semantic_fields_for("tasks", block=lambda task_form: task_form.input("name"), index=3)
    assert "Ignoring unsupported nested option 'index'" in caplog.text
