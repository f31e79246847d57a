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


import types

import sqlalchemy
import sqlmodel.sql.sqltypes as sqltypes

import semform.models.form as form
import semform.orm as orm


def test_associations_of_mapped_class(post):
    found = {association.name: association for association in orm.associations(post)}
    assert found["author"].macro is form.Macro.BELONGS_TO
    assert found["author"].foreign_key == "author_id"
    assert found["tasks"].macro is form.Macro.HAS_MANY
    assert found["tasks"].macro.is_collection


def test_associations_of_plain_object():
    assert orm.associations(types.SimpleNamespace(name="x")) == []


def test_choices_for_enum_annotation(profile):
    assert orm.choices(profile, "colour") == [("red", "red"), ("green", "green"), ("blue", "blue")]
    assert orm.choices(profile, "nickname") == []


def test_column_reflects_type_and_limit(post):
    title = orm.column(post, "title")
    assert title is not None
    assert title.kind is form.InputKind.STRING
    assert title.limit == 255
    assert orm.column(post, "body").kind is form.InputKind.TEXT
    assert orm.column(post, "author") is None


def test_content_columns_skip_keys(post):
    assert sorted(orm.content_columns(post)) == ["body", "published", "title"]


def test_content_columns_of_pydantic_model(profile):
    assert "email" in orm.content_columns(profile)


def test_human_attribute_name_from_description(profile):
    assert orm.human_attribute_name(profile, "nickname") == "Display name"
    assert orm.human_attribute_name(_post_like(), "title") is None


def test_is_new_record(post, saved_post):
    assert orm.is_new_record(post)
    assert not orm.is_new_record(saved_post)
    assert orm.is_new_record(types.SimpleNamespace(id=None))
    assert not orm.is_new_record(types.SimpleNamespace(new_record=False))


def test_is_required(post, profile):
    assert orm.is_required(post, "title") is True
    assert orm.is_required(post, "body") is False
    assert orm.is_required(post, "author") is False
    assert orm.is_required(profile, "email") is True
    assert orm.is_required(types.SimpleNamespace(name="x"), "name") is None


def test_model_name(post):
    assert orm.model_name(post) == "post"
    assert orm.human_name(post) == "Post"


def test_read_mapping_and_object():
    assert orm.read({"name": "Ada"}, "name") == "Ada"
    assert orm.read(types.SimpleNamespace(name="Ada"), "name") == "Ada"
    assert orm.read(None, "name") is None


def test_record_id(saved_post):
    assert orm.record_id(saved_post) == "1"
    assert orm.record_id(types.SimpleNamespace(id=7)) == "7"


def test_sql_type_unwraps_sqlmodel_auto_string():
    column_type = orm._sql_type(sqltypes.AutoString(length=40))
    assert isinstance(column_type, sqlalchemy.String)
    assert column_type.length == 40


def _post_like() -> types.SimpleNamespace:
    return types.SimpleNamespace(title="x")