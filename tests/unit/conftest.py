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


import datetime
import enum
from collections.abc import Generator

import pydantic
import pytest
import sqlalchemy
import sqlmodel

import semform.builder as builder
import semform.config as config
import semform.i18n as i18n
import semform.template as template


class Colour(enum.Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class Author(sqlmodel.SQLModel, table=True):
    id: int | None = sqlmodel.Field(default=None, primary_key=True)
    name: str
    posts: list["Post"] = sqlmodel.Relationship(back_populates="author")


class Post(sqlmodel.SQLModel, table=True):
    id: int | None = sqlmodel.Field(default=None, primary_key=True)
    title: str = sqlmodel.Field(max_length=255)
    body: str | None = sqlmodel.Field(default=None, sa_column=sqlalchemy.Column(sqlalchemy.Text))
    published: bool = False
    author_id: int | None = sqlmodel.Field(default=None, foreign_key="author.id")
    author: Author | None = sqlmodel.Relationship(back_populates="posts")
    tasks: list["Task"] = sqlmodel.Relationship(back_populates="post")


class Task(sqlmodel.SQLModel, table=True):
    id: int | None = sqlmodel.Field(default=None, primary_key=True)
    name: str = ""
    post_id: int | None = sqlmodel.Field(default=None, foreign_key="post.id")
    post: Post | None = sqlmodel.Relationship(back_populates="tasks")


class Profile(pydantic.BaseModel):
    email: pydantic.EmailStr
    secret: pydantic.SecretStr
    homepage: pydantic.HttpUrl | None = None
    age: int | None = None
    born: datetime.date | None = None
    colour: Colour = Colour.RED
    tags: set[Colour] = pydantic.Field(default_factory=set)
    agree: bool = False
    nickname: str = pydantic.Field(default="", description="Display name")


@pytest.fixture
def catalog() -> i18n.Catalog:
    return i18n.Catalog.bundled()


@pytest.fixture
def engine() -> sqlalchemy.Engine:
    engine = sqlmodel.create_engine("sqlite://")
    sqlmodel.SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def form_config() -> config.FormConfig:
    return config.FormConfig()


@pytest.fixture
def post() -> Post:
    return Post(title="Hello")


@pytest.fixture
def post_builder(post: Post, tmpl: template.Template, form_config: config.FormConfig) -> builder.FormBuilder:
    return builder.FormBuilder("post", post, template=tmpl, config=form_config)


@pytest.fixture
def profile() -> Profile:
    return Profile(email="ada@example.org", secret="hunter2", born=datetime.date(2020, 1, 2))


@pytest.fixture
def profile_builder(
    profile: Profile, tmpl: template.Template, form_config: config.FormConfig
) -> builder.FormBuilder:
    return builder.FormBuilder("profile", profile, template=tmpl, config=form_config)


@pytest.fixture
def tmpl() -> template.Template:
    return template.Template()


@pytest.fixture
def post_with_tasks() -> Post:
    return Post(title="Plans", tasks=[Task(name="Draft"), Task(name="Review"), Task(name="Publish")])


@pytest.fixture
def session(engine: sqlalchemy.Engine) -> Generator[sqlmodel.Session, None, None]:
    with sqlmodel.Session(engine) as session:
        author = Author(name="Ada")
        session.add(author)
        session.commit()
        session.refresh(author)
        yield session


@pytest.fixture
def saved_post(session: sqlmodel.Session) -> Post:
    post = Post(title="Saved", author_id=1)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post
