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


"""Value types shared by the builder, the input renderers and the configuration."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Any

import pydantic

from . import schema

if TYPE_CHECKING:
    import semform.builder as builder


class InlineErrors(enum.Enum):
    LIST = "list"
    NONE = "none"
    SENTENCE = "sentence"


class InlinePart(enum.Enum):
    ERRORS = "errors"
    HINTS = "hints"
    INPUT = "input"


class InputKind(enum.Enum):
    BOOLEAN = "boolean"
    CHECK_BOXES = "check_boxes"
    DATE = "date"
    DATETIME = "datetime"
    EMAIL = "email"
    FILE = "file"
    HIDDEN = "hidden"
    NUMERIC = "numeric"
    PASSWORD = "password"
    PHONE = "phone"
    RADIO = "radio"
    SEARCH = "search"
    SELECT = "select"
    STRING = "string"
    TEXT = "text"
    TIME = "time"
    URL = "url"


class LabelStrategy(enum.Enum):
    AS_IS = "as_is"
    HUMANIZE = "humanize"
    TITLEIZE = "titleize"
    UNDERSCORE = "underscore"


class LookupKind(enum.Enum):
    ACTION = "action"
    ERROR = "error"
    HINT = "hint"
    LABEL = "label"
    TITLE = "title"

    @property
    def scope(self) -> str:
        return f"formtastic.{self.value}s"


class Macro(enum.Enum):
    BELONGS_TO = "belongs_to"
    HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"

    @property
    def is_collection(self) -> bool:
        return self in (Macro.HAS_MANY, Macro.HAS_AND_BELONGS_TO_MANY)


@dataclasses.dataclass(frozen=True)
class Association:
    name: str
    macro: Macro
    target: type
    foreign_key: str | None = None


@dataclasses.dataclass(frozen=True)
class Column:
    name: str
    kind: InputKind
    limit: int | None = None
    nullable: bool = True
    has_default: bool = False


class FieldDescriptor(schema.Frozen):
    name: str
    kind: InputKind | None = None
    options: dict[str, Any] = pydantic.Field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class NestingContext:
    """Parent builder, association name and zero based position of one nested group."""

    parent: builder.FormBuilder
    association: str
    index: int

    @property
    def display_index(self) -> int:
        # Legends count from one
        return self.index + 1
