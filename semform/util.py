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

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final

import semform.models.form as form

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

_ACRONYM_BOUNDARY: Final = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY: Final = re.compile(r"([a-z\d])([A-Z])")
_SANITIZE: Final = re.compile(r"\]\[|[^-a-zA-Z0-9:.]")


def call_or_get(duck: str | Callable[[Any], Any], obj: Any) -> Any:
    """Call duck with obj if it is callable, otherwise read the attribute it names."""
    if callable(duck):
        return duck(obj)
    value = getattr(obj, duck)
    if callable(value):
        return value()
    return value


def humanize(word: str) -> str:
    text = str(word)
    if text.endswith("_id"):
        text = text[:-3]
    text = text.replace("_", " ").strip()
    return text.capitalize()


def label_str(word: str, strategy: form.LabelStrategy) -> str:
    match strategy:
        case form.LabelStrategy.HUMANIZE:
            return humanize(word)
        case form.LabelStrategy.TITLEIZE:
            return titleize(word)
        case form.LabelStrategy.UNDERSCORE:
            return underscore(word)
        case form.LabelStrategy.AS_IS:
            return str(word)


def normalise_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Strip one trailing underscore from each key, so that as_ and class_ become as and class."""
    result: dict[str, Any] = {}
    for key, value in options.items():
        if key.endswith("_") and (not key.endswith("__")):
            key = key[:-1]
        result[key] = value
    return result


def sanitise_id(object_name: str) -> str:
    sanitised = _SANITIZE.sub("_", object_name)
    if sanitised.endswith("_"):
        sanitised = sanitised[:-1]
    return sanitised


def titleize(word: str) -> str:
    return " ".join(part.capitalize() for part in humanize(underscore(word)).split(" "))


def to_sentence(items: Sequence[str], connector: str = "and") -> str:
    words = [str(item) for item in items]
    match len(words):
        case 0:
            return ""
        case 1:
            return words[0]
        case 2:
            return f"{words[0]} {connector} {words[1]}"
        case _:
            return f"{', '.join(words[:-1])}, {connector} {words[-1]}"


def underscore(word: str) -> str:
    text = str(word).replace("::", "/")
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    return text.replace("-", "_").lower()
