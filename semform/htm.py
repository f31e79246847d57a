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


"""Helpers for turning htpy elements into markup fragments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import htpy
import markupsafe

type Element = htpy.Element
type VoidElement = htpy.VoidElement
type Node = htpy.Element | htpy.VoidElement | markupsafe.Markup | str | None


def attrs(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge attribute mappings left to right, concatenating class values."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if (key == "class") and merged.get("class") and value:
                merged["class"] = f"{merged['class']} {value}"
            elif value is not None:
                merged[key] = value
    return merged


def fragments(value: Any) -> list[Any]:
    """Flatten nested iterables of renderable values, dropping None."""
    if value is None:
        return []
    if isinstance(value, (str, htpy.Element, htpy.VoidElement)) or hasattr(value, "__html__"):
        return [value]
    if isinstance(value, Iterable):
        return [fragment for item in value for fragment in fragments(item)]
    return [value]


def join(parts: Iterable[Any], separator: str = "") -> markupsafe.Markup:
    return markupsafe.Markup(separator).join(markup(part) for part in parts if part is not None)


def markup(value: Any) -> markupsafe.Markup:
    if value is None:
        return markupsafe.Markup("")
    if isinstance(value, markupsafe.Markup):
        return value
    if isinstance(value, (htpy.Element, htpy.VoidElement)):
        return markupsafe.Markup(str(value))
    if isinstance(value, str) or hasattr(value, "__html__"):
        return markupsafe.escape(value)
    if isinstance(value, Iterable):
        return join(value)
    return markupsafe.escape(str(value))
