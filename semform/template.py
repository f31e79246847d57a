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

from typing import TYPE_CHECKING, Any

import markupsafe

import semform.htm as htm

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class Template:
    """The rendering context of one request.

    A template owns a stack of output buffers. Block form builder calls
    append their result to the innermost buffer with concat, and capture
    runs a block against a fresh buffer so that nested output can be
    collected rather than written straight to the page.
    """

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self.params: dict[str, Any] = dict(params or {})
        self._buffers: list[list[markupsafe.Markup]] = [[]]

    @property
    def depth(self) -> int:
        return len(self._buffers)

    def capture(self, block: Callable[..., Any], *args: Any) -> markupsafe.Markup:
        """Run block and return what it wrote to the buffer merged with what it returned.

        Returned fragments keep their order. A returned fragment that is also in
        the buffer, matched by identity, appears once, after any fragments
        written before it.
        """
        self._buffers.append([])
        try:
            value = block(*args)
        finally:
            captured = self._buffers.pop()

        parts = []
        pending = list(captured)
        for fragment in htm.fragments(value):
            position = next((i for i, written in enumerate(pending) if written is fragment), None)
            if position is None:
                parts.append(fragment)
            else:
                parts.extend(pending[: position + 1])
                del pending[: position + 1]
        parts.extend(pending)
        return htm.join(parts)

    def concat(self, fragment: Any) -> markupsafe.Markup:
        rendered = htm.markup(fragment)
        self._buffers[-1].append(rendered)
        return rendered

    def output(self) -> markupsafe.Markup:
        return htm.join(self._buffers[0])
