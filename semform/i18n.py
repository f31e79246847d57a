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


"""Translation catalogs with scoped keys, default chains and interpolation."""

from __future__ import annotations

import dataclasses
import pathlib
import re
from typing import TYPE_CHECKING, Any, Final

import yaml

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

LOCALE_DIR: Final = pathlib.Path(__file__).parent / "locale"

_INTERPOLATION: Final = re.compile(r"%\{(\w+)\}")


@dataclasses.dataclass(frozen=True)
class Key:
    """A symbolic value, looked up in the catalog instead of used literally."""

    name: str

    def __str__(self) -> str:
        return self.name


class Catalog:
    def __init__(
        self,
        translations: Mapping[str, Mapping[str, Any]] | None = None,
        locale: str = "en",
        default_locale: str = "en",
    ) -> None:
        self.locale = _normalise_locale(locale)
        self.default_locale = _normalise_locale(default_locale)
        self._translations: dict[str, dict[str, Any]] = {}
        for name, data in (translations or {}).items():
            self.store(name, data)

    @classmethod
    def bundled(cls, locale: str = "en") -> Catalog:
        catalog = cls(locale=locale)
        for path in sorted(LOCALE_DIR.glob("*.yml")):
            catalog.load_path(path)
        return catalog

    def load_path(self, path: pathlib.Path) -> None:
        """Load a YAML file whose top level keys are locale names."""
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if raw is None:
            return
        if not isinstance(raw, dict):
            raise ValueError(f"Translation file {path} must contain a mapping of locales")
        for name, data in raw.items():
            if not isinstance(data, dict):
                raise ValueError(f"Locale {name!r} in {path} must contain a mapping")
            self.store(str(name), data)

    def lookup(self, key: str | Key, *, scope: str | None = None, locale: str | None = None) -> str | None:
        parts = _key_parts(scope) + _key_parts(str(key))
        for candidate in self._locales(locale):
            node: Any = self._translations.get(candidate)
            for part in parts:
                if isinstance(node, dict) and (part in node):
                    node = node[part]
                else:
                    node = None
                    break
            if isinstance(node, str):
                return node
        return None

    def store(self, locale: str, data: Mapping[str, Any]) -> None:
        target = self._translations.setdefault(_normalise_locale(locale), {})
        _deep_merge(target, data)

    def translate(
        self,
        key: str | Key,
        *,
        scope: str | None = None,
        default: str | Sequence[str | Key] | None = None,
        locale: str | None = None,
        **interpolations: Any,
    ) -> str | None:
        """Translate key, trying each default in turn.

        Every default is first looked up as a key under the same scope. The
        final default, if it is not itself a key in the catalog, is returned as
        a literal string. Without any default a missing key gives None.
        """
        if default is None:
            defaults: list[str | Key] = []
        elif isinstance(default, (str, Key)):
            defaults = [default]
        else:
            defaults = list(default)

        for candidate in [key, *defaults]:
            found = self.lookup(candidate, scope=scope, locale=locale)
            if found is not None:
                return _interpolate(found, interpolations)
        if not defaults:
            return None
        return _interpolate(str(defaults[-1]), interpolations)

    def _locales(self, locale: str | None) -> Iterator[str]:
        seen: set[str] = set()
        for name in (_normalise_locale(locale or self.locale), self.default_locale):
            for candidate in (name, name.split("-")[0]):
                if candidate and (candidate not in seen):
                    seen.add(candidate)
                    yield candidate


def _deep_merge(target: dict[str, Any], data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        # YAML reads bare yes and no as booleans
        key = _yaml_key(key)
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        elif isinstance(value, dict):
            target[key] = {}
            _deep_merge(target[key], value)
        else:
            target[key] = value


def _interpolate(text: str, values: Mapping[str, Any]) -> str:
    if not values:
        return text
    return _INTERPOLATION.sub(lambda match: str(values.get(match.group(1), match.group(0))), text)


def _key_parts(key: str | None) -> list[str]:
    if not key:
        return []
    return [part for part in key.split(".") if part]


def _normalise_locale(locale: str | None) -> str:
    if not locale:
        return ""
    return str(locale).strip().lower().replace("_", "-")


def _yaml_key(key: Any) -> str:
    if key is True:
        return "yes"
    if key is False:
        return "no"
    return str(key)
