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


"""Nested groups for associated objects and collections of associated objects."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

import markupsafe

import semform.errors as errors
import semform.htm as htm
import semform.log as log
import semform.models.form as form
import semform.orm as orm
import semform.util as util

if TYPE_CHECKING:
    import semform.builder as builder


def inputs_for_nested_attributes(
    form_builder: builder.FormBuilder,
    fields: Iterable[str],
    options: Mapping[str, Any],
    block: Callable[[builder.FormBuilder], Any] | None,
) -> markupsafe.Markup:
    """Render one fieldset per associated object named by the for option."""
    if block is not None:
        require_builder_block(
            block, "You gave for_ with a block to inputs, but the block does not accept the nested builder"
        )

    options = dict(options)
    target = options.pop("for")
    for_options = dict(options.pop("for_options", None) or {})
    field_names = list(fields)

    def fields_for_block(child: builder.FormBuilder) -> markupsafe.Markup:
        if block is None:
            return child.inputs(*field_names, **options)
        return child.inputs(*field_names, block=lambda: block(child), **options)

    if isinstance(target, (tuple, list)) and (len(target) == 2) and isinstance(target[0], str):
        record_or_name, obj = target
    else:
        record_or_name, obj = target, None

    result = semantic_fields_for(form_builder, record_or_name, obj, block=fields_for_block, **for_options)
    if block is not None:
        form_builder.template.concat(result)
    return result


def require_builder_block(block: Callable[..., Any], message: str) -> None:
    """Raise unless block can be called with exactly one positional argument."""
    if not callable(block):
        raise errors.ConfigurationError(f"{message}: {block!r} is not callable")
    try:
        signature = inspect.signature(block)
    except (TypeError, ValueError):
        return
    try:
        signature.bind(None)
    except TypeError:
        raise errors.ConfigurationError(message) from None


def semantic_fields_for(
    form_builder: builder.FormBuilder,
    record_or_name: Any,
    obj: Any = None,
    *,
    block: Callable[[builder.FormBuilder], Any],
    **options: Any,
) -> markupsafe.Markup:
    """Run block once per nested builder and return everything it rendered."""
    require_builder_block(block, "semantic_fields_for needs a block that accepts the nested builder")
    options = util.normalise_options(options)
    child_index = options.pop("child_index", None)
    for key in options:
        log.warning(f"Ignoring unsupported nested option {key!r} for {form_builder.object_name}")

    if isinstance(record_or_name, str):
        name = record_or_name
        target = obj if (obj is not None) else orm.read(form_builder.object, name)
    else:
        name = orm.model_name(record_or_name)
        target = record_or_name

    association = None
    if form_builder.object is not None:
        association = orm.association(form_builder.object, name)
    nested_attributes = (association is not None) or isinstance(target, (list, tuple))

    if _is_collection(target, association):
        parts = []
        for index, member in enumerate(target or []):
            position = index if (child_index is None) else child_index
            child = form_builder.child(
                f"{form_builder.object_name}[{name}_attributes][{position}]",
                member,
                form.NestingContext(parent=form_builder, association=name, index=index),
            )
            parts.append(form_builder.template.capture(block, child))
        return htm.join(parts)

    suffix = f"{name}_attributes" if nested_attributes else name
    child = form_builder.child(
        f"{form_builder.object_name}[{suffix}]",
        target,
        form.NestingContext(parent=form_builder, association=name, index=0),
    )
    return form_builder.template.capture(block, child)


def _is_collection(target: Any, association: form.Association | None) -> bool:
    if isinstance(target, (list, tuple)):
        return True
    return (association is not None) and association.macro.is_collection
