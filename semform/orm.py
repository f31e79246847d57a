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


"""Reflection over the bound object.

Mapped classes (SQLModel tables and other SQLAlchemy declarative classes) are
read through the SQLAlchemy mapper. Plain pydantic models are read through
their field annotations. Anything else only offers attribute access.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import types
from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union, get_args, get_origin

import pydantic
import quart.datastructures as datastructures
import sqlalchemy
import sqlalchemy.orm as orm
import sqlmodel

import semform.log as log
import semform.models.form as form
import semform.util as util

if TYPE_CHECKING:
    import pydantic.fields as fields

_IGNORED_CONTENT_COLUMNS = frozenset(
    {"created_at", "updated_at", "created_on", "updated_on", "lock_version", "version"}
)


def annotation_kind(obj: Any, method: str) -> form.InputKind | None:  # noqa: C901
    """Infer an input kind from a pydantic field annotation, or None for plain strings."""
    field_info = _field_info(obj, method)
    if field_info is None:
        return None

    annotation = _unwrap(field_info.annotation)
    origin = get_origin(annotation)

    if annotation is datastructures.FileStorage:
        return form.InputKind.FILE
    if annotation is bool:
        return form.InputKind.BOOLEAN
    if annotation is pydantic.EmailStr:
        return form.InputKind.EMAIL
    if annotation is pydantic.HttpUrl:
        return form.InputKind.URL
    if annotation is pydantic.SecretStr:
        return form.InputKind.PASSWORD
    if annotation in (int, float, decimal.Decimal):
        return form.InputKind.NUMERIC
    if annotation is datetime.datetime:
        return form.InputKind.DATETIME
    if annotation is datetime.date:
        return form.InputKind.DATE
    if annotation is datetime.time:
        return form.InputKind.TIME
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return form.InputKind.SELECT

    if origin is Literal:
        if len(get_args(annotation)) == 1:
            return form.InputKind.HIDDEN
        return form.InputKind.SELECT

    if origin in (set, list, frozenset):
        args = get_args(annotation)
        if args:
            first_arg = args[0]
            if isinstance(first_arg, type) and issubclass(first_arg, enum.Enum):
                return form.InputKind.CHECK_BOXES
            if get_origin(first_arg) is Literal:
                return form.InputKind.CHECK_BOXES
            if first_arg is datastructures.FileStorage:
                return form.InputKind.FILE

    return None


def association(obj: Any, method: str) -> form.Association | None:
    for candidate in associations(obj):
        if candidate.name == method:
            return candidate
    return None


def associations(obj: Any) -> list[form.Association]:
    mapper = _mapper(obj)
    if mapper is None:
        return []
    result = []
    for relationship in mapper.relationships:
        match relationship.direction:
            case orm.MANYTOONE:
                macro = form.Macro.BELONGS_TO
            case orm.MANYTOMANY:
                macro = form.Macro.HAS_AND_BELONGS_TO_MANY
            case _:
                macro = form.Macro.HAS_MANY if relationship.uselist else form.Macro.HAS_ONE
        foreign_key = None
        if macro is form.Macro.BELONGS_TO:
            local = sorted(column.key for column in relationship.local_columns if column.key)
            foreign_key = local[0] if local else None
        result.append(
            form.Association(
                name=relationship.key,
                macro=macro,
                target=relationship.mapper.class_,
                foreign_key=foreign_key,
            )
        )
    return result


def choices(obj: Any, method: str) -> list[tuple[str, Any]]:  # noqa: C901
    """Return (label, value) pairs for a field restricted to a fixed set of values."""
    column_type = _column_type(obj, method)
    if isinstance(column_type, sqlalchemy.Enum):
        if column_type.enum_class is not None:
            return [(str(member.value), member.value) for member in column_type.enum_class]
        return [(str(value), value) for value in column_type.enums]

    field_info = _field_info(obj, method)
    if field_info is None:
        return []
    annotation = _unwrap(field_info.annotation)
    origin = get_origin(annotation)

    if origin is Literal:
        return [(str(value), value) for value in get_args(annotation)]

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return [(str(member.value), member.value) for member in annotation]

    if origin in (set, list, frozenset):
        args = get_args(annotation)
        if args:
            inner = args[0]
            if isinstance(inner, type) and issubclass(inner, enum.Enum):
                return [(str(member.value), member.value) for member in inner]
            if get_origin(inner) is Literal:
                return [(str(value), value) for value in get_args(inner)]

    return []


def column(obj: Any, method: str) -> form.Column | None:
    mapper = _mapper(obj)
    if (mapper is None) or (method not in mapper.columns):
        return None
    mapped = mapper.columns[method]
    column_type = _sql_type(mapped.type)
    limit = None
    if isinstance(column_type, sqlalchemy.Boolean):
        kind = form.InputKind.BOOLEAN
    elif isinstance(column_type, sqlalchemy.DateTime):
        kind = form.InputKind.DATETIME
    elif isinstance(column_type, sqlalchemy.Date):
        kind = form.InputKind.DATE
    elif isinstance(column_type, sqlalchemy.Time):
        kind = form.InputKind.TIME
    elif isinstance(column_type, sqlalchemy.Enum):
        kind = form.InputKind.SELECT
    elif isinstance(column_type, sqlalchemy.Text):
        kind = form.InputKind.TEXT
    elif isinstance(column_type, sqlalchemy.String):
        kind = form.InputKind.STRING
        limit = column_type.length
    elif isinstance(column_type, (sqlalchemy.Integer, sqlalchemy.Float, sqlalchemy.Numeric)):
        kind = form.InputKind.NUMERIC
    else:
        kind = form.InputKind.STRING
    has_default = (mapped.default is not None) or (mapped.server_default is not None) or mapped.primary_key
    return form.Column(
        name=method,
        kind=kind,
        limit=limit,
        nullable=bool(mapped.nullable),
        has_default=has_default,
    )


def content_columns(obj: Any) -> list[str]:
    """Names of the editable attributes, excluding keys, counters and timestamps."""
    mapper = _mapper(obj)
    if mapper is not None:
        names = []
        for attribute in mapper.column_attrs:
            mapped = attribute.columns[0]
            if mapped.primary_key or mapped.foreign_keys:
                continue
            names.append(attribute.key)
    elif isinstance(obj, pydantic.BaseModel):
        names = list(type(obj).model_fields)
    else:
        return []
    return [
        name
        for name in names
        if (name != "id")
        and (not name.endswith("_id"))
        and (not name.endswith("_count"))
        and (name not in _IGNORED_CONTENT_COLUMNS)
    ]


def errors_on(obj: Any, method: str) -> list[str]:
    errors = getattr(obj, "errors", None)
    if not isinstance(errors, Mapping):
        return []
    found = errors.get(method)
    if not found:
        return []
    if isinstance(found, str):
        return [found]
    return [str(error) for error in found]


def has_errors(obj: Any) -> bool:
    return isinstance(getattr(obj, "errors", None), Mapping)


def human_attribute_name(obj: Any, method: str) -> str | None:
    cls = type(obj)
    converter = getattr(cls, "human_attribute_name", None)
    if callable(converter):
        return str(converter(method))
    field_info = _field_info(obj, method)
    if field_info is not None:
        return field_info.description or field_info.title
    return None


def human_name(obj: Any) -> str:
    cls = type(obj)
    converter = getattr(cls, "human_name", None)
    if callable(converter):
        return str(converter())
    return util.humanize(util.underscore(cls.__name__))


def is_new_record(obj: Any) -> bool:
    marker = getattr(obj, "new_record", None)
    if callable(marker):
        return bool(marker())
    if isinstance(marker, bool):
        return marker
    state = sqlalchemy.inspect(obj, raiseerr=False)
    if isinstance(state, orm.InstanceState):
        return not state.has_identity
    return getattr(obj, "id", None) is None


def is_required(obj: Any, method: str) -> bool | None:
    """Reflected requiredness, or None when the object carries no field metadata."""
    names = [method]
    found = association(obj, method)
    if (found is not None) and found.foreign_key:
        names.insert(0, found.foreign_key)
    for name in names:
        field_info = _field_info(obj, name)
        if field_info is not None:
            return field_info.is_required()
        mapped = column(obj, name)
        if mapped is not None:
            return (not mapped.nullable) and (not mapped.has_default)
    return None


def model_name(obj: Any) -> str:
    return util.underscore(type(obj).__name__)


def query_collection(session: sqlmodel.Session | None, target: type) -> list[Any] | None:
    if session is None:
        return None
    log.debug(f"Loading {target.__name__} records for a collection input")
    return list(session.exec(sqlmodel.select(target)).all())


def read(obj: Any, method: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(method)
    return getattr(obj, method, None)


def record_id(obj: Any) -> str | None:
    state = sqlalchemy.inspect(obj, raiseerr=False)
    if isinstance(state, orm.InstanceState) and state.identity:
        return "_".join(str(part) for part in state.identity)
    value = getattr(obj, "id", None)
    return None if (value is None) else str(value)


def _column_type(obj: Any, method: str) -> Any:
    mapper = _mapper(obj)
    if (mapper is None) or (method not in mapper.columns):
        return None
    return _sql_type(mapper.columns[method].type)


def _field_info(obj: Any, method: str) -> fields.FieldInfo | None:
    cls = obj if isinstance(obj, type) else type(obj)
    if not (isinstance(cls, type) and issubclass(cls, pydantic.BaseModel)):
        return None
    return cls.model_fields.get(method)


def _mapper(obj: Any) -> orm.Mapper[Any] | None:
    if obj is None:
        return None
    cls = obj if isinstance(obj, type) else type(obj)
    mapper = sqlalchemy.inspect(cls, raiseerr=False)
    if isinstance(mapper, orm.Mapper):
        return mapper
    return None


def _sql_type(column_type: Any) -> Any:
    # SQLModel wraps str columns in AutoString, a TypeDecorator over String
    while isinstance(column_type, sqlalchemy.TypeDecorator):
        column_type = column_type.impl_instance
    return column_type


def _unwrap(annotation: Any) -> Any:
    if (annotation is not None) and hasattr(annotation, "__value__"):
        annotation = annotation.__value__
    origin = get_origin(annotation)

    if isinstance(annotation, types.UnionType) or (origin is Union):
        non_none_types = [arg for arg in get_args(annotation) if (arg is not type(None))]
        if non_none_types:
            annotation = non_none_types[0]
            origin = get_origin(annotation)

    if origin is Annotated:
        annotation = get_args(annotation)[0]
    return annotation
