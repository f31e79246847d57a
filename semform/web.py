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


"""Quart request integration."""

from __future__ import annotations

import htpy
import markupsafe
import quart
import quart_wtf.utils as utils

import semform.template as template


def csrf_input() -> markupsafe.Markup:
    csrf_token = utils.generate_csrf()
    return markupsafe.Markup(str(htpy.input(type="hidden", name="csrf_token", value=csrf_token)))


def request_action() -> str:
    """The view function name of the current request endpoint, without its blueprint."""
    if not quart.has_request_context():
        return ""
    endpoint = quart.request.endpoint or ""
    return endpoint.rsplit(".", 1)[-1]


def template_from_request() -> template.Template:
    """A template whose params carry the view arguments and action of the current request."""
    params: dict[str, str] = {}
    if quart.has_request_context():
        params.update({key: str(value) for key, value in (quart.request.view_args or {}).items()})
        params["action"] = request_action()
        params["path"] = quart.request.path
    return template.Template(params)
