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


import asyncio

import quart

import semform.localize as localize
import semform.web as web


def _app() -> quart.Quart:
    app = quart.Quart(__name__)

    @app.route("/posts/<int:post_id>/edit")
    async def edit(post_id: int) -> str:
        return str(post_id)

    return app


def test_request_action_outside_request():
    assert web.request_action() == ""


def test_template_from_request_outside_request():
    assert web.template_from_request().params == {}


def test_template_from_request_inside_request():
    app = _app()

    async def render() -> tuple[dict[str, str], str]:
        async with app.test_request_context("/posts/1/edit"):
            tmpl = web.template_from_request()
            return tmpl.params, localize.action_name(tmpl)

    params, action = asyncio.run(render())
    assert params == {"post_id": "1", "action": "edit", "path": "/posts/1/edit"}
    assert action == "edit"
