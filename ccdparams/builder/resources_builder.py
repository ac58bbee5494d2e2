# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from structlog import get_logger
from twisted.web import server
from twisted.web.resource import Resource

logger = get_logger()


class ResourcesBuilder:
    def __init__(self) -> None:
        self.log = logger.new()

    def build(self) -> server.Site:
        return self.create_resources()

    def create_resources(self) -> server.Site:
        from ccdparams.resources import InitParametersResource, SchemaResource, UpdateParametersResource
        from ccdparams.site import LoggingSite

        root = Resource()
        resources = [
            (b'init', InitParametersResource(), root),
            (b'update', UpdateParametersResource(), root),
            (b'schema', SchemaResource(), root),
        ]
        for url_path, resource, parent in resources:
            parent.putChild(url_path, resource)

        site = LoggingSite(root)
        self.log.debug('resources created', paths=[url_path.decode('ascii') for url_path, _, _ in resources])
        return site
