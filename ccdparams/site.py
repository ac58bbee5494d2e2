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

import time
from typing import TYPE_CHECKING

from structlog import get_logger
from twisted.web import server

from ccdparams.util import LogDuration

if TYPE_CHECKING:
    from twisted.web.http import Request

logger = get_logger()


class LoggingSite(server.Site):
    """ Site that logs every finished request with its method, path, response code and duration.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._log = logger.new()

    def getResourceFor(self, request: 'Request'):
        request.started_at = time.monotonic()  # type: ignore[attr-defined]
        return super().getResourceFor(request)

    def log(self, request: 'Request') -> None:
        started_at = getattr(request, 'started_at', None)
        duration = LogDuration(time.monotonic() - started_at) if started_at is not None else None
        self._log.info(
            'request',
            method=request.method.decode('ascii', 'replace'),
            path=request.path.decode('utf-8', 'replace'),
            code=request.code,
            size=getattr(request, 'sentLength', None),
            duration=duration,
        )
