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

from argparse import ArgumentParser

from structlog import get_logger

logger = get_logger()


def create_parser() -> ArgumentParser:
    from ccdparams.cli.util import create_parser
    parser = create_parser()
    parser.add_argument('--host', help='Interface to listen on, overrides HOST from the settings')
    parser.add_argument('--port', type=int, help='Port to listen on, overrides PORT from the settings')
    return parser


def main():
    from twisted.internet import reactor

    from ccdparams import __version__
    from ccdparams.builder.resources_builder import ResourcesBuilder
    from ccdparams.conf.get_settings import get_global_settings, get_settings_source

    parser = create_parser()
    args = parser.parse_args()

    settings = get_global_settings()
    host = args.host if args.host is not None else settings.HOST
    port = args.port if args.port is not None else settings.PORT

    site = ResourcesBuilder().build()
    reactor.listenTCP(port, site, interface=host)
    logger.info('ccdparams server', version=__version__, host=host, port=port, settings=get_settings_source())
    reactor.run()
