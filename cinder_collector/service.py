# -*- coding: utf-8 -*-
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.
#
import socket
import sys

from oslo_config import cfg
from oslo_log import log


service_opts = [
    cfg.StrOpt('host',
               default=socket.gethostname(),
               sample_default='<server-hostname.example.com>',
               help='Name of this node, reported as the source of every '
               'collected metric.')
]

cfg.CONF.register_opts(service_opts)


def prepare_service(argv=None, config_files=None):
    log.register_options(cfg.CONF)
    log.set_defaults()

    if argv is None:
        argv = sys.argv
    cfg.CONF(argv[1:], project='cinder-collector',
             validate_default_values=True,
             default_config_files=config_files)

    log.setup(cfg.CONF, 'cinder-collector')
