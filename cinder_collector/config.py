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
import multiprocessing

from keystoneauth1 import loading as ks_loading
from oslo_config import cfg
import requests

COLLECTOR_CINDER_OPTS = 'collector_cinder'

collector_cinder_opts = [
    cfg.StrOpt(
        'identity_api_version',
        default='3',
        help='Keystone version used to list the tenants of the account.',
    ),
    cfg.StrOpt(
        'user_domain_name',
        default='Default',
        help='Domain of the collecting user (Keystone v3 only).',
    ),
    cfg.StrOpt(
        'project_domain_name',
        default='Default',
        help='Domain of the collected tenants (Keystone v3 only).',
    ),
    cfg.StrOpt(
        'interface',
        default='public',
        choices=('public', 'internal', 'admin'),
        help='Type of endpoint in the service catalog to use for '
             'communication with the block storage service.',
    ),
    cfg.StrOpt(
        'region_name',
        help='Region of the block storage endpoint. Any region if unset.',
    ),
    cfg.IntOpt(
        'max_threads',
        # NOTE: same default as futurist's ThreadPoolExecutor
        default=multiprocessing.cpu_count() * 5,
        sample_default=20,
        min=1,
        help='Maximal number of concurrent requests sent during a '
             'collection cycle. Defaults to 5 times the number of '
             'available CPUs',
    ),
    cfg.IntOpt(
        'http_pool_maxsize',
        default=requests.adapters.DEFAULT_POOLSIZE,
        help='Size of the HTTP connection pool of each tenant session. '
             'Defaults to requests.adapters.DEFAULT_POOLSIZE',
    ),
]

# Seconds an HTTP call to the identity or block storage service may last.
DEFAULT_HTTP_TIMEOUT = 60

# NOTE: timeout, insecure, cafile, certfile, keyfile and collect_timing.
# ``timeout`` bounds every single HTTP call.
session_opts = ks_loading.get_session_conf_options()
cfg.set_defaults(session_opts, timeout=DEFAULT_HTTP_TIMEOUT)

cfg.CONF.register_opts(collector_cinder_opts, COLLECTOR_CINDER_OPTS)
cfg.CONF.register_opts(session_opts, COLLECTOR_CINDER_OPTS)
