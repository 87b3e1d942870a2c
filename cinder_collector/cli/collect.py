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
from oslo_config import cfg
from oslo_log import log

from cinder_collector import collector
from cinder_collector import dataframe
from cinder_collector import service

CONF = cfg.CONF
LOG = log.getLogger(__name__)

credentials_opts = [
    cfg.StrOpt('endpoint',
               help='Identity endpoint, e.g. http://localhost:5000/v3'),
    cfg.StrOpt('user',
               help='User collecting the metrics.'),
    cfg.StrOpt('password',
               secret=True,
               help='Password of the collecting user.'),
    cfg.StrOpt('tenant',
               default='admin',
               help='Privileged tenant listing volumes and snapshots of '
                    'every tenant.'),
]

CONF.register_cli_opts(credentials_opts, 'credentials')


def get_config():
    return {
        'endpoint': CONF.credentials.endpoint,
        'user': CONF.credentials.user,
        'password': CONF.credentials.password,
        'tenant': CONF.credentials.tenant,
    }


class CollectCommand(object):

    def __init__(self):
        self._collector = collector.CinderCollector()
        self._config = get_config()

    def stop(self):
        self._collector.stop()

    def discover(self):
        for metric_type in self._collector.get_metric_types(self._config):
            print(dataframe.path_to_string(metric_type.namespace))

    def collect(self):
        if CONF.command.metric:
            metric_types = [
                dataframe.MetricType(dataframe.path_from_string(path),
                                     self._config)
                for path in CONF.command.metric]
        else:
            metric_types = self._collector.get_metric_types(self._config)
        metrics = self._collector.collect_metrics(metric_types)
        LOG.debug('Collected %s metrics.', len(metrics))
        for metric in metrics:
            print('{} = {}'.format(metric.path(), metric.data))


def call_discover(command_object):
    command_object.discover()


def call_collect(command_object):
    command_object.collect()


def add_command_parsers(subparsers):
    parser = subparsers.add_parser('discover')
    parser.set_defaults(func=call_discover)

    parser = subparsers.add_parser('collect')
    parser.set_defaults(func=call_collect)
    parser.add_argument('metric', nargs='*',
                        help='Namespaces to collect. Every available metric '
                             'if none is given.')


command_opt = cfg.SubCommandOpt('command',
                                title='Command',
                                help='Available commands',
                                handler=add_command_parsers)

CONF.register_cli_opt(command_opt)


def main():
    service.prepare_service()
    command_object = CollectCommand()
    try:
        CONF.command.func(command_object)
    finally:
        command_object.stop()
