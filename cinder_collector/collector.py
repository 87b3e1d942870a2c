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
from oslo_log import log as logging
from voluptuous import All
from voluptuous import ALLOW_EXTRA
from voluptuous import Error as VoluptuousError
from voluptuous import Length
from voluptuous import Optional
from voluptuous import Required
from voluptuous import Schema

from cinder_collector import dataframe
from cinder_collector import exceptions
from cinder_collector import orchestrator

LOG = logging.getLogger(__name__)


def get_config_schema(tenant_required=False):
    """Returns the schema of the configuration attached to metric types.

    ``tenant`` is the privileged tenant used to list volumes and snapshots
    of every tenant. It is only needed to collect metrics.
    """
    tenant = Required('tenant') if tenant_required else Optional('tenant')
    return Schema({
        Required('endpoint'): All(str, Length(min=1)),
        Required('user'): All(str, Length(min=1)),
        Required('password'): All(str, Length(min=1)),
        tenant: All(str, Length(min=1)),
    }, extra=ALLOW_EXTRA)


def check_config(config, tenant_required=False):
    """Validates a plugin configuration.

    :raises: ConfigError
    :rtype: cinder_collector.orchestrator.Credentials
    """
    try:
        config = get_config_schema(tenant_required)(dict(config or {}))
    except VoluptuousError as e:
        LOG.error('Invalid plugin configuration: %s', e)
        raise exceptions.ConfigError(
            'Invalid plugin configuration: {}'.format(e))
    return orchestrator.Credentials(
        config['endpoint'],
        config['user'],
        config['password'],
        config.get('tenant'))


class CinderCollector(object):
    """Cinder metrics collector plugin.

    One instance is meant to live as long as the plugin process: tenant
    sessions and limits are cached by the instance.
    """

    name = dataframe.PLUGIN_NAME
    version = 1

    def __init__(self, host=None):
        self._orchestrator = orchestrator.Orchestrator(host)

    def stop(self):
        self._orchestrator.stop()

    def get_config_policy(self):
        return get_config_schema()

    def get_metric_types(self, config):
        """Returns every metric type available for an account.

        :param config: plugin configuration, attached to every returned
                       metric type
        :rtype: list of cinder_collector.dataframe.MetricType
        """
        credentials = check_config(config)
        return [dataframe.MetricType(ns, config)
                for ns in self._orchestrator.discover(credentials)]

    def collect_metrics(self, metric_types):
        """Returns the value of every requested metric type.

        The configuration of the first metric type is used for the whole
        collection.

        :rtype: list of cinder_collector.dataframe.Metric
        """
        if not metric_types:
            return []
        credentials = check_config(metric_types[0].config,
                                   tenant_required=True)
        return self._orchestrator.collect(
            [mt.namespace for mt in metric_types], credentials)
