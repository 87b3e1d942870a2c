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
from unittest import mock

from cinder_collector.blockstorage import v2
from cinder_collector import collector
from cinder_collector import dataframe
from cinder_collector import exceptions
from cinder_collector import tests
from cinder_collector.tests import fakes


class CheckConfigTest(tests.TestCase):

    def test_full_config(self):
        credentials = collector.check_config(fakes.CONFIG, True)
        self.assertEqual(fakes.ENDPOINT, credentials.endpoint)
        self.assertEqual('admin', credentials.user)
        self.assertEqual('secret', credentials.password)
        self.assertEqual('admin', credentials.tenant)

    def test_tenant_is_optional_for_discovery(self):
        config = dict(fakes.CONFIG)
        del config['tenant']
        self.assertIsNone(collector.check_config(config).tenant)

    def test_tenant_is_required_for_collection(self):
        config = dict(fakes.CONFIG)
        del config['tenant']
        self.assertRaises(exceptions.ConfigError,
                          collector.check_config, config, True)

    def test_extra_fields_are_allowed(self):
        config = dict(fakes.CONFIG, region='RegionOne')
        collector.check_config(config, True)


class InvalidConfigTest(tests.TestCase):

    scenarios = [
        ('no_endpoint', dict(missing='endpoint', value=None)),
        ('no_user', dict(missing='user', value=None)),
        ('no_password', dict(missing='password', value=None)),
        ('empty_endpoint', dict(missing='endpoint', value='')),
        ('empty_password', dict(missing='password', value='')),
        ('integer_user', dict(missing='user', value=42)),
    ]

    def test_invalid_config(self):
        config = dict(fakes.CONFIG)
        if self.value is None:
            del config[self.missing]
        else:
            config[self.missing] = self.value
        self.assertRaises(exceptions.ConfigError,
                          collector.check_config, config)

    def test_no_config(self):
        self.assertRaises(exceptions.ConfigError,
                          collector.check_config, None)


class CinderCollectorTest(tests.TestCase):

    def setUp(self):
        super(CinderCollectorTest, self).setUp()
        self.cloud = fakes.FakeCloud(versions=('v2.0',))
        self.cloud.add_volume('demo', 11)
        for target, side_effect in (
                ('cinder_collector.identity.authenticate',
                 self.cloud.authenticate),
                ('cinder_collector.identity.list_tenants',
                 self.cloud.list_tenants),
                ('cinder_collector.blockstorage.dispatcher.get_adapter',
                 lambda version: v2.CinderV2Adapter())):
            patcher = mock.patch(target, side_effect=side_effect)
            patcher.start()
            self.addCleanup(patcher.stop)
        self.collector = collector.CinderCollector(host='collector-1')
        self.addCleanup(self.collector.stop)

    def test_plugin_identity(self):
        self.assertEqual('cinder', self.collector.name)
        self.assertEqual(1, self.collector.version)

    def test_config_policy(self):
        policy = self.collector.get_config_policy()
        config = dict(fakes.CONFIG)
        del config['tenant']
        self.assertEqual(config, policy(config))

    def test_get_metric_types(self):
        metric_types = self.collector.get_metric_types(fakes.CONFIG)

        self.assertEqual(18, len(metric_types))
        for metric_type in metric_types:
            self.assertEqual(fakes.CONFIG, metric_type.config)
            self.assertEqual(('intel', 'openstack', 'cinder'),
                             metric_type.namespace[:3])

    def test_get_metric_types_with_invalid_config(self):
        self.assertRaises(exceptions.ConfigError,
                          self.collector.get_metric_types, {'user': 'admin'})

    def test_collect_metrics(self):
        metric_types = [
            dataframe.MetricType(
                dataframe.build_path('demo', 'volumes', 'bytes'),
                fakes.CONFIG),
            dataframe.MetricType(
                dataframe.build_path('demo', 'limits', 'MaxTotalVolumes'),
                fakes.CONFIG),
        ]
        metrics = self.collector.collect_metrics(metric_types)

        self.assertEqual([11 * fakes.GiB, 10], [m.data for m in metrics])
        self.assertEqual(['demo', 'demo'], [m.tenant for m in metrics])
        self.assertEqual(
            'intel/openstack/cinder/demo/volumes/bytes', metrics[0].path())

    def test_collect_without_metric_types(self):
        self.assertEqual([], self.collector.collect_metrics([]))

    def test_collect_needs_a_tenant(self):
        config = dict(fakes.CONFIG)
        del config['tenant']
        self.assertRaises(
            exceptions.ConfigError,
            self.collector.collect_metrics,
            [dataframe.MetricType(
                dataframe.build_path('demo', 'volumes', 'count'), config)])
