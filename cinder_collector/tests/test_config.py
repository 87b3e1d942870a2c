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
from cinder_collector.common import config as cc_config
from cinder_collector import tests


class ConfigTest(tests.TestCase):
    def test_config(self):
        opts = dict(cc_config.list_opts())
        names = [opt.name for opt in opts['collector_cinder']]
        for name in ('identity_api_version', 'max_threads', 'timeout'):
            self.assertIn(name, names)
        self.assertEqual(['host'], [opt.name for opt in opts[None]])

    def test_defaults(self):
        self.assertEqual('3', self.conf.collector_cinder.identity_api_version)
        self.assertEqual('public', self.conf.collector_cinder.interface)
        self.assertIsNone(self.conf.collector_cinder.region_name)

    def test_http_calls_have_a_deadline(self):
        self.assertEqual(60, self.conf.collector_cinder.timeout)
        opts = dict(cc_config.list_opts())
        timeout = [opt for opt in opts['collector_cinder']
                   if opt.name == 'timeout'][0]
        self.assertEqual(60, timeout.default)
