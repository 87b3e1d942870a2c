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
import threading
import time
from unittest import mock

from cinder_collector import cache
from cinder_collector import dataframe
from cinder_collector import tests
from cinder_collector.tests import fakes


class CollectorCacheTest(tests.TestCase):

    def setUp(self):
        super(CollectorCacheTest, self).setUp()
        self.cache = cache.CollectorCache()

    def test_tenant_directory(self):
        self.assertFalse(self.cache.has_tenants())
        self.cache.set_tenants(fakes.TENANTS)

        self.assertTrue(self.cache.has_tenants())
        self.assertEqual(dataframe.Tenant(fakes.DEMO_ID, 'demo'),
                         self.cache.get_tenant('demo'))
        self.assertIsNone(self.cache.get_tenant('ghost'))

    def test_directory_is_replaced(self):
        self.cache.set_tenants(fakes.TENANTS)
        self.cache.set_tenants({fakes.DEMO_ID: 'demo'})
        self.assertIsNone(self.cache.get_tenant('admin'))

    def test_limits_are_set_once(self):
        self.assertFalse(self.cache.has_limits(fakes.DEMO_ID))
        self.assertIsNone(self.cache.get_limits(fakes.DEMO_ID))

        first = dataframe.Limits(10, 1000)
        self.assertEqual(first, self.cache.set_limits(fakes.DEMO_ID, first))
        self.assertEqual(
            first,
            self.cache.set_limits(fakes.DEMO_ID, dataframe.Limits(1, 1)))
        self.assertTrue(self.cache.has_limits(fakes.DEMO_ID))
        self.assertEqual(first, self.cache.get_limits(fakes.DEMO_ID))

    def test_session_is_created_once(self):
        session = object()
        factory = mock.Mock(return_value=session)

        self.assertIs(session, self.cache.get_session(fakes.DEMO_ID, factory))
        self.assertIs(session, self.cache.get_session(fakes.DEMO_ID, factory))
        factory.assert_called_once_with()

    def test_concurrent_sessions_are_created_once(self):
        calls = []

        def factory():
            calls.append(1)
            time.sleep(0.05)
            return object()

        sessions = []

        def get_session():
            sessions.append(self.cache.get_session(fakes.DEMO_ID, factory))

        threads = [threading.Thread(target=get_session) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(1, len(calls))
        self.assertEqual(1, len(set(id(s) for s in sessions)))

    def test_failed_factory_is_retried(self):
        factory = mock.Mock(side_effect=[ValueError('boom'), 'session'])
        self.assertRaises(ValueError,
                          self.cache.get_session, fakes.DEMO_ID, factory)
        self.assertEqual('session',
                         self.cache.get_session(fakes.DEMO_ID, factory))

    def test_caches_are_private(self):
        other = cache.CollectorCache()
        self.cache.set_tenants(fakes.TENANTS)
        self.cache.set_limits(fakes.DEMO_ID, dataframe.Limits(10, 1000))
        self.assertFalse(other.has_tenants())
        self.assertFalse(other.has_limits(fakes.DEMO_ID))
