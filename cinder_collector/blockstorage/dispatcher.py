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
from oslo_concurrency import lockutils
from oslo_log import log as logging
from stevedore import driver
from stevedore import exception as stevedore_exc

from cinder_collector.blockstorage import versions
from cinder_collector import exceptions

LOG = logging.getLogger(__name__)

ADAPTERS_NAMESPACE = 'cinder_collector.blockstorage.adapters'


def get_adapter(version):
    """Loads the adapter registered for an exact API version id.

    :raises: ConfigurationError if no adapter handles ``version``
    """
    try:
        return driver.DriverManager(
            ADAPTERS_NAMESPACE,
            version,
            invoke_on_load=True).driver
    except stevedore_exc.NoMatches:
        raise exceptions.ConfigurationError(
            'Could not select an adapter for block storage API '
            'version {}'.format(version))


class Dispatcher(object):
    """Binds tenant sessions to the adapter of their block storage API.

    Adapters are memoized per session, so that the API versions are probed
    once per session for the lifetime of the dispatcher.
    """

    def __init__(self):
        self._adapters = {}
        self._semaphores = lockutils.Semaphores()

    def dispatch(self, session):
        lock_name = 'dispatch-{}'.format(id(session))
        # NOTE: the 'adapters' lock is never held while probing.
        with lockutils.lock(lock_name, semaphores=self._semaphores):
            with lockutils.lock('adapters', semaphores=self._semaphores):
                adapter = self._adapters.get(session)
            if adapter is None:
                chosen = versions.choose_version(
                    versions.discover_versions(session))
                adapter = get_adapter(chosen)
                LOG.debug('Using block storage API %s.', chosen)
                with lockutils.lock('adapters', semaphores=self._semaphores):
                    self._adapters[session] = adapter
            return adapter
