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

from cinder_collector import dataframe

LOG = logging.getLogger(__name__)


class CollectorCache(object):
    """State kept by a collector for its whole lifetime.

    Holds the tenant directory, one authenticated session per tenant and the
    limits of every tenant they were fetched for. Limits are never refreshed.
    Every access goes through locks private to the instance, so the cache can
    be shared by concurrent collection tasks.
    """

    def __init__(self):
        self._semaphores = lockutils.Semaphores()
        self._tenants = {}
        self._sessions = {}
        self._limits = {}

    def _lock(self, name):
        return lockutils.lock(name, semaphores=self._semaphores,
                              do_log=False)

    def has_tenants(self):
        with self._lock('tenants'):
            return bool(self._tenants)

    def set_tenants(self, tenants):
        """Replaces the tenant directory.

        :param tenants: tenant names keyed by tenant id
        :type tenants: dict
        """
        with self._lock('tenants'):
            self._tenants = dict(tenants)
        LOG.debug('Tenant directory holds %s tenants.', len(tenants))

    def get_tenant(self, name):
        """Returns the Tenant named ``name``, None if unknown."""
        with self._lock('tenants'):
            for tenant_id, tenant_name in self._tenants.items():
                if tenant_name == name:
                    return dataframe.Tenant(tenant_id, tenant_name)
        return None

    def get_session(self, tenant_id, factory):
        """Returns the session of a tenant.

        ``factory`` is called without arguments to authenticate the tenant
        the first time its session is needed. A tenant is authenticated by
        a single caller at a time.
        """
        with self._lock('session-{}'.format(tenant_id)):
            with self._lock('sessions'):
                session = self._sessions.get(tenant_id)
            if session is None:
                session = factory()
                with self._lock('sessions'):
                    self._sessions[tenant_id] = session
            else:
                LOG.debug('Reusing session of tenant %s.', tenant_id)
            return session

    def get_limits(self, tenant_id):
        with self._lock('limits'):
            return self._limits.get(tenant_id)

    def has_limits(self, tenant_id):
        with self._lock('limits'):
            return tenant_id in self._limits

    def set_limits(self, tenant_id, limits):
        """Stores the limits of a tenant, unless some are already cached.

        Returns the limits held by the cache after the call.
        """
        with self._lock('limits'):
            return self._limits.setdefault(tenant_id, limits)
