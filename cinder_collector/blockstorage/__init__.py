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
import abc

from keystoneauth1 import exceptions as ka_exceptions
from oslo_config import cfg
from oslo_log import log as logging
from oslo_utils import units

from cinder_collector import config  # noqa
from cinder_collector import dataframe
from cinder_collector import exceptions

LOG = logging.getLogger(__name__)

CONF = cfg.CONF


class BaseAdapter(object, metaclass=abc.ABCMeta):
    """Collects block storage metrics through one API version.

    Adapters are stateless: every call receives the tenant-scoped
    keystoneauth session to use.
    """

    version = None
    service_type = None
    # True when volumes and snapshots of every tenant can be listed in a
    # single call. get_volumes and get_snapshots then return a dict of
    # Aggregate keyed by tenant id instead of a single Aggregate.
    all_tenants = False

    def _endpoint_filter(self):
        return {
            'service_type': self.service_type,
            'interface': CONF.collector_cinder.interface,
            'region_name': CONF.collector_cinder.region_name,
        }

    def _get(self, session, url, params=None):
        try:
            resp = session.get(
                url,
                endpoint_filter=self._endpoint_filter(),
                params=params)
        except ka_exceptions.ClientException as e:
            raise exceptions.AdapterError(self.version, url, e)
        try:
            return resp.json()
        except ValueError:
            raise exceptions.AdapterError(
                self.version, url,
                'invalid json response: {}'.format(resp.text))

    def _list(self, session, resource, params=None):
        """Returns every item of a detailed listing, following next links."""
        url = '/{}/detail'.format(resource)
        items = []
        while url:
            body = self._get(session, url, params)
            try:
                items.extend(body[resource])
            except (KeyError, TypeError):
                raise exceptions.AdapterError(
                    self.version, url,
                    'no {} in response: {}'.format(resource, body))
            links = body.get('{}_links'.format(resource)) or []
            url = next((link['href'] for link in links
                        if link.get('rel') == 'next'), None)
            # NOTE: next links already carry the query string
            params = None
        LOG.debug('Listed %s %s through block storage %s.',
                  len(items), resource, self.version)
        return items

    def _size_in_bytes(self, item):
        # Sizes are reported in GiB
        try:
            return int(item['size']) * units.Gi
        except (KeyError, TypeError, ValueError):
            raise exceptions.AdapterError(
                self.version, item.get('id'),
                'invalid size in {}'.format(item))

    def _aggregate(self, items):
        aggregate = dataframe.Aggregate()
        for item in items:
            aggregate = aggregate.add(self._size_in_bytes(item))
        return aggregate

    def _aggregate_by(self, items, tenant_attr):
        aggregates = {}
        for item in items:
            tenant_id = item.get(tenant_attr)
            current = aggregates.get(tenant_id, dataframe.Aggregate())
            aggregates[tenant_id] = current.add(self._size_in_bytes(item))
        return aggregates

    def get_limits(self, session):
        """Returns the quotas of the tenant the session is scoped to.

        :rtype: cinder_collector.dataframe.Limits
        """
        body = self._get(session, '/limits')
        try:
            absolute = body['limits']['absolute']
            return dataframe.Limits(
                absolute['maxTotalVolumes'],
                absolute['maxTotalVolumeGigabytes'])
        except (KeyError, TypeError, ValueError):
            raise exceptions.AdapterError(
                self.version, '/limits',
                'invalid limits in response: {}'.format(body))

    @abc.abstractmethod
    def get_volumes(self, session):
        """Returns the count and total size of volumes.

        :rtype: cinder_collector.dataframe.Aggregate, or a dict of them keyed
                by tenant id if ``all_tenants`` is True.
        """

    @abc.abstractmethod
    def get_snapshots(self, session):
        """Returns the count and total size of snapshots.

        :rtype: cinder_collector.dataframe.Aggregate, or a dict of them keyed
                by tenant id if ``all_tenants`` is True.
        """
