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
import collections
import functools

import futurist
from futurist import waiters
from oslo_config import cfg
from oslo_log import log as logging
from oslo_utils import timeutils

from cinder_collector.blockstorage import dispatcher
from cinder_collector import cache
from cinder_collector import config  # noqa
from cinder_collector import dataframe
from cinder_collector import exceptions
from cinder_collector import identity
from cinder_collector import namespace

LOG = logging.getLogger(__name__)

CONF = cfg.CONF
CONF.import_opt('host', 'cinder_collector.service')

AGGREGATE_CATEGORIES = (dataframe.VOLUMES, dataframe.SNAPSHOTS)

Credentials = collections.namedtuple(
    'Credentials', field_names=('endpoint', 'user', 'password', 'tenant'))


def partition(namespaces):
    """Returns the names of the tenants requested for each category.

    :rtype: dict mapping a category to a set of tenant names
    """
    requested = collections.defaultdict(set)
    for ns in namespaces:
        requested[ns[4]].add(ns[3])
    return requested


class Orchestrator(object):
    """Collects block storage metrics of several tenants.

    An orchestrator keeps the tenant directory, the tenant sessions and the
    tenant limits it fetched for its whole lifetime. Volumes and snapshots
    are fetched again on every collection.
    Collection tasks run on a thread pool owned by the orchestrator until
    stop() is called.
    """

    def __init__(self, host=None):
        self._host = host or CONF.host
        self._cache = cache.CollectorCache()
        self._executor = futurist.ThreadPoolExecutor(
            max_workers=CONF.collector_cinder.max_threads)

    @property
    def cache(self):
        return self._cache

    def stop(self):
        """Waits for running tasks and releases the worker threads."""
        self._executor.shutdown(wait=True)

    def _load_directory(self, credentials):
        tenants = identity.list_tenants(
            credentials.endpoint, credentials.user, credentials.password)
        self._cache.set_tenants(tenants)
        return tenants

    def discover(self, credentials):
        """Returns the namespace of every metric of every visible tenant."""
        tenants = self._load_directory(credentials)
        return namespace.enumerate_paths(tenants.values())

    def _resolve_tenants(self, credentials, names):
        if not self._cache.has_tenants():
            self._load_directory(credentials)
        tenants = {name: self._cache.get_tenant(name) for name in names}
        missing = sorted(name for name, t in tenants.items() if t is None)
        if missing:
            LOG.info('Unknown tenants %s, reloading the tenant directory.',
                     missing)
            self._load_directory(credentials)
            for name in missing:
                tenants[name] = self._cache.get_tenant(name)
                if tenants[name] is None:
                    raise exceptions.DirectoryError(
                        'Tenant {} is not visible to user {}'.format(
                            name, credentials.user))
        return tenants

    def _get_session(self, credentials, tenant):
        return self._cache.get_session(
            tenant.id,
            functools.partial(
                identity.authenticate,
                credentials.endpoint,
                credentials.user,
                credentials.password,
                tenant.name))

    @staticmethod
    def _get_aggregate(adapter, session, category):
        if category == dataframe.VOLUMES:
            return adapter.get_volumes(session)
        return adapter.get_snapshots(session)

    def _collect_all_tenants(self, adapter, session, category):
        return category, self._get_aggregate(adapter, session, category)

    def _collect_tenant(self, dispatch, credentials, tenant, category):
        session = self._get_session(credentials, tenant)
        adapter = dispatch.dispatch(session)
        if category == dataframe.LIMITS:
            limits = self._cache.set_limits(
                tenant.id, adapter.get_limits(session))
            return category, {tenant.id: limits}

        value = self._get_aggregate(adapter, session, category)
        if isinstance(value, dict):
            value = value.get(tenant.id, dataframe.Aggregate())
        return category, {tenant.id: value}

    def _run_tasks(self, tasks):
        """Runs every task concurrently and waits for all of them.

        A failed task does not cancel the others. Once all of them are
        done, a single failure is raised as is and several failures are
        raised together in a CollectionError.
        """
        if not tasks:
            return []
        futs = [self._executor.submit(task) for task in tasks]
        LOG.debug('Launched %s collection tasks.', len(futs))
        done = waiters.wait_for_all(futs).done
        LOG.debug('%s collection tasks executed so far, taking %ss total.',
                  self._executor.statistics.executed,
                  self._executor.statistics.runtime)

        results = []
        errors = []
        for fut in done:
            error = fut.exception()
            if error is not None:
                LOG.error('Collection task failed: %s', error)
                errors.append(error)
            else:
                results.append(fut.result())
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise exceptions.CollectionError(errors)
        return results

    def collect(self, namespaces, credentials):
        """Returns the value of every requested metric, in request order.

        :param namespaces: requested metric namespaces
        :param credentials: connection parameters. ``tenant`` is the
                            privileged tenant listing volumes and snapshots
                            of every tenant.
        :type credentials: Credentials
        :rtype: list of cinder_collector.dataframe.Metric
        """
        namespaces = [tuple(ns) for ns in namespaces]
        for ns in namespaces:
            namespace.validate(ns)

        requested = partition(namespaces)
        aggregate_categories = [c for c in AGGREGATE_CATEGORIES
                                if c in requested]
        names = {ns[3] for ns in namespaces}
        if aggregate_categories:
            if not credentials.tenant:
                raise exceptions.ConfigError(
                    'A privileged tenant is required to collect '
                    '{}'.format(' and '.join(aggregate_categories)))
            names.add(credentials.tenant)
        tenants = self._resolve_tenants(credentials, names)

        dispatch = dispatcher.Dispatcher()
        tasks = []

        if aggregate_categories:
            admin = tenants[credentials.tenant]
            admin_session = self._get_session(credentials, admin)
            adapter = dispatch.dispatch(admin_session)
            for category in aggregate_categories:
                if adapter.all_tenants:
                    tasks.append(functools.partial(
                        self._collect_all_tenants,
                        adapter, admin_session, category))
                else:
                    for name in sorted(requested[category]):
                        tasks.append(functools.partial(
                            self._collect_tenant,
                            dispatch, credentials, tenants[name], category))

        for name in sorted(requested.get(dataframe.LIMITS, ())):
            tenant = tenants[name]
            if self._cache.has_limits(tenant.id):
                LOG.debug('Using cached limits of tenant %s.', name)
                continue
            tasks.append(functools.partial(
                self._collect_tenant,
                dispatch, credentials, tenant, dataframe.LIMITS))

        collected = {category: {} for category in AGGREGATE_CATEGORIES}
        for category, values in self._run_tasks(tasks):
            if category in collected:
                collected[category].update(values)

        timestamp = timeutils.utcnow(with_timezone=True)
        metrics = []
        for ns in namespaces:
            tenant = tenants[ns[3]]
            container = dataframe.tenant_metrics(
                self._cache.get_limits(tenant.id),
                collected[dataframe.VOLUMES].get(tenant.id),
                collected[dataframe.SNAPSHOTS].get(tenant.id))
            metrics.append(dataframe.Metric(
                ns,
                namespace.resolve(container, ns[4:6]),
                self._host,
                timestamp))
        return metrics
