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
from urllib import parse

from keystoneauth1 import exceptions as ka_exceptions
from oslo_config import cfg
from oslo_log import log as logging

from cinder_collector import config  # noqa
from cinder_collector import exceptions

LOG = logging.getLogger(__name__)

CONF = cfg.CONF

API_PRIORITY = {
    'v1.0': 1,
    'v2.0': 2,
}

# Catalog entries the version document can be reached through, in order of
# preference.
SERVICE_TYPES = ('volumev2', 'volume')


def get_root_url(session):
    for service_type in SERVICE_TYPES:
        try:
            url = session.get_endpoint(
                service_type=service_type,
                interface=CONF.collector_cinder.interface,
                region_name=CONF.collector_cinder.region_name)
        except ka_exceptions.EndpointNotFound:
            url = None
        if url:
            return parse.urlunparse(
                parse.urlparse(url)._replace(
                    path='/', params='', query='', fragment=''))
    raise exceptions.ProbeError(
        '<service catalog>',
        'no {} endpoint found'.format(' or '.join(SERVICE_TYPES)))


def discover_versions(session):
    """Returns the ids of the API versions served by the block storage.

    The version document is a single, unauthenticated page. Both 200 and 300
    (Multiple Choices) answers are valid.

    :raises: ProbeError
    """
    url = get_root_url(session)
    try:
        resp = session.get(url, authenticated=False, raise_exc=False)
    except ka_exceptions.ClientException as e:
        raise exceptions.ProbeError(url, e)
    if resp.status_code not in (200, 300):
        raise exceptions.ProbeError(
            url, 'unexpected status code {}'.format(resp.status_code))
    try:
        versions = [version['id'] for version in resp.json()['versions']]
    except (ValueError, KeyError, TypeError):
        raise exceptions.ProbeError(
            url, 'invalid version document: {}'.format(resp.text))
    LOG.debug('Block storage at %s serves API versions %s.', url, versions)
    return versions


def choose_version(candidates):
    """Returns the candidate with the highest priority.

    If none of the candidates has a known priority, the first one is
    returned.

    :raises: ConfigurationError if there is no candidate
    """
    if not candidates:
        raise exceptions.ConfigurationError(
            'No recognized block storage API version provided')
    known = [version for version in candidates if version in API_PRIORITY]
    if not known:
        LOG.warning('None of the block storage API versions %s has a known '
                    'priority, falling back to %s.',
                    candidates, candidates[0])
        return candidates[0]
    return max(known, key=API_PRIORITY.get)
