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
from keystoneauth1 import exceptions as ka_exceptions
from keystoneauth1.identity import generic
from keystoneclient import client as kclient
from keystoneclient import discover
from oslo_config import cfg
from oslo_log import log as logging

from cinder_collector.common import custom_session
from cinder_collector import config as cc_config
from cinder_collector import exceptions

CONF = cfg.CONF

LOG = logging.getLogger(__name__)

# Identity API version -> (manager, method) listing the tenants visible to
# the authenticated user.
DIRECTORY_DISPATCH = {
    (3,): ('auth', 'projects'),
    (2,): ('tenants', 'list'),
}


def get_auth(endpoint, user, password, tenant=None):
    kwargs = {}
    if tenant:
        kwargs['project_name'] = tenant
        kwargs['project_domain_name'] = (
            CONF.collector_cinder.project_domain_name)
    return generic.Password(
        auth_url=endpoint,
        username=user,
        password=password,
        user_domain_name=CONF.collector_cinder.user_domain_name,
        **kwargs)


def authenticate(endpoint, user, password, tenant=None):
    """Returns a keystoneauth session scoped to ``tenant``.

    The token is requested right away so that rejected credentials or an
    unreachable identity endpoint fail here rather than on the first storage
    call. A session without tenant carries an unscoped token.

    :raises: AuthError
    """
    auth = get_auth(endpoint, user, password, tenant)
    session = custom_session.create_custom_session(
        auth,
        cc_config.COLLECTOR_CINDER_OPTS,
        CONF.collector_cinder.http_pool_maxsize)
    try:
        session.get_token()
    except ka_exceptions.ClientException as e:
        raise exceptions.AuthError(endpoint, user, tenant, e)
    LOG.debug('Authenticated user %s on tenant %s against %s.',
              user, tenant or '<unscoped>', endpoint)
    return session


def list_tenants(endpoint, user, password):
    """Returns a dict mapping the id of every visible tenant to its name.

    :raises: AuthError, DirectoryError
    """
    keystone_version = discover.normalize_version_number(
        CONF.collector_cinder.identity_api_version)
    for api_version, (manager, method) in DIRECTORY_DISPATCH.items():
        if discover.version_match(api_version, keystone_version):
            break
    else:
        raise exceptions.DirectoryError(
            "Keystone version {} is not supported".format(
                CONF.collector_cinder.identity_api_version))

    session = authenticate(endpoint, user, password)
    try:
        # NOTE: building the client runs the identity version discovery
        admin_ks = kclient.Client(
            version=CONF.collector_cinder.identity_api_version,
            session=session,
            auth_url=endpoint)
        tenant_list = getattr(getattr(admin_ks, manager), method)()
    except ka_exceptions.ClientException as e:
        raise exceptions.DirectoryError(
            "Could not list the tenants of user {} on {}: {}".format(
                user, endpoint, e))

    LOG.debug('Total number of tenants : %s', len(tenant_list))
    return {tenant.id: tenant.name for tenant in tenant_list}
