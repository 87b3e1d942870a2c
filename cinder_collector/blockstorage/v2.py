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
from cinder_collector import blockstorage

VOLUME_TENANT_ATTR = 'os-vol-tenant-attr:tenant_id'
SNAPSHOT_TENANT_ATTR = 'os-extended-snapshot-attributes:project_id'


class CinderV2Adapter(blockstorage.BaseAdapter):
    """Block storage API v2.0.

    Volumes and snapshots of every tenant are listed at once, which requires
    an admin session.
    """

    version = 'v2.0'
    service_type = 'volumev2'
    all_tenants = True

    def get_volumes(self, session):
        volumes = self._list(session, 'volumes', {'all_tenants': True})
        return self._aggregate_by(volumes, VOLUME_TENANT_ATTR)

    def get_snapshots(self, session):
        snapshots = self._list(session, 'snapshots', {'all_tenants': True})
        return self._aggregate_by(snapshots, SNAPSHOT_TENANT_ATTR)
