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


class CinderV1Adapter(blockstorage.BaseAdapter):
    """Block storage API v1.0.

    Listings are limited to the tenant the session is scoped to.
    """

    version = 'v1.0'
    service_type = 'volume'
    all_tenants = False

    def get_volumes(self, session):
        return self._aggregate(self._list(session, 'volumes'))

    def get_snapshots(self, session):
        return self._aggregate(self._list(session, 'snapshots'))
