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
import copy
import itertools

import cinder_collector.config
import cinder_collector.service

__all__ = ['list_opts']

_opts = [
    ('collector_cinder', list(itertools.chain(
        cinder_collector.config.collector_cinder_opts,
        cinder_collector.config.session_opts))),
    (None, list(itertools.chain(
        cinder_collector.service.service_opts))),
]


def list_opts():
    return [(g, copy.deepcopy(o)) for g, o in _opts]
