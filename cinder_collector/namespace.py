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
"""Mapping between metric namespaces and collected values.

A namespace is a 6-segment path::

    intel/openstack/cinder/<tenant name>/<category>/<field>

where the category is one of ``limits``, ``volumes`` or ``snapshots`` and the
field is a tag declared by the matching type of
:mod:`cinder_collector.dataframe`.
"""
from cinder_collector import dataframe
from cinder_collector import exceptions

# Field tags available for each category, in namespace order.
SCHEMA = (
    (dataframe.LIMITS, dataframe.Limits.TAGS),
    (dataframe.VOLUMES, dataframe.Aggregate.TAGS),
    (dataframe.SNAPSHOTS, dataframe.Aggregate.TAGS),
)


def enumerate_paths(tenant_names):
    """Returns every leaf namespace available for the given tenants."""
    paths = []
    for tenant_name in sorted(set(tenant_names)):
        for category, tags in SCHEMA:
            for tag in tags:
                paths.append(dataframe.build_path(tenant_name, category, tag))
    return paths


def resolve(container, suffix):
    """Returns the scalar addressed by ``(category, field)`` in a composite.

    :param container: metrics of a single tenant
    :type container: cinder_collector.dataframe.TenantMetrics
    :param suffix: the two trailing segments of a namespace
    :raises: UnknownFieldError if no declared tag matches exactly
    """
    suffix = tuple(suffix)
    if len(suffix) != 2 or suffix[0] not in container._fields:
        raise exceptions.UnknownFieldError(suffix)
    category, field = suffix
    value = getattr(container, category)
    try:
        return getattr(value, value.TAGS[field])
    except KeyError:
        raise exceptions.UnknownFieldError(suffix)


def validate(namespace):
    """Checks that a requested namespace can be collected.

    :raises: RequestFormatError on short paths or unknown categories
    """
    if len(namespace) < dataframe.NAMESPACE_LENGTH:
        raise exceptions.RequestFormatError(
            "Incorrect namespace length for {}: expected {}, got {}".format(
                dataframe.path_to_string(namespace),
                dataframe.NAMESPACE_LENGTH, len(namespace)))
    if tuple(namespace[:3]) != dataframe.PREFIX:
        raise exceptions.RequestFormatError(
            "Unknown namespace prefix in {}, expected {}".format(
                dataframe.path_to_string(namespace),
                dataframe.path_to_string(dataframe.PREFIX)))
    if namespace[4] not in dataframe.CATEGORIES:
        raise exceptions.RequestFormatError(
            "Unknown category {} in {}, expected one of {}".format(
                namespace[4], dataframe.path_to_string(namespace),
                ', '.join(dataframe.CATEGORIES)))
