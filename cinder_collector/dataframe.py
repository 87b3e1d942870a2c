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

VENDOR = 'intel'
SUBSYSTEM = 'openstack'
PLUGIN_NAME = 'cinder'
PREFIX = (VENDOR, SUBSYSTEM, PLUGIN_NAME)

LIMITS = 'limits'
VOLUMES = 'volumes'
SNAPSHOTS = 'snapshots'
CATEGORIES = (LIMITS, VOLUMES, SNAPSHOTS)

NAMESPACE_LENGTH = 6
SEPARATOR = '/'


Tenant = collections.namedtuple('Tenant', field_names=('id', 'name'))


_LimitsBase = collections.namedtuple(
    'Limits',
    field_names=('max_total_volumes', 'max_total_volume_gigabytes'))


class Limits(_LimitsBase):
    """Quotas of a tenant.

    ``TAGS`` maps the field names exposed in metric namespaces to the
    attributes of the tuple, in namespace order.
    """

    TAGS = collections.OrderedDict([
        ('MaxTotalVolumes', 'max_total_volumes'),
        ('MaxTotalVolumeGigabytes', 'max_total_volume_gigabytes'),
    ])

    def __new__(cls, max_total_volumes=0, max_total_volume_gigabytes=0):
        return _LimitsBase.__new__(
            cls, int(max_total_volumes), int(max_total_volume_gigabytes))


_AggregateBase = collections.namedtuple(
    'Aggregate', field_names=('count', 'bytes'))


class Aggregate(_AggregateBase):
    """Count and total size in bytes of the volumes or snapshots of a tenant.
    """

    TAGS = collections.OrderedDict([
        ('count', 'count'),
        ('bytes', 'bytes'),
    ])

    def __new__(cls, count=0, bytes=0):
        return _AggregateBase.__new__(cls, int(count), int(bytes))

    def add(self, size):
        """Returns a new aggregate accounting for one more resource."""
        return Aggregate(self.count + 1, self.bytes + size)


# Per-tenant composite the namespace is resolved against.
TenantMetrics = collections.namedtuple(
    'TenantMetrics', field_names=(LIMITS, VOLUMES, SNAPSHOTS))


def tenant_metrics(limits=None, volumes=None, snapshots=None):
    """Returns the composite of a tenant, missing parts being zeroed."""
    return TenantMetrics(limits or Limits(),
                         volumes or Aggregate(),
                         snapshots or Aggregate())


MetricType = collections.namedtuple(
    'MetricType', field_names=('namespace', 'config'))


_MetricBase = collections.namedtuple(
    'Metric', field_names=('namespace', 'data', 'source', 'timestamp'))


class Metric(_MetricBase):

    @property
    def tenant(self):
        return self.namespace[3]

    def path(self):
        return path_to_string(self.namespace)


def path_to_string(namespace):
    return SEPARATOR.join(namespace)


def path_from_string(path):
    return tuple(path.strip(SEPARATOR).split(SEPARATOR))


def build_path(tenant_name, category, field):
    return PREFIX + (tenant_name, category, field)
