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


class CinderCollectorException(Exception):
    """Base exception raised by the cinder collector"""


class ConfigError(CinderCollectorException):
    """Missing or invalid credential fields in a plugin configuration"""


class AuthError(CinderCollectorException):
    def __init__(self, endpoint, user, tenant, reason):
        super(AuthError, self).__init__(
            "Could not authenticate user {} on tenant {} against {}: "
            "{}".format(user, tenant or '<unscoped>', endpoint, reason))
        self.tenant = tenant


class DirectoryError(CinderCollectorException):
    """The tenant directory could not be listed or resolved"""


class ProbeError(CinderCollectorException):
    def __init__(self, url, reason):
        super(ProbeError, self).__init__(
            "Could not list block storage API versions on {}: {}".format(
                url, reason))
        self.url = url


class ConfigurationError(CinderCollectorException):
    """No usable block storage API version"""


class AdapterError(CinderCollectorException):
    def __init__(self, version, resource, reason):
        super(AdapterError, self).__init__(
            "Block storage {} call on {} failed: {}".format(
                version, resource, reason))
        self.version = version
        self.resource = resource


class UnknownFieldError(CinderCollectorException):
    def __init__(self, suffix):
        super(UnknownFieldError, self).__init__(
            "No metric field matches {}".format('/'.join(suffix)))
        self.suffix = suffix


class RequestFormatError(CinderCollectorException):
    """A requested metric path is malformed"""


class CollectionError(CinderCollectorException):
    """Several collection tasks failed during a single cycle.

    Every captured error is kept in ``errors``, in completion order.
    """

    def __init__(self, errors):
        super(CollectionError, self).__init__(
            "{} collection tasks failed: {}".format(
                len(errors), '; '.join(str(e) for e in errors)))
        self.errors = errors
