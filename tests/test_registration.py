"""Tests for endpoint registration by module scan and by explicit list."""

from typing import Any

import pytest

from reprendpoint.cancellation import CancellationToken
from reprendpoint.endpoint import (
    ReprEndpoint,
    ReprEndpointBase,
    ReprRequestEndpoint,
    ReprResponseEndpoint,
)
from reprendpoint.exceptions import (
    AbstractEndpointTypeError,
    EndpointConfigurationError,
    InvalidEndpointTypeError,
)
from reprendpoint.registration import add_repr_endpoint_types, add_repr_endpoints
from reprendpoint.services import ServiceCollection, ServiceLifetime
from tests.fixtures import no_endpoints
from tests.fixtures.scan_package.health import HealthEndpoint
from tests.fixtures.scan_package.users import GetUserEndpoint, UserEndpointBase


class PingEndpoint(ReprEndpoint):
    """Concrete endpoint defined in the test module."""

    def map_endpoint(self, routes):
        self.map_get(routes, "/ping")

    async def handle(self, ct: CancellationToken = CancellationToken.none()) -> Any:
        return "pong"


class AbstractPingEndpoint(ReprEndpoint):
    """Abstract endpoint: map_endpoint and handle are not implemented."""


class NotAnEndpoint:
    pass


def registrations_for(services: ServiceCollection, endpoint_type: type):
    return [d for d in services if d.implementation_type is endpoint_type]


class TestAddReprEndpointTypes:
    """Test registration from an explicit list of types."""

    def test_registers_each_type_twice(self):
        """Test each type is registered under itself and under the base."""
        services = ServiceCollection()
        add_repr_endpoint_types(services, PingEndpoint, HealthEndpoint)

        assert len(services) == 4
        for endpoint_type in (PingEndpoint, HealthEndpoint):
            descriptors = registrations_for(services, endpoint_type)
            assert [d.service_type for d in descriptors] == [endpoint_type, ReprEndpointBase]
            assert all(d.lifetime is ServiceLifetime.TRANSIENT for d in descriptors)

    @pytest.mark.parametrize("lifetime", list(ServiceLifetime))
    def test_requested_lifetime_is_used(self, lifetime):
        """Test both registrations carry the requested lifetime."""
        services = ServiceCollection()
        add_repr_endpoint_types(services, PingEndpoint, lifetime=lifetime)

        assert {d.lifetime for d in services} == {lifetime}

    def test_no_types_is_a_noop(self):
        """Test an empty list leaves the collection untouched."""
        services = ServiceCollection()
        result = add_repr_endpoint_types(services)

        assert result is services
        assert len(services) == 0

    def test_returns_same_collection(self):
        """Test the collection is returned for chaining."""
        services = ServiceCollection()
        assert add_repr_endpoint_types(services, PingEndpoint) is services

    def test_non_endpoint_type_rejected(self):
        """Test a type outside the hierarchy is rejected and named."""
        services = ServiceCollection()

        with pytest.raises(InvalidEndpointTypeError) as exc_info:
            add_repr_endpoint_types(services, NotAnEndpoint)

        assert "NotAnEndpoint" in str(exc_info.value)
        assert exc_info.value.endpoint_type is NotAnEndpoint

    def test_non_type_rejected(self):
        """Test objects that are not classes are rejected as invalid."""
        with pytest.raises(InvalidEndpointTypeError):
            add_repr_endpoint_types(ServiceCollection(), "PingEndpoint")

    def test_abstract_type_rejected(self):
        """Test abstract endpoint classes are rejected and named."""
        services = ServiceCollection()

        with pytest.raises(AbstractEndpointTypeError) as exc_info:
            add_repr_endpoint_types(services, AbstractPingEndpoint)

        assert "AbstractPingEndpoint" in str(exc_info.value)

    @pytest.mark.parametrize(
        "endpoint_types",
        [
            (NotAnEndpoint, PingEndpoint, HealthEndpoint),
            (PingEndpoint, NotAnEndpoint, HealthEndpoint),
            (PingEndpoint, HealthEndpoint, AbstractPingEndpoint),
            (PingEndpoint, UserEndpointBase),
            (PingEndpoint, ReprRequestEndpoint),
        ],
    )
    def test_invalid_member_registers_nothing(self, endpoint_types):
        """Test one bad entry anywhere in the batch prevents all registration."""
        services = ServiceCollection()

        with pytest.raises(EndpointConfigurationError):
            add_repr_endpoint_types(services, *endpoint_types)

        assert len(services) == 0

    def test_configuration_errors_are_value_errors(self):
        """Test configuration errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            add_repr_endpoint_types(ServiceCollection(), NotAnEndpoint)


class TestAddReprEndpoints:
    """Test registration by module scan."""

    def test_scan_package_registers_concrete_endpoints(self):
        """Test a package scan finds concrete endpoints in its submodules."""
        services = ServiceCollection()
        add_repr_endpoints(services, "tests.fixtures.scan_package")

        implementations = {d.implementation_type for d in services}
        assert implementations == {HealthEndpoint, GetUserEndpoint}
        assert len(services) == 4

    def test_scan_skips_abstract_intermediate_classes(self):
        """Test abstract intermediate bases are not registered."""
        services = ServiceCollection()
        add_repr_endpoints(services, "tests.fixtures.scan_package.users")

        implementations = [d.implementation_type for d in services]
        assert UserEndpointBase not in implementations
        assert implementations == [GetUserEndpoint, GetUserEndpoint]

    def test_scan_ignores_imported_endpoints(self):
        """Test classes imported into a module are not attributed to it."""
        services = ServiceCollection()
        add_repr_endpoints(services, "tests.fixtures.scan_package.users")

        assert HealthEndpoint not in {d.implementation_type for d in services}

    def test_scan_without_matches_is_a_noop(self):
        """Test scanning a module without endpoints adds nothing and raises nothing."""
        services = ServiceCollection()
        result = add_repr_endpoints(services, no_endpoints)

        assert result is services
        assert len(services) == 0

    def test_scan_uses_requested_lifetime(self):
        """Test scanned endpoints are registered with the requested lifetime."""
        services = ServiceCollection()
        add_repr_endpoints(
            services,
            "tests.fixtures.scan_package.health",
            lifetime=ServiceLifetime.SINGLETON,
        )

        assert [(d.service_type, d.lifetime) for d in services] == [
            (HealthEndpoint, ServiceLifetime.SINGLETON),
            (ReprEndpointBase, ServiceLifetime.SINGLETON),
        ]

    def test_scan_without_modules_uses_loaded_modules(self):
        """Test omitting modules scans everything already imported."""
        services = ServiceCollection()
        add_repr_endpoints(services)

        implementations = {d.implementation_type for d in services}
        assert {PingEndpoint, HealthEndpoint, GetUserEndpoint} <= implementations
        assert AbstractPingEndpoint not in implementations
        assert ReprResponseEndpoint not in implementations

    def test_scan_of_missing_module_raises(self):
        """Test a module name that cannot be imported fails startup."""
        with pytest.raises(ImportError):
            add_repr_endpoints(ServiceCollection(), "tests.fixtures.does_not_exist")
