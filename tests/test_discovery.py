"""Tests for endpoint discovery."""

import pytest

from reprendpoint.discovery import (
    discover_endpoint_types,
    is_endpoint_type,
    iter_module_types,
    load_module,
)
from reprendpoint.endpoint import ReprEndpoint, ReprEndpointBase
from tests.fixtures import no_endpoints
from tests.fixtures.scan_package import health, users


class TestIsEndpointType:
    """Test candidate filtering."""

    def test_concrete_endpoint(self):
        assert is_endpoint_type(health.HealthEndpoint)

    @pytest.mark.parametrize(
        "candidate",
        [ReprEndpointBase, ReprEndpoint, users.UserEndpointBase, no_endpoints.PlainService, "x", 3],
    )
    def test_rejected(self, candidate):
        assert not is_endpoint_type(candidate)


class TestDiscoverEndpointTypes:
    """Test module scanning."""

    def test_package_is_walked(self):
        found = discover_endpoint_types(["tests.fixtures.scan_package"])

        assert set(found) == {health.HealthEndpoint, users.GetUserEndpoint}

    def test_imported_classes_are_not_reported_twice(self):
        found = discover_endpoint_types([users, health, users])

        assert found.count(health.HealthEndpoint) == 1
        assert found == [users.GetUserEndpoint, health.HealthEndpoint]

    def test_module_defines_only_plain_classes(self):
        assert discover_endpoint_types([no_endpoints]) == []
        assert list(iter_module_types(no_endpoints)) == [no_endpoints.PlainService]

    def test_loaded_modules_scanned_by_default(self):
        found = discover_endpoint_types()

        assert health.HealthEndpoint in found
        assert users.GetUserEndpoint in found

    def test_load_module_by_name(self):
        assert load_module("tests.fixtures.no_endpoints") is no_endpoints
        assert load_module(no_endpoints) is no_endpoints

    def test_missing_module(self):
        with pytest.raises(ImportError):
            discover_endpoint_types(["tests.fixtures.does_not_exist"])
