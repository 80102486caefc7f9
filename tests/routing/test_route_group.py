"""Tests for RouteBuilder and RouteGroup."""

from fastapi import APIRouter, FastAPI, Header, HTTPException
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from reprendpoint.routing import RouteBuilder, RouteGroup
from reprendpoint.routing.group import join_paths, normalize_prefix


async def hello():
    return {"hello": "world"}


async def require_tenant(x_tenant: str = Header(default="")):
    if not x_tenant:
        raise HTTPException(status_code=400, detail="Missing tenant")


class TestPaths:
    """Test prefix normalisation and joining."""

    def test_normalize_prefix(self):
        assert normalize_prefix("api/v1/") == "/api/v1"
        assert normalize_prefix(" /users ") == "/users"

    def test_join_paths(self):
        assert join_paths("/api", "/items") == "/api/items"
        assert join_paths("/api", "items") == "/api/items"
        assert join_paths("/api", "") == "/api"
        assert join_paths("/api", "/") == "/api"


class TestRouteBuilder:
    """Test method helpers on the root builder."""

    def test_method_helpers(self):
        app = FastAPI()
        routes = RouteBuilder(app)

        mapped = [
            routes.map_get("/r", hello),
            routes.map_post("/r", hello),
            routes.map_put("/r", hello),
            routes.map_delete("/r", hello),
            routes.map_patch("/r", hello),
            routes.map_methods("/m", ["GET", "HEAD"], hello),
        ]

        assert [r.methods for r in mapped] == [
            {"GET"},
            {"POST"},
            {"PUT"},
            {"DELETE"},
            {"PATCH"},
            {"GET", "HEAD"},
        ]

    def test_works_with_api_router(self):
        router = APIRouter()
        route = RouteBuilder(router).map_get("/hello", hello)

        assert route in router.routes

    def test_map_group_creates_new_group_each_time(self):
        routes = RouteBuilder(FastAPI())

        first = routes.map_group("/api")
        second = routes.map_group("/api")

        assert isinstance(first, RouteGroup)
        assert first is not second


class TestRouteGroup:
    """Test group prefixes and configuration."""

    def test_routes_get_prefix(self):
        app = FastAPI()
        group = RouteBuilder(app).map_group("/api/v1")

        route = group.map_get("/hello", hello)

        assert route.path == "/api/v1/hello"
        assert TestClient(app).get("/api/v1/hello").json() == {"hello": "world"}

    def test_nested_groups(self):
        app = FastAPI()
        outer = RouteBuilder(app).map_group("/api").with_tags("api")
        inner = outer.map_group("/v2").with_tags("v2")

        route = inner.map_get("/items", hello, tags=["items"])

        assert route.path == "/api/v2/items"
        assert route.tags == ["api", "v2", "items"]
        assert inner.full_prefix == "/api/v2"
        assert repr(inner) == "RouteGroup(prefix='/api/v2')"

    def test_group_dependency_runs_before_handler(self):
        app = FastAPI()
        group = RouteBuilder(app).map_group("/tenant").add_dependency(require_tenant)
        group.map_get("/hello", hello)
        client = TestClient(app)

        assert client.get("/tenant/hello").status_code == 400
        assert client.get("/tenant/hello", headers={"X-Tenant": "acme"}).status_code == 200

    def test_route_options_are_defaults(self):
        app = FastAPI()
        group = RouteBuilder(app).map_group("/old").with_options(
            deprecated=True, summary="Old"
        )

        default_route = group.map_get("/a", hello)
        overridden = group.map_get("/b", hello, summary="New")

        assert default_route.deprecated is True
        assert default_route.summary == "Old"
        assert overridden.summary == "New"

    def test_configuration_applies_to_later_routes(self):
        app = FastAPI()
        group = RouteBuilder(app).map_group("/late")
        before = group.map_get("/before", hello)
        group.with_tags("late")
        after = group.map_get("/after", hello)

        assert before.tags == []
        assert after.tags == ["late"]

    def test_routes_registered_on_root_app(self):
        app = FastAPI()
        RouteBuilder(app).map_group("/x").map_get("/y", hello)

        paths = [r.path for r in app.routes if isinstance(r, APIRoute)]
        assert paths == ["/x/y"]

    def test_require_authorization_adds_dependency(self):
        group = RouteBuilder(FastAPI()).map_group("/secure")

        result = group.require_authorization("read")

        assert result is group
        assert len(group.dependencies) == 1
        assert group.dependencies[0].dependency.scopes == ("read",)
