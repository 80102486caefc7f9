"""Health endpoint without request."""

from pydantic import BaseModel

from reprendpoint.cancellation import CancellationToken
from reprendpoint.endpoint import ReprResponseEndpoint


class HealthStatus(BaseModel):
    status: str


class HealthEndpoint(ReprResponseEndpoint[HealthStatus]):
    def map_endpoint(self, routes):
        self.map_get(routes, "/health")

    async def handle(self, ct: CancellationToken = CancellationToken.none()) -> HealthStatus:
        return HealthStatus(status="ok")
