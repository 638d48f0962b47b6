"""Named cross-origin policies.

Reads and writes are governed by separate policies so a deployment can
narrow who may write without touching who may read. Each policy is a
Starlette `CORSMiddleware`; `PolicyCORSMiddleware` picks one per request
from the HTTP method (or, for a preflight, the method being asked about).
"""

from dataclasses import dataclass, field
from typing import List

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass(frozen=True)
class CorsPolicy:
    name: str
    allow_origins: List[str] = field(default_factory=lambda: ["*"])
    allow_methods: List[str] = field(default_factory=lambda: ["*"])
    allow_headers: List[str] = field(default_factory=lambda: ["*"])

    def build(self, app) -> CORSMiddleware:
        return CORSMiddleware(
            app,
            allow_origins=self.allow_origins,
            allow_methods=self.allow_methods,
            allow_headers=self.allow_headers,
            allow_credentials=False,
        )


class PolicyCORSMiddleware:
    """ASGI middleware routing each request through the read or write policy."""

    def __init__(self, app, read_policy: CorsPolicy, write_policy: CorsPolicy):
        self.app = app
        self.read_policy = read_policy
        self.write_policy = write_policy
        self._read = read_policy.build(app)
        self._write = write_policy.build(app)

    def policy_for(self, scope) -> CorsPolicy:
        method = scope["method"].upper()
        if method == "OPTIONS":
            requested = Headers(scope=scope).get("access-control-request-method")
            if requested:
                method = requested.upper()
        return self.write_policy if method in WRITE_METHODS else self.read_policy

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        policy = self.policy_for(scope)
        handler = self._write if policy is self.write_policy else self._read
        await handler(scope, receive, send)
