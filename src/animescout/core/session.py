"""
Session wiring.

Builds the object graph for one browsing session:
HttpBackend -> ThrottledBackend(ThrottleGate) -> JikanClient -> CatalogController.
"""

from __future__ import annotations

import httpx

from animescout.core.api.jikan import JikanClient
from animescout.core.backends.http_backend import HttpBackend
from animescout.core.catalog.controller import CatalogController
from animescout.core.catalog.render import RenderTarget
from animescout.core.config.models import AppConfig
from animescout.core.fetch.throttling import ThrottledBackend, ThrottleGate


def create_gate(config: AppConfig) -> ThrottleGate:
    """Throttle gate covering the configured hosts plus the API's own host."""
    hosts = set(config.throttle.hosts)
    if config.api.host:
        hosts.add(config.api.host)
    return ThrottleGate(min_interval_ms=config.throttle.min_interval_ms, hosts=hosts)


def create_client(
    config: AppConfig,
    gate: ThrottleGate | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> JikanClient:
    """API client whose every request passes through the throttle gate."""
    backend = HttpBackend(
        timeout=config.api.timeout_seconds,
        user_agent=config.api.user_agent,
        transport=transport,
    )
    throttled = ThrottledBackend(backend, gate or create_gate(config))
    return JikanClient(throttled, base_url=config.api.base_url)


def create_controller(
    config: AppConfig,
    renderer: RenderTarget,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CatalogController:
    """Controller for one session; close it with ``controller.client.close()``."""
    client = create_client(config, transport=transport)
    return CatalogController(client, renderer, page_size=config.api.page_size)
