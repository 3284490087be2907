"""
Dependency injection provider using Dishka.

Hosts that build their object graph with Dishka can add this provider to
their container and receive a fresh LimitService for every request scope.
"""

from dishka import Provider, Scope, provide

from limit_service.core.config import LimitServiceSettings, limit_settings
from limit_service.services.limit_service import LimitService


class LimitServiceProvider(Provider):
    """Provider for limit service dependencies."""

    # ── Settings (APP scope) ──────────────────────────────────────────────

    @provide(scope=Scope.APP)
    def get_settings(self) -> LimitServiceSettings:
        return limit_settings

    # ── Per-request registry (REQUEST scope) ──────────────────────────────

    @provide(scope=Scope.REQUEST)
    def get_limit_service(self, settings: LimitServiceSettings) -> LimitService:
        """
        Limit registry for the current request.

        Scoped to REQUEST so limits loaded for one tenant never leak into
        another tenant's checks.
        """
        return LimitService(settings)


__all__ = ["LimitServiceProvider"]
