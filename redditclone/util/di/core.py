"""Core DI providers (non-mockable)."""

from dishka import Scope, from_context, provide

from redditclone.config import AuthSettings, Settings
from redditclone.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider - concrete, no mocks needed.

    Settings are passed in as container context, so the same loaded
    settings decide both the wiring and the runtime values.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth
