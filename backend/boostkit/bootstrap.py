"""Builds a fully wired container for one request or CLI invocation."""

import logging
from typing import Callable
from typing import Iterable
from typing import List
from typing import Optional

from sqlalchemy.orm import sessionmaker

from boostkit.config import Settings
from boostkit.config import get_settings
from boostkit.container import Container
from boostkit.events import EventType
from boostkit.events import HookBus
from boostkit.service_provider import ServiceProvider

logger = logging.getLogger(__name__)

# An addon receives the container's hook bus before boot, typically to
# subscribe to ``EventType.REGISTER_FEATURES``.
Addon = Callable[[HookBus], None]


class Bootstrap:
    """Creates a fresh :class:`Container` and runs the provider phases on it.

    Nothing here is shared between instances: two bootstraps never see each
    other's features, singletons or hook subscriptions.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[sessionmaker] = None,
        addons: Iterable[Addon] = (),
    ):
        self.settings = settings or get_settings()
        self.session_factory = session_factory
        self.addons = list(addons)
        self.container = Container()
        self.providers: List[ServiceProvider] = []
        self._initialised = False

    def init(self) -> Container:
        """Register and boot everything once; later calls return the same container."""
        if self._initialised:
            return self.container

        self._register_core_services()
        self._install_addons()
        self._register_service_provider()

        self.container.resolve("hooks").publish(EventType.LOADED, {"container": self.container})
        self._initialised = True
        return self.container

    def get_container(self) -> Container:
        return self.container

    def _register_core_services(self) -> None:
        self.container.instance("container", self.container)
        self.container.instance("app.settings", self.settings)
        self.container.instance("db.session_factory", self.session_factory)
        self.container.instance("hooks", HookBus())

    def _install_addons(self) -> None:
        hooks = self.container.resolve("hooks")
        for addon in self.addons:
            addon(hooks)

    def _register_service_provider(self) -> None:
        provider = ServiceProvider()
        provider.register(self.container)
        provider.boot(self.container)
        self.providers.append(provider)
