"""Plugin registry for looking up reporters by name."""

import logging
from typing import Callable, Dict, List

from .base import ReporterPlugin
from .builtin.reporters import JSONReporterPlugin, RichReporterPlugin, SilentReporterPlugin

logger = logging.getLogger(__name__)

ReporterFactory = Callable[..., ReporterPlugin]

DEFAULT_REPORTER = "rich"


class PluginRegistry:
    """Registry mapping reporter names to factories."""

    def __init__(self) -> None:
        """Initialises the plugin registry."""
        self._reporter_factories: Dict[str, ReporterFactory] = {}

    def register(self, name: str, factory: ReporterFactory) -> None:
        """Registers a reporter factory under a name.

        Args:
            name (str): The name used on the command line.
            factory (ReporterFactory): Callable returning a ReporterPlugin.
        """
        if name in self._reporter_factories:
            logger.warning(f"Reporter '{name}' already registered - replacing.")

        self._reporter_factories[name] = factory
        logger.debug(f"Registered reporter: {name}")

    def unregister(self, name: str) -> None:
        """Unregisters a reporter by name.

        Args:
            name (str): The name of the reporter to unregister.
        """
        if self._reporter_factories.pop(name, None) is None:
            logger.warning(f"Reporter '{name}' not found in registry.")

    def names(self) -> List[str]:
        """Returns the registered reporter names, sorted."""
        return sorted(self._reporter_factories)

    def create_reporter(self, name: str = DEFAULT_REPORTER, **kwargs) -> ReporterPlugin:
        """Instantiates a registered reporter.

        Args:
            name (str, optional): The reporter name. Defaults to "rich".
            **kwargs: Passed to the reporter factory.

        Returns:
            ReporterPlugin: The new reporter instance.

        Raises:
            ValueError: If no reporter is registered under ``name``.
        """
        try:
            factory = self._reporter_factories[name]
        except KeyError:
            raise ValueError(
                f"Unknown reporter '{name}' (choose from: {', '.join(self.names())})"
            ) from None

        reporter = factory(**kwargs)
        logger.debug(
            f"Using reporter: {reporter.metadata.name} (v{reporter.metadata.version})"
        )
        return reporter

    @classmethod
    def create_default(cls) -> "PluginRegistry":
        """Creates a registry with the builtin reporters registered.

        Returns:
            PluginRegistry: A new instance of PluginRegistry.
        """
        registry = cls()
        registry.register("rich", RichReporterPlugin)
        registry.register("json", JSONReporterPlugin)
        registry.register("silent", SilentReporterPlugin)
        return registry


def create_reporter(name: str = DEFAULT_REPORTER, **kwargs) -> ReporterPlugin:
    """Instantiates a builtin reporter by name.

    Raises:
        ValueError: If ``name`` is not a builtin reporter.
    """
    return PluginRegistry.create_default().create_reporter(name, **kwargs)
