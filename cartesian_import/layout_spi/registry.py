import logging
from importlib.metadata import entry_points
from typing import TypeVar

from cartesian_import.errors import UnknownLayoutError
from cartesian_import.layout_spi.layout import LayoutBuilder

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "cartesian_import.layouts"

B = TypeVar("B", bound=type[LayoutBuilder])


class LayoutRegistry:
    """Layout builders known to the host, by name."""

    def __init__(self) -> None:
        self._builders: dict[str, LayoutBuilder] = dict()

    def register(self, builder: LayoutBuilder) -> LayoutBuilder:
        if builder.name in self._builders:
            logger.debug("Layout %r is already registered", builder.name)
            return self._builders[builder.name]
        self._builders[builder.name] = builder
        logger.debug("Registered layout %r", builder.name)
        return builder

    def builders(self) -> list[LayoutBuilder]:
        return list(self._builders.values())

    def builder(self, name: str) -> LayoutBuilder:
        try:
            return self._builders[name]
        except KeyError:
            raise UnknownLayoutError(f"No layout named {name!r}") from None

    def __contains__(self, name: str) -> bool:
        return name in self._builders

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> int:
        """Register the builder classes advertised by installed distributions.

        Entries that fail to load are skipped with a warning. Returns the
        number of new builders.
        """
        loaded = 0
        for entry_point in entry_points(group=group):
            try:
                builder_class = entry_point.load()
                builder = builder_class()
            except Exception:
                logger.warning("Could not load layout plugin %r", entry_point.value, exc_info=True)
                continue
            if builder.name not in self._builders:
                self.register(builder)
                loaded += 1
        return loaded


default_registry = LayoutRegistry()


def service_provider(builder_class: B) -> B:
    """Class decorator registering a layout builder with the default registry."""
    default_registry.register(builder_class())
    return builder_class
