"""System-tray widget instances via pystray."""

from typing import Callable

import pystray
from PIL import Image
from loguru import logger
from pystray import Menu, MenuItem

from actions import ActionRegistry
from render_descriptor import RenderDescriptor
from widget_image import render_widget_image


def build_menu(
    descriptor: RenderDescriptor,
    registry: ActionRegistry,
    on_refresh: Callable[[], None],
    on_exit: Callable[[], None],
) -> Menu:
    """Menu for one instance; every control is bound to its own pending action."""
    root = registry.pending(descriptor.root)
    prev = registry.pending(descriptor.prev)
    nxt = registry.pending(descriptor.next)
    return Menu(
        MenuItem(f"Open {descriptor.label}", lambda _icon, _item: registry.fire(root),
                 default=True, enabled=descriptor.has_image),
        MenuItem("Previous month", lambda _icon, _item: registry.fire(prev)),
        MenuItem("Next month", lambda _icon, _item: registry.fire(nxt)),
        Menu.SEPARATOR,
        MenuItem("Refresh", lambda _icon, _item: on_refresh()),
        MenuItem("Exit", lambda _icon, _item: on_exit()),
    )


class TrayWidgets:
    """One tray icon per widget instance; presents render descriptors on them."""

    def __init__(
        self,
        registry: ActionRegistry,
        on_refresh: Callable[[], None],
        on_exit: Callable[[], None],
        size: tuple[int, int] = (360, 240),
        dark_mode: bool = False,
    ) -> None:
        self.registry = registry
        self.on_refresh = on_refresh
        self.on_exit = on_exit
        self.size = size
        self.dark_mode = dark_mode
        self._icons: dict[int, pystray.Icon] = {}

    def add_instance(self, instance_id: int) -> pystray.Icon:
        icon = pystray.Icon(
            f"month-widget-{instance_id}",
            Image.new("RGBA", self.size, "white"),
            "Month Widget",
        )
        self._icons[instance_id] = icon
        return icon

    def instance_ids(self) -> list[int]:
        return sorted(self._icons)

    def icon(self, instance_id: int) -> pystray.Icon:
        return self._icons[instance_id]

    def present(self, instance_id: int, descriptor: RenderDescriptor) -> bool:
        icon = self._icons.get(instance_id)
        if icon is None:
            logger.warning("No tray icon for widget {}", instance_id)
            return False
        icon.icon = render_widget_image(descriptor, self.size, self.dark_mode)
        icon.title = f"Month Widget – {descriptor.label}"
        icon.menu = build_menu(descriptor, self.registry, self.on_refresh, self.on_exit)
        return True

    def stop(self) -> None:
        for icon in self._icons.values():
            icon.stop()
