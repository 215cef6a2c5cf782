"""Entry point — tray icons per widget instance plus a periodic refresh thread."""

import threading
import webbrowser
from pathlib import Path

from loguru import logger

from actions import ActionRegistry
from log_config import setup_logging
from render_descriptor import RenderDescriptor
from settings import JsonStore, load_settings, store_path
from tray_icon import TrayWidgets
from widget import MonthWidget


def open_image(descriptor: RenderDescriptor) -> None:
    if not descriptor.image_path:
        logger.info("No image for {}", descriptor.label)
        return
    webbrowser.open(Path(descriptor.image_path).resolve().as_uri())


def main() -> None:
    settings = load_settings()
    setup_logging(settings["log_level"], settings["log_dir"])

    store = JsonStore(store_path(settings))
    stop = threading.Event()

    # MonthWidget and the tray reference each other through these callbacks
    def on_action(ref) -> None:
        cal_widget.handle(ref)

    def on_refresh() -> None:
        cal_widget.refresh()

    def on_exit() -> None:
        stop.set()
        tray.stop()

    registry = ActionRegistry(on_action)
    tray = TrayWidgets(
        registry, on_refresh, on_exit,
        size=(settings["widget_width"], settings["widget_height"]),
        dark_mode=settings["dark_mode"],
    )
    for instance_id in range(1, settings["instances"] + 1):
        tray.add_instance(instance_id)

    cal_widget = MonthWidget(
        store, tray.present, tray.instance_ids,
        label_format=settings["label_format"], on_open=open_image,
    )
    cal_widget.refresh()

    @logger.catch
    def refresh_tick() -> None:
        cal_widget.refresh()

    def refresh_loop() -> None:
        interval = settings["refresh_minutes"] * 60
        while not stop.wait(interval):
            refresh_tick()

    threading.Thread(target=refresh_loop, daemon=True).start()

    # Extra instances in daemon threads, the first one on the main thread
    ids = tray.instance_ids()
    for instance_id in ids[1:]:
        threading.Thread(target=tray.icon(instance_id).run, daemon=True).start()
    tray.icon(ids[0]).run()


if __name__ == "__main__":
    main()
