"""Pick the image to show for a month."""

from typing import Mapping

from calendar_logic import MonthKey, format_month_key

IMAGE_KEY_PREFIX = "month_image_path_"
FALLBACK_IMAGE_KEY = "month_image_path"


def image_key(key: MonthKey) -> str:
    """Store key holding the image path for *key*."""
    return f"{IMAGE_KEY_PREFIX}{format_month_key(key)}"


def specific_image(key: MonthKey, mapping: Mapping[str, str]) -> str | None:
    """Return the entry for exactly this month, ignoring the fallback.

    An existing entry is returned as is, even an empty path.
    """
    return mapping.get(format_month_key(key))


def resolve(key: MonthKey, mapping: Mapping[str, str],
            fallback: str | None) -> str | None:
    """Return the month's own entry if it exists, else *fallback*.

    None is a normal result: the widget is drawn without an image.
    """
    image = specific_image(key, mapping)
    if image is not None:
        return image
    return fallback
