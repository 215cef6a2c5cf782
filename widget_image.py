"""Paint a widget instance (month image + label bar) as a PIL Image."""

from PIL import Image, ImageDraw, ImageFont, ImageOps
from loguru import logger

from render_descriptor import RenderDescriptor

_BAR_RATIO = 0.18

_LIGHT = {"bg": "white", "bar": "#F3F3F3", "fg": "#333333", "accent": "#0078D4"}
_DARK = {"bg": "#1E1E1E", "bar": "#2D2D2D", "fg": "#EEEEEE", "accent": "#4CC2FF"}


def load_image(path: str | None) -> Image.Image | None:
    """Decode *path*, or return None if it is missing or not an image."""
    if not path:
        return None
    try:
        with Image.open(path) as im:
            im.load()
            return im.convert("RGBA")
    except (OSError, ValueError) as exc:
        logger.warning("Cannot decode widget image {}: {}", path, exc)
        return None


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Return the largest font for which *text* fits in max_w × max_h."""
    font_size = max_h
    font = None
    while font_size > 6:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            break
        font_size -= 1
    return font


def _draw_centered(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int],
                   text: str, font, fill: str) -> None:
    left, top, right, bottom = box
    bbox = draw.textbbox((0, 0), text, font=font)
    x = left + (right - left - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = top + (bottom - top - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def render_widget_image(descriptor: RenderDescriptor,
                        size: tuple[int, int] = (360, 240),
                        dark_mode: bool = False) -> Image.Image:
    """Return an RGBA image: label bar with < > on top, month image below.

    If the image cannot be decoded the area below the bar stays empty.
    """
    width, height = size
    colors = _DARK if dark_mode else _LIGHT
    bar_h = max(12, int(height * _BAR_RATIO))

    img = Image.new("RGBA", size, colors["bg"])
    photo = load_image(descriptor.image_path)
    if photo is not None and height > bar_h:
        img.paste(ImageOps.fit(photo, (width, height - bar_h)), (0, bar_h))

    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, width, bar_h), fill=colors["bar"])

    pad = max(2, bar_h // 6)
    arrow_w = bar_h
    font = _fit_font(draw, descriptor.label, width - 2 * arrow_w, bar_h - 2 * pad)
    _draw_centered(draw, (arrow_w, 0, width - arrow_w, bar_h), descriptor.label, font, colors["fg"])
    arrow_font = _fit_font(draw, ">", arrow_w, bar_h - 2 * pad)
    _draw_centered(draw, (0, 0, arrow_w, bar_h), "<", arrow_font, colors["accent"])
    _draw_centered(draw, (width - arrow_w, 0, width, bar_h), ">", arrow_font, colors["accent"])
    return img
