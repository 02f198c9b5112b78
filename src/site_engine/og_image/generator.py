"""Open-graph preview image rasterizer.

Draws the same layout as templates/og_image.html into a PNG:
    1. White canvas with outer padding
    2. Soft drop shadow under the card
    3. Card with top-rounded corners and a 43° three-stop gradient
    4. Black border
    5. Wrapped description at the top, "author · date" and site name
       along the bottom

Usage:
    from src.site_engine.og_image import OGImageGenerator

    generator = OGImageGenerator()
    png = generator.render(OGImageContext(...))
"""

from __future__ import annotations

import hashlib
import json
import math
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from src.common.config import OGImageSettings
from src.common.logging import setup_logging
from src.site_engine.template_engine.models import OGImageContext

logger = setup_logging(module_name="og_image.generator")

# (y offset, blur radius, opacity) of the two stacked CSS box shadows
_SHADOWS = ((10, 10, 0.19), (6, 3, 0.23))
_LINE_HEIGHT = 1.2


def gradient_color(
    stops: list[tuple[float, str]],
    t: float,
) -> tuple[int, int, int]:
    """Color at position t (0..1) of a linear gradient.

    Positions before the first stop or after the last one take the
    color of that stop, as CSS does.
    """
    colors = [(pos, ImageColor.getrgb(color)[:3]) for pos, color in stops]
    if t <= colors[0][0]:
        return colors[0][1]
    if t >= colors[-1][0]:
        return colors[-1][1]

    for (p0, c0), (p1, c1) in zip(colors, colors[1:]):
        if p0 <= t <= p1:
            span = (p1 - p0) or 1.0
            f = (t - p0) / span
            return tuple(round(a + (b - a) * f) for a, b in zip(c0, c1))
    return colors[-1][1]


def cache_key(context: OGImageContext, config: Optional[OGImageSettings] = None) -> str:
    """Stable hash of everything that affects the rendered image."""
    config = config or OGImageSettings()
    payload = json.dumps(
        {
            "description": context.description,
            "date": context.date,
            "author": context.author,
            "site_name": context.site_name,
            "config": config.model_dump(mode="json"),
        },
        sort_keys=True,
        ensure_ascii=False,
    )
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class OGImageGenerator:
    """Renders open-graph preview images."""

    def __init__(self, config: Optional[OGImageSettings] = None):
        self.config = config or OGImageSettings()
        self._fonts: dict[int, ImageFont.ImageFont] = {}

    # --- Public API ---

    def render(self, context: OGImageContext) -> bytes:
        """Render the preview image as PNG bytes."""
        cfg = self.config
        canvas = Image.new("RGBA", (cfg.width, cfg.height), (255, 255, 255, 255))
        box = (cfg.padding, cfg.padding, cfg.width - cfg.padding, cfg.height - cfg.padding)

        canvas = self._draw_shadow(canvas, box)
        self._draw_card(canvas, box)
        self._draw_text(canvas, box, context)

        buf = BytesIO()
        canvas.convert("RGB").save(buf, format="PNG")
        return buf.getvalue()

    def write(self, context: OGImageContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.render(context))
        logger.debug("Wrote open-graph image %s", output_path)
        return output_path

    # --- Drawing stages ---

    def _draw_shadow(self, canvas: Image.Image, box: tuple[int, int, int, int]) -> Image.Image:
        for offset, blur, opacity in _SHADOWS:
            layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
            ImageDraw.Draw(layer).rectangle(
                (box[0], box[1] + offset, box[2] - 1, box[3] - 1 + offset),
                fill=(0, 0, 0, round(255 * opacity)),
            )
            canvas = Image.alpha_composite(canvas, layer.filter(ImageFilter.GaussianBlur(blur)))
        return canvas

    def _draw_card(self, canvas: Image.Image, box: tuple[int, int, int, int]) -> None:
        cfg = self.config
        size = (box[2] - box[0], box[3] - box[1])
        corners = (True, True, False, False)

        mask = Image.new("L", size, 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (0, 0, size[0] - 1, size[1] - 1),
            radius=cfg.corner_radius,
            fill=255,
            corners=corners,
        )
        canvas.paste(self._gradient(size), box[:2], mask)

        if cfg.border_width:
            ImageDraw.Draw(canvas).rounded_rectangle(
                (box[0], box[1], box[2] - 1, box[3] - 1),
                radius=cfg.corner_radius,
                outline=(0, 0, 0, 255),
                width=cfg.border_width,
                corners=corners,
            )

    def _gradient(self, size: tuple[int, int]) -> Image.Image:
        """CSS-style linear gradient filling ``size``.

        A one-pixel ramp is stretched into a square, rotated to the
        gradient angle and cropped around its center.
        """
        cfg = self.config
        w, h = size
        angle = math.radians(cfg.gradient_angle)
        # Length of the CSS gradient line for this box and angle
        length = abs(w * math.sin(angle)) + abs(h * math.cos(angle))
        diag = math.ceil(math.hypot(w, h)) + 2

        start = (diag - length) / 2
        ramp = Image.new("RGB", (diag, 1))
        ramp.putdata([
            gradient_color(cfg.gradient_stops, (x - start) / length)
            for x in range(diag)
        ])
        square = ramp.resize((diag, diag), Image.NEAREST)
        # 0deg points up and turns clockwise; PIL rotates counter-clockwise from the x axis
        rotated = square.rotate(90 - cfg.gradient_angle, resample=Image.BICUBIC)

        left = (diag - w) // 2
        top = (diag - h) // 2
        return rotated.crop((left, top, left + w, top + h))

    def _draw_text(
        self,
        canvas: Image.Image,
        box: tuple[int, int, int, int],
        context: OGImageContext,
    ) -> None:
        cfg = self.config
        draw = ImageDraw.Draw(canvas)
        inset = cfg.border_width + cfg.card_padding
        left, top = box[0] + inset, box[1] + inset
        right, bottom = box[2] - inset, box[3] - inset

        footer_font = self._font(cfg.footer_font_size)
        footer_height = round(cfg.footer_font_size * _LINE_HEIGHT)
        footer_top = bottom - footer_height

        font = self._font(cfg.font_size)
        line_height = round(cfg.font_size * _LINE_HEIGHT)
        max_lines = max(1, (footer_top - top) // line_height)
        lines = self._wrap(draw, context.description, font, right - left, max_lines)
        for i, line in enumerate(lines):
            draw.text((left, top + i * line_height), line, font=font, fill="white")

        byline = f"{context.author} · {context.date}"
        draw.text((left, footer_top), byline, font=footer_font, fill="white")
        site_width = draw.textlength(context.site_name, font=footer_font)
        draw.text((right - site_width, footer_top), context.site_name, font=footer_font, fill="white")

    # --- Helpers ---

    def _font(self, size: int) -> ImageFont.ImageFont:
        if size not in self._fonts:
            if self.config.font_path:
                self._fonts[size] = ImageFont.truetype(self.config.font_path, size)
            else:
                self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def _wrap(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        font: ImageFont.ImageFont,
        max_width: int,
        max_lines: int,
    ) -> list[str]:
        """Greedy word wrap, ellipsizing the last line when text overflows."""
        lines: list[str] = []
        current = ""
        for word in text.split():
            candidate = f"{current} {word}".strip()
            if current and draw.textlength(candidate, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)

        if len(lines) > max_lines:
            lines = lines[:max_lines]
            last = lines[-1]
            while last and draw.textlength(last + "…", font=font) > max_width:
                last = last.rsplit(" ", 1)[0] if " " in last else last[:-1]
            lines[-1] = last + "…"
        return lines
