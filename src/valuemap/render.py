from PIL import Image, ImageDraw, ImageFont

from valuemap.config import CellShape, ScaleConfig, Settings
from valuemap.sampler import ValueMap

CIRCLE_BACKGROUND = (0x11, 0x13, 0x18)
GRID_LINE = (40, 40, 40)
MIN_LABELLED_CELL = 16  # pixels


def shade(value: int, scale: ScaleConfig) -> int:
    """0 for the bottom of the scale up to 255 for the top."""
    if scale.max <= 0:
        return 0
    return max(0, min(255, round(value / scale.max * 255)))


def format_value_map(value_map: ValueMap, scale: ScaleConfig, colour: bool = False) -> str:
    """Lay out a value map as right-aligned numbers, optionally on ANSI truecolor greys."""
    width = max(len(str(scale.min)), len(str(scale.max)))
    out = []
    for row in value_map:
        if not colour:
            out.append(" ".join(f"{value:>{width}}" for value in row))
            continue
        parts = []
        for value in row:
            s = shade(value, scale)
            bg = 255 - s
            fg = 255 if s > 128 else 0
            parts.append(f"\033[38;2;{fg};{fg};{fg}m\033[48;2;{bg};{bg};{bg}m {value:>{width}}")
        parts.append(" \033[0m")
        out.append("".join(parts))
    return "\n".join(out)


def render_image(value_map: ValueMap, settings: Settings, width: int = 480) -> Image.Image:
    """Draw a value map as a picture of grey cells, `width` pixels across."""
    rows = len(value_map)
    cols = len(value_map[0]) if rows else 0
    if rows == 0 or cols == 0:
        return Image.new("RGB", (width, 0))

    cell = width / cols
    height = round(rows * cell)
    circle = settings.cell_shape == CellShape.CIRCLE
    image = Image.new("RGB", (width, height), CIRCLE_BACKGROUND if circle else (255, 255, 255))
    draw = ImageDraw.Draw(image)
    font = None
    if cell >= MIN_LABELLED_CELL:
        font = ImageFont.load_default(size=round(max(8, min(cell / 2.8, 18))))

    for r, row in enumerate(value_map):
        for c, value in enumerate(row):
            s = shade(value, settings.scale)
            bg = 255 - s
            x0, y0 = c * cell, r * cell
            box = (x0, y0, x0 + cell, y0 + cell)
            if circle:
                draw.ellipse((x0 + 1, y0 + 1, x0 + cell - 1, y0 + cell - 1), fill=(bg, bg, bg))
            else:
                draw.rectangle(box, fill=(bg, bg, bg))
            if font is not None:
                text_colour = (255, 255, 255) if s > 128 else (0, 0, 0)
                draw.text((x0 + cell / 2, y0 + cell / 2), str(value), fill=text_colour, font=font, anchor="mm")

    if not circle:
        for r in range(rows + 1):
            draw.line((0, r * cell, width, r * cell), fill=GRID_LINE)
        for c in range(cols + 1):
            draw.line((c * cell, 0, c * cell, height), fill=GRID_LINE)
    return image
