import io
import logging
import math
from collections.abc import Sequence

from PIL import Image
from PIL import ImageDraw
from PIL import ImageFont

from heatmap_proxy.api.schemas.contributions import CombinedSeries
from heatmap_proxy.core.errors import RenderError
from heatmap_proxy.services.themes import Theme


logger = logging.getLogger(__name__)

SQUARE_SIZE = 10
SQUARE_GAP = 2
WEEK_WIDTH = SQUARE_SIZE + SQUARE_GAP
WEEKS = 53
DAYS_PER_WEEK = 7
HEADER_HEIGHT = 20

IMAGE_WIDTH = WEEKS * WEEK_WIDTH
IMAGE_HEIGHT = DAYS_PER_WEEK * WEEK_WIDTH + HEADER_HEIGHT

BACKGROUND_COLOR = "#ffffff"
LABEL_COLOR = "#000000"
LABEL_POSITION = (10, 15)


def palette_index(count: int, max_count: int, palette_size: int) -> int:
    """Map a day count onto a palette slot; the busiest day gets slot 0.

    A calendar without any contributions maps every day to the last slot.
    """

    if max_count <= 0:
        normalized_level = 0.0
    else:
        normalized_level = count / max_count

    index = math.floor((1 - normalized_level) * (palette_size - 1))
    return min(max(index, 0), palette_size - 1)


def square_position(index: int) -> tuple[int, int]:
    """Top-left pixel of the square for the `index`-th day of the series."""

    week, day_of_week = divmod(index, DAYS_PER_WEEK)
    return week * WEEK_WIDTH, day_of_week * WEEK_WIDTH + HEADER_HEIGHT


def usernames_label(usernames: Sequence[str]) -> str:
    return f"Usernames: {', '.join(usernames)}"


def create_contributions_image(
    series: CombinedSeries,
    theme: Theme,
    usernames: Sequence[str],
) -> bytes:
    """Render a combined series as a 53x7 heat-map PNG.

    Raises:
        RenderError: If the series holds no days.
    """

    if not series.contributions:
        raise RenderError("Cannot render an empty contribution series")

    palette = theme.palette
    max_count = max(series.contributions)
    max_squares = WEEKS * DAYS_PER_WEEK
    if len(series.contributions) > max_squares:
        logger.debug(
            "Dropping %d days beyond the %d-week grid",
            len(series.contributions) - max_squares,
            WEEKS,
        )

    image = Image.new("RGB", (IMAGE_WIDTH, IMAGE_HEIGHT), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    for index, count in enumerate(series.contributions[:max_squares]):
        x, y = square_position(index)
        color = palette[palette_index(count, max_count, len(palette))]
        draw.rectangle(
            [x, y, x + SQUARE_SIZE - 1, y + SQUARE_SIZE - 1],
            fill=color,
        )

    # Label goes on last so it stays above the first row of squares.
    draw.text(
        LABEL_POSITION,
        usernames_label(usernames),
        fill=LABEL_COLOR,
        font=ImageFont.load_default(),
    )

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
