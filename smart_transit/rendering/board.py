"""Departure board composer."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from smart_transit.rendering.board_data import BoardData, DepartureRow
from smart_transit.rendering.colors import parse_hex_color

BOARD_WIDTH = 192
BOARD_HEIGHT = 128
MIN_BOARD_WIDTH = 128

HEADER_HEIGHT = 16
ROW_HEIGHT = 14
TEXT_PADDING = 2

BADGE_LEFT = 2
BADGE_WIDTH = 26
BADGE_TEXT_INSET = 4
TIME_LEFT = BADGE_LEFT + BADGE_WIDTH + 6

DOT_DIAMETER = 6
DOT_RIGHT_MARGIN = 4

COLOR_BACKGROUND = (0, 0, 0)
COLOR_HEADER = (20, 40, 90)
COLOR_TEXT = (255, 255, 255)
COLOR_CLOCK = (136, 136, 136)
COLOR_DIM_TEXT = (72, 72, 72)
COLOR_ROW_DIVIDER = (15, 15, 15)

COLOR_DELAYED = (200, 0, 0)
COLOR_LIVE = (0, 200, 0)
COLOR_SCHEDULED = (230, 140, 0)

DEFAULT_OUTPUT_PATH = "preview_output/board.png"

EMPTY_TEXT = "No departures in the next 2 hours"

FONT = ImageFont.load_default()


def _status_color(status: str) -> tuple[int, int, int]:
    if status == "Delayed":
        return COLOR_DELAYED
    if status == "Live":
        return COLOR_LIVE
    return COLOR_SCHEDULED


def _text_y(draw: ImageDraw.ImageDraw, text: str, top: int, height: int) -> int:
    bbox = draw.textbbox((0, 0), text, font=FONT)
    return top + (height - (bbox[3] - bbox[1])) // 2 - bbox[1]


def _draw_header(draw: ImageDraw.ImageDraw, data: BoardData, width: int) -> None:
    draw.rectangle((0, 0, width - 1, HEADER_HEIGHT - 1), fill=COLOR_HEADER)
    name_y = _text_y(draw, data.stop_name, 0, HEADER_HEIGHT)
    draw.text((TEXT_PADDING, name_y), data.stop_name, font=FONT, fill=COLOR_TEXT)

    updated = data.last_updated
    bbox = draw.textbbox((0, 0), updated, font=FONT)
    updated_x = width - (bbox[2] - bbox[0]) - TEXT_PADDING
    draw.text((updated_x, _text_y(draw, updated, 0, HEADER_HEIGHT)), updated, font=FONT, fill=COLOR_CLOCK)


def _draw_row(draw: ImageDraw.ImageDraw, index: int, row: DepartureRow, width: int) -> None:
    top = HEADER_HEIGHT + index * ROW_HEIGHT
    bottom = top + ROW_HEIGHT - 1

    draw.rectangle(
        (BADGE_LEFT, top + 1, BADGE_LEFT + BADGE_WIDTH - 1, bottom - 1),
        fill=parse_hex_color(row.route_color),
    )
    draw.text(
        (BADGE_LEFT + BADGE_TEXT_INSET, _text_y(draw, row.route_short_name, top, ROW_HEIGHT)),
        row.route_short_name,
        font=FONT,
        fill=parse_hex_color(row.route_text_color),
    )

    time_text = f"{row.arrival_time} {row.delay_text}".strip()
    draw.text((TIME_LEFT, _text_y(draw, time_text, top, ROW_HEIGHT)), time_text, font=FONT, fill=COLOR_TEXT)

    dot_right = width - DOT_RIGHT_MARGIN
    dot_left = dot_right - DOT_DIAMETER + 1
    dot_top = top + (ROW_HEIGHT - DOT_DIAMETER) // 2
    draw.ellipse(
        (dot_left, dot_top, dot_right, dot_top + DOT_DIAMETER - 1),
        fill=_status_color(row.status),
    )

    draw.line((0, bottom, width - 1, bottom), fill=COLOR_ROW_DIVIDER)


def row_capacity(height: int) -> int:
    return max((height - HEADER_HEIGHT) // ROW_HEIGHT, 0)


def compose_board(data: BoardData, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> Image.Image:
    """Compose an RGB board image; departures past the last row are cut off."""
    if width < MIN_BOARD_WIDTH:
        raise ValueError(f"Width must be at least {MIN_BOARD_WIDTH}, got {width}.")
    if height < HEADER_HEIGHT + ROW_HEIGHT:
        raise ValueError(f"Height must be at least {HEADER_HEIGHT + ROW_HEIGHT}, got {height}.")

    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)
    _draw_header(draw, data, width)

    rows = list(data.departures)[: row_capacity(height)]
    if not rows:
        draw.text(
            (TEXT_PADDING, _text_y(draw, EMPTY_TEXT, HEADER_HEIGHT, ROW_HEIGHT)),
            EMPTY_TEXT,
            font=FONT,
            fill=COLOR_DIM_TEXT,
        )
        return image

    for idx, row in enumerate(rows):
        _draw_row(draw, idx, row, width)
    return image


def save_frame(image: Image.Image, path: str | Path = DEFAULT_OUTPUT_PATH) -> Path:
    """Write a composed board as PNG, creating parent folders; returns the path."""
    if image.mode != "RGB":
        raise ValueError(f"Board frames must be RGB, got {image.mode}.")
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")
    return output_path


__all__ = ["compose_board", "row_capacity", "save_frame"]
