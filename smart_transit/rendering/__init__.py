"""Rendering utilities for the departure board preview."""

from smart_transit.rendering.board import compose_board, save_frame
from smart_transit.rendering.board_data import BoardData, DepartureRow, board_data_for
from smart_transit.rendering.colors import format_last_updated, parse_hex_color

__all__ = [
    "BoardData",
    "DepartureRow",
    "board_data_for",
    "compose_board",
    "format_last_updated",
    "parse_hex_color",
    "save_frame",
]
