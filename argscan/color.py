"""
ANSI escape sequences for highlighting log messages written to a terminal.
"""

from typing import Union

__all__ = ['colored', 'InvalidAnsiCode']

Color = Union[str, int]

_NAMED_COLORS = {
    'black': 0, 'red': 1, 'green': 2, 'yellow': 3, 'blue': 4, 'magenta': 5, 'cyan': 6, 'grey': 7,
    'light_red': 9, 'light_green': 10, 'light_yellow': 11, 'light_blue': 12, 'white': 15,
}


def colored(text: str, color: Color = None, *, bold: bool = False) -> str:
    """
    :param text: The text to be colored
    :param color: A color name, or a number from the 256-color palette
    :param bold: Whether the text should be bold
    :return: The text wrapped in the escape sequences for the given color, or the text unchanged if no color or
      attributes were specified
    """
    codes = []
    if color is not None:
        codes.append(f'38;5;{_color_num(color)}')
    if bold:
        codes.append('1')
    if not text or not codes:
        return text
    return f'\x1b[{";".join(codes)}m{text}\x1b[0m'


def _color_num(color: Color) -> int:
    if isinstance(color, int) or color.isdigit():
        if 0 <= (num := int(color)) <= 255:
            return num
        raise InvalidAnsiCode(color)
    try:
        return _NAMED_COLORS[color.lower()]
    except KeyError as e:
        raise InvalidAnsiCode(color) from e


class InvalidAnsiCode(ValueError):
    """Raised when an unknown color is requested"""
