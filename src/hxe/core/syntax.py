"""
Colouring of rendered hex rows using Pygments.
"""

import curses
from typing import Any, Dict, Final, List, Tuple

from pygments.lexer import RegexLexer, bygroups
from pygments.token import Name, Number, String, Text, Whitespace

ROW_COLORS: Final[Dict[Any, int]] = {
    Name.Label: curses.COLOR_CYAN,
    Number.Hex: curses.COLOR_WHITE,
    String: curses.COLOR_GREEN,
}


class HexRowLexer(RegexLexer):
    """
    Lexer for one rendered row of the hex view.

    A row is an offset label, hex groups each followed by a space, and
    optionally the decoded text after one more space. Rows without the
    hex column are lexed from the 'text' state.
    """

    name = 'HexRow'
    aliases = ['hexrow']

    tokens = {
        'root': [
            (r'([0-9A-Fa-f]+)(  )', bygroups(Name.Label, Whitespace), 'hex'),
        ],
        'hex': [
            (r'([0-9A-F]+)( )', bygroups(Number.Hex, Whitespace)),
            (r'( +)(.+)$', bygroups(Whitespace, String)),
            (r' +$', Whitespace),
        ],
        'text': [
            (r'.+$', String),
        ],
    }


class RowHighlighter:
    """Splits rendered rows into (text, colour) spans."""

    def __init__(self, default_color: int = curses.COLOR_WHITE) -> None:
        self.lexer = HexRowLexer(stripnl=False, ensurenl=False)
        self.default_color = default_color

    def highlight_row(self, row: str, show_hex: bool = True) -> List[Tuple[str, int]]:
        """
        Highlight a rendered row.

        Args:
            row: The row text as drawn on screen
            show_hex: Whether the row starts with the offset and hex groups

        Returns:
            A list of (text, foreground colour) tuples covering the whole row
        """

        if not row:
            return []

        stack = ('root',) if show_hex else ('text',)
        result = []
        for _, token_type, text in self.lexer.get_tokens_unprocessed(row, stack):
            result.append((text, self._get_token_color(token_type)))

        return result

    def _get_token_color(self, token_type: Any) -> int:
        """Map a token type, or its closest parent, to a colour."""

        while token_type is not None:
            if token_type in ROW_COLORS:
                return ROW_COLORS[token_type]
            if token_type is Text:
                break
            token_type = token_type.parent

        return self.default_color
