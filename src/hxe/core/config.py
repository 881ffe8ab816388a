"""
Configuration of a viewer session and the command line parser producing it.
"""

import argparse
from dataclasses import dataclass, field
from typing import FrozenSet, Final, List

from .. import __version__
from . import encoding
from .errors import ConfigError

GROUP_SIZES: Final[FrozenSet[int]] = frozenset({1, 2, 4, 8, 16})
OFFSET_BASES: Final[FrozenSet[str]] = frozenset({'hex', 'dec', 'oct'})
COLUMNS: Final[FrozenSet[str]] = frozenset({'hex', 'text', 'keys'})
MAX_BYTES_PER_ROW: Final[int] = 4096


@dataclass
class Config:
    """Validated settings for one viewer session."""

    filename: str
    bytes_per_row: int = 16
    group: int = 1
    offset_base: str = 'hex'
    columns: FrozenSet[str] = field(default_factory=lambda: COLUMNS)
    encoding: str = encoding.IDENTITY

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'Config':
        """Build and validate a configuration from parsed arguments."""

        columns = [c.strip().lower() for c in args.cols.split(',')]
        for column in columns:
            if column not in COLUMNS:
                raise ConfigError(f'invalid column type "{column}"')

        config = cls(
            filename=args.file,
            bytes_per_row=args.row,
            group=args.group,
            offset_base=args.offset_base.lower(),
            columns=frozenset(columns),
            encoding=args.enc.lower(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """
        Check the option combination.

        Raises:
            ConfigError: If any option is out of range
            EncodingError: If the encoding name is unknown
        """

        if self.group not in GROUP_SIZES:
            raise ConfigError('invalid amount of bytes per group')

        if not 1 <= self.bytes_per_row <= MAX_BYTES_PER_ROW or self.bytes_per_row % self.group:
            raise ConfigError('invalid amount of bytes per row')

        if self.offset_base not in OFFSET_BASES:
            raise ConfigError(f'invalid offset base "{self.offset_base}"')

        unknown = sorted(self.columns - COLUMNS)
        if unknown:
            raise ConfigError(f'invalid column type "{unknown[0]}"')

        if not self.filename:
            raise ConfigError('no filename passed')

        encoding.lookup(self.encoding)

    def has_column(self, name: str) -> bool:
        """Check whether an optional column is enabled."""

        return name in self.columns


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""

    parser = argparse.ArgumentParser(
        prog='hxe',
        description='hxe - terminal hex viewer'
    )
    parser.add_argument(
        'file',
        nargs='?',
        type=str,
        help='File to open'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'hxe version {__version__}'
    )
    parser.add_argument(
        '--encodings',
        action='store_true',
        help='display a list of supported encodings for use with --enc'
    )
    parser.add_argument(
        '--cols',
        default='hex,text,keys',
        help='comma-separated list of columns to display (default: %(default)s)'
    )
    parser.add_argument(
        '--offset-base',
        default='hex',
        choices=sorted(OFFSET_BASES),
        help='which radix to use for offsets (default: %(default)s)'
    )
    parser.add_argument(
        '--group',
        type=int,
        default=1,
        help='how many bytes to display in a group (default: 1, options: 1, 2, 4, 8, 16)'
    )
    parser.add_argument(
        '--row',
        type=int,
        default=16,
        help='how many bytes to display per row (default: 16, options: 1-4096)'
    )
    parser.add_argument(
        '--enc',
        default=encoding.IDENTITY,
        help='which encoding to use for the textual representation of the data'
    )
    parser.add_argument(
        '--log-file',
        help='write debug log to this file'
    )
    return parser


def column_list(config: Config) -> List[str]:
    """Enabled columns in display order."""

    return [c for c in ('hex', 'text', 'keys') if config.has_column(c)]
