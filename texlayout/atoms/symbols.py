"""
Symbol table.

Maps symbol names (``plus``, ``lbrack``, ``hat``...) to a character and an
atom type. The bundled table lives in ``config/symbols.json``.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..models import AtomType
from ..utils.errors import SymbolNotFoundError
from .base import SymbolAtom

logger = logging.getLogger(__name__)


class SymbolTable:
    """
    Named math symbols loaded from JSON.

    Each lookup returns a fresh `SymbolAtom`, so callers own what they get.

    Usage:
        table = SymbolTable()
        plus = table.get("plus")
        print(plus.char, plus.atom_type)  # + AtomType.BINARY_OPERATOR
    """

    DEFAULT_PATH = Path(__file__).parent.parent / "config" / "symbols.json"

    def __init__(self, symbols_path: Optional[Path] = None):
        self.path = Path(symbols_path) if symbols_path else self.DEFAULT_PATH
        self._symbols: Dict[str, Tuple[str, AtomType]] = {}
        self._load_symbols()

    def _load_symbols(self):
        if not self.path.exists():
            raise FileNotFoundError(f"Symbol table not found: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        for name, entry in data.items():
            self._symbols[name] = (entry["char"], AtomType.from_name(entry["type"]))

        logger.debug(f"Loaded {len(self._symbols)} symbols from {self.path.name}")

    def get(self, name: str) -> SymbolAtom:
        """
        Look up a symbol by name.

        Raises:
            SymbolNotFoundError: If ``name`` is not in the table
        """
        try:
            char, atom_type = self._symbols[name]
        except KeyError:
            raise SymbolNotFoundError(name) from None
        return SymbolAtom(name, char, atom_type)

    def register(self, name: str, char: str, atom_type: AtomType):
        if name in self._symbols:
            logger.debug(f"Overwriting symbol '{name}'")
        self._symbols[name] = (char, atom_type)

    def names(self) -> List[str]:
        return sorted(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)


@lru_cache(maxsize=1)
def default_symbol_table() -> SymbolTable:
    """The bundled symbol table, loaded once."""
    return SymbolTable()


def get_symbol(name: str) -> SymbolAtom:
    """Shortcut for ``default_symbol_table().get(name)``."""
    return default_symbol_table().get(name)
