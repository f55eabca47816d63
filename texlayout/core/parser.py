"""
Parser interface.

The layout engine does not parse LaTeX itself; any object implementing
`FormulaParser` can feed it atom trees.
"""

from abc import ABC, abstractmethod

from ..atoms import Atom


class FormulaParser(ABC):
    """
    Turns source text into a root atom.

    Subclasses raise `ParseError` on malformed input; recovery in partial
    mode is the caller's business (see `parse_formula`).
    """

    name: str = "FormulaParser"

    @abstractmethod
    def parse(self, text: str, partial: bool = False, ignore_whitespace: bool = False) -> Atom:
        """
        Parse ``text``.

        Args:
            text: Source text
            partial: The caller will accept a best-effort result
            ignore_whitespace: Whitespace carries no meaning in ``text``

        Returns:
            Root atom of the parsed formula

        Raises:
            ParseError: If the text is malformed
        """
        pass
