# syntax/lexer.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Lexical analyzer for formula 1.0 tokenization using SLY

"""Lexical analyzer for formula 1.0 strings.

This module breaks formula text into tokens for the grammar. Token values
keep their exact source text so that literals can be re-emitted unchanged.

Supported Tokens:
- Literals: numbers (``1``, ``2.5``, ``.5``, ``3e-2``), double or single quoted strings
- Keywords: and, or, xor, not, mod
- Operators: + - * / % ^ == != < <= > >= ! ? : =
- Punctuation: ( ) [ ] { } , . ;
- Identifiers: function names and constants
- Whitespace: ignored during tokenization
"""

from sly import Lexer
from utils.logger import get_logger


class FormulaLexer(Lexer):
    """SLY-based lexer for formula 1.0 tokenization.

    Longer operators are declared before their prefixes (``==`` before
    ``=``, ``<=`` before ``<``) because SLY tries patterns in declaration
    order.
    """

    tokens = {
        "NUMBER",
        "STRING",
        "NAME",
        "AND",
        "OR",
        "NOT",
        "XOR",
        "MODULO",
        "EQ",
        "NE",
        "LE",
        "GE",
        "LT",
        "GT",
        "PLUS",
        "MINUS",
        "TIMES",
        "DIVIDE",
        "MOD",
        "POW",
        "BANG",
        "QUESTION",
        "COLON",
        "ASSIGN",
        "COMMA",
        "DOT",
        "SEMI",
        "LPAREN",
        "RPAREN",
        "LBRACKET",
        "RBRACKET",
        "LBRACE",
        "RBRACE",
    }

    # Whitespace characters to ignore
    ignore = " \t\r\n"

    # A leading or trailing decimal point is allowed: .5 and 5.
    NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"

    # JSON escapes only; single quoted strings may also escape a single quote
    STRING = (
        r'"(?:[^"\\]|\\["\\/bfnrt]|\\u[0-9a-fA-F]{4})*"'
        r"|'(?:[^'\\]|\\['\"\\/bfnrt]|\\u[0-9a-fA-F]{4})*'"
    )

    NAME = r"[a-zA-Z_][a-zA-Z0-9_]*"

    # Keyword operators
    NAME["and"] = "AND"
    NAME["or"] = "OR"
    NAME["not"] = "NOT"
    NAME["xor"] = "XOR"
    NAME["mod"] = "MODULO"

    EQ = r"=="
    NE = r"!="
    LE = r"<="
    GE = r">="
    LT = r"<"
    GT = r">"
    PLUS = r"\+"
    MINUS = r"-"
    TIMES = r"\*"
    DIVIDE = r"/"
    MOD = r"%"
    POW = r"\^"
    BANG = r"!"
    QUESTION = r"\?"
    COLON = r":"
    ASSIGN = r"="
    COMMA = r","
    DOT = r"\."
    SEMI = r";"
    LPAREN = r"\("
    RPAREN = r"\)"
    LBRACKET = r"\["
    RBRACKET = r"\]"
    LBRACE = r"\{"
    RBRACE = r"\}"

    def error(self, t):
        """Handle illegal characters during tokenization.

        Args:
            t: SLY token object containing error context

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        # Skip the illegal character
        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
