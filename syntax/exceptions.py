# syntax/exceptions.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Custom exceptions for formula tokenizing and parsing

"""Exceptions raised inside the formula parsing pipeline.

These never reach callers of ``converter.convert_formula``: the ``parse``
boundary catches them and reports a parse error in the conversion result
instead.
"""


class ParseError(RuntimeError):
    """Exception raised when formula text cannot be tokenized or parsed.

    Indicates that the input does not conform to the formula 1.0 grammar,
    for example an illegal character, an unbalanced parenthesis or an
    unexpected end of input.
    """

    pass
