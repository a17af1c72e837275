"""
Naming utilities for generated identifiers.

Converts rendered enum values such as ``credit_card`` or ``bank transfer``
into TypeScript member names (``CreditCard``, ``BankTransfer``).
"""

import re

_NUMBER_SEQUENCE = re.compile(r"([a-zA-Z])(\d+)([a-zA-Z]?)")


def add_word_boundaries_to_numbers(name: str) -> str:
    """Surround digit runs that follow a letter with spaces."""
    return _NUMBER_SEQUENCE.sub(r"\1 \2 \3", name)


def to_camel(name: str) -> str:
    """
    Convert to CamelCase with an upper-case initial.

    Upper-case letters and digits are kept as they are, separators
    (``_``, ``-``, space) capitalise the following lower-case letter and any
    other character is dropped.
    """
    name = add_word_boundaries_to_numbers(name).strip(" ")

    result = []
    cap_next = True
    for char in name:
        if "A" <= char <= "Z" or "0" <= char <= "9":
            result.append(char)
        elif "a" <= char <= "z":
            result.append(char.upper() if cap_next else char)
        cap_next = char in "_ -"
    return "".join(result)
