"""Padding expressions for the plaintext ``!Padding:`` extension."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Padding:
    """Dead margin around a pattern, in the order top, right, bottom, left."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def parse(cls, expression: str) -> "Padding":
        """Parse a css-style ``top[,right[,bottom[,left]]]`` expression.

        A missing right defaults to top, a missing bottom to top and a
        missing left to right.

        Args:
            expression: Comma separated non-negative integers

        Returns:
            New Padding instance

        Raises:
            ValueError: If a part is not a non-negative integer or there are
                more than four parts
        """
        parts = [part.strip() for part in expression.split(",")]
        if len(parts) > 4:
            raise ValueError(f"Too many parts in padding expression '{expression}'")

        values = []
        for part in parts:
            if not (part.isascii() and part.isdigit()):
                raise ValueError(f"Part '{part}' is not a valid padding")
            values.append(int(part))

        top = values[0]
        right = values[1] if len(values) > 1 else top
        bottom = values[2] if len(values) > 2 else top
        left = values[3] if len(values) > 3 else right
        return cls(top, right, bottom, left)
