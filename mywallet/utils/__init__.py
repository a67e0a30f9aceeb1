"""Mini README: Utility helpers for MyWallet.

Currently exports the markup sanitizer applied to every user-supplied text
field once validation has passed.
"""

from .sanitizer import clean

__all__ = ["clean"]
