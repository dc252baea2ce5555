"""
connect4.interfaces - Front ends for Connect Four

This package contains the terminal interface and the color validation
used before a game is created.
"""

# Don't import anything here to avoid circular imports
__all__ = []
