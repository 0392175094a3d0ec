# returns_console/__init__.py
"""
Customer-return console.

The return line-item engine lives in ``returns_console.modules.returns``.
"""

__version__ = "0.1.0"
