"""
pmswitch — Rewrite copied package-manager commands to your preferred manager.

Copy ``npm install react`` while ``pnpm`` is preferred and the clipboard
now holds ``pnpm add react``.
"""

__version__ = "0.1.0"
