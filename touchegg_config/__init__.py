"""
Touchégg Configuration Loader

Loads the Touchégg XML gesture configuration into a gesture store and
reloads it whenever the file changes.
"""

__version__ = "1.0.0"
