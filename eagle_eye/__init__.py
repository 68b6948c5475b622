"""
eagle-eye: command-line client for the Eagle asset manager.
"""

__version__ = "0.1.0"
