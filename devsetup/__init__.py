"""
devsetup - profile-driven installer for developer and data tooling.
"""

__version__ = "1.0.0"
