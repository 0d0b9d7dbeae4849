"""UPV CLI - VPN and Personal Network Drive management for UPV on Windows

Wraps the Windows dial-up and share-mounting utilities (rasdial, rasphone,
net use) behind a subcommand-based command line.
"""

__version__ = "0.3.0"
__author__ = "UPV CLI Team"

__all__ = ["__author__", "__version__"]
