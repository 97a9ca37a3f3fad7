"""
Marketplace CLI

A command-line client for listing and updating products, charts, OVAs and
container images on the VMware Marketplace.
"""

__version__ = "0.3.0"
__author__ = "Marketplace CLI Team"


def get_version():
    """Get the current version of the Marketplace CLI."""
    return __version__

__all__ = ['get_version']
