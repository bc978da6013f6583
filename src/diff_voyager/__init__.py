"""
Diff Voyager - visual regression testing control plane.

Projects name a URL to monitor, snapshots capture it, and an in-process
job scheduler executes the captures with retry semantics.
"""

__version__ = "0.1.0"
