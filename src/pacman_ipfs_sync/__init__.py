"""Share a pacman package cache and sync databases through IPFS"""

__version__ = "0.1.0"
