"""nvmctl - Node.js runtime and global package management on top of nvm."""

__version__ = "0.1.0"
