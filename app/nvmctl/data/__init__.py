"""Bundled data files for nvmctl."""
