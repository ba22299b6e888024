"""Shared utilities: FFmpeg wrappers, files, logging, retry."""
