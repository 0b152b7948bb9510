"""Candidate file enumeration."""

from .discovery import DirectoryScanner

__all__ = ["DirectoryScanner"]
