"""Marker scanning: find requirement markers and resolve their context."""

from tracemark.scan.markers import Marker, MarkerPattern, find_markers
from tracemark.scan.scanner import FileScan, MarkerRecord, ScanReport, Scanner, SkippedFile

__all__ = [
    "Marker",
    "MarkerPattern",
    "find_markers",
    "Scanner",
    "FileScan",
    "MarkerRecord",
    "ScanReport",
    "SkippedFile",
]
