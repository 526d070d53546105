"""Directory scanner: parse source files, find markers, attach context.

Each supported file is parsed once; its markers are located in comment
nodes and a single ``FileContextIndex`` answers the block context and
scope chain for all of them.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tracemark.config.models import ScanConfig
from tracemark.context.index import FileContextIndex
from tracemark.context.models import BlockContext, ScopeFrame
from tracemark.core.errors import ParseError
from tracemark.core.excludes import is_pruned
from tracemark.core.logging import get_logger
from tracemark.core.progress import progress
from tracemark.parsing.packs import get_pack, get_pack_for_ext
from tracemark.parsing.treesitter import ParseResult, TreeSitterParser
from tracemark.scan.markers import Marker, MarkerPattern, find_markers

log = get_logger("scan")

_BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True, slots=True)
class MarkerRecord:
    """One marker with the code it documents."""

    marker: Marker
    path: str
    language: str
    block: tuple[int, int]  # 0-indexed inclusive comment block
    context: BlockContext
    scopes: tuple[ScopeFrame, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.marker.id,
            "text": self.marker.text,
            "path": self.path,
            "line": self.marker.line + 1,
            "language": self.language,
            "block": {"start": self.block[0] + 1, "end": self.block[1] + 1},
            "context": self.context.to_dict(),
            "scopes": [frame.to_dict() for frame in self.scopes],
        }


@dataclass
class FileScan:
    """Markers found in one file."""

    path: str
    language: str
    records: list[MarkerRecord] = field(default_factory=list)
    error_count: int = 0


@dataclass
class SkippedFile:
    path: str
    reason: str


@dataclass
class ScanReport:
    """Result of scanning a directory tree."""

    root: str
    files: list[FileScan] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    @property
    def records(self) -> list[MarkerRecord]:
        return [record for scan in self.files for record in scan.records]

    @property
    def marker_count(self) -> int:
        return sum(len(scan.records) for scan in self.files)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "files_scanned": len(self.files),
            "marker_count": self.marker_count,
            "markers": [record.to_dict() for record in self.records],
            "skipped": [{"path": s.path, "reason": s.reason} for s in self.skipped],
        }


def _pack_names(languages: list[str] | None) -> frozenset[str] | None:
    if not languages:
        return None
    # Aliases ("c++") resolve to canonical pack names
    return frozenset(pack.name for name in languages if (pack := get_pack(name)) is not None)


class Scanner:
    """Scans files and directory trees for requirement markers.

    Usage::

        scanner = Scanner(load_config().scan)
        report = scanner.scan(Path("firmware"))
        for record in report.records:
            print(record.marker.id, record.context.below)
    """

    def __init__(
        self,
        config: ScanConfig | None = None,
        parser: TreeSitterParser | None = None,
    ) -> None:
        self.config = config or ScanConfig()
        self.parser = parser or TreeSitterParser()
        self.pattern = MarkerPattern.from_config(self.config)
        self._extra_excludes = frozenset(self.config.excluded_dirs)
        self._languages = _pack_names(self.config.languages)

    def _accepts(self, path: Path) -> bool:
        pack = get_pack_for_ext(path.suffix)
        if pack is None:
            return False
        return self._languages is None or pack.name in self._languages

    def iter_source_files(self, root: Path) -> Iterator[Path]:
        """Supported source files under ``root``, pruning excluded dirs."""
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not is_pruned(d, self._extra_excludes))
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if self._accepts(path):
                    yield path

    def scan_file(self, path: Path, content: bytes | None = None) -> FileScan:
        """Parse one file and resolve context for each of its markers.

        Raises:
            ParseError: Unsupported extension, missing grammar, unreadable file.
        """
        result = self.parser.parse(path, content)
        if result.error_count:
            log.debug("syntax_errors", path=str(path), errors=result.error_count)

        scan = FileScan(path=str(path), language=result.language, error_count=result.error_count)
        markers = find_markers(result.root_node, self.pattern)
        if markers:
            self._attach_context(scan, result, markers)
        log.debug(
            "file_scanned",
            path=str(path),
            nodes=result.total_nodes,
            markers=len(scan.records),
        )
        return scan

    def _attach_context(self, scan: FileScan, result: ParseResult, markers: list[Marker]) -> None:
        index = FileContextIndex.build(result.root_node, result.lines)
        for marker in markers:
            block = index.block(marker.line)
            scan.records.append(
                MarkerRecord(
                    marker=marker,
                    path=scan.path,
                    language=result.language,
                    block=block,
                    context=index.block_context(marker.line),
                    scopes=tuple(index.hierarchy(marker.line)),
                )
            )

    def scan(self, root: Path) -> ScanReport:
        """Scan a file or directory tree. Failing files are skipped, never fatal."""
        report = ScanReport(root=str(root))
        paths = [root] if root.is_file() else list(self.iter_source_files(root))
        limit = self.config.max_file_size_mb * _BYTES_PER_MB

        for path in progress(paths, desc="Scanning", unit="files"):
            try:
                size = path.stat().st_size
            except OSError as e:
                log.warning("file_skipped", path=str(path), reason=str(e))
                report.skipped.append(SkippedFile(str(path), str(e)))
                continue
            if size > limit:
                log.info("file_too_large", path=str(path), size=size)
                report.skipped.append(SkippedFile(str(path), "file too large"))
                continue

            try:
                report.files.append(self.scan_file(path))
            except ParseError as e:
                log.warning("file_skipped", path=str(path), code=e.code.value, reason=e.message)
                report.skipped.append(SkippedFile(str(path), e.message))

        log.info(
            "scan_complete",
            root=str(root),
            files=len(report.files),
            markers=report.marker_count,
            skipped=len(report.skipped),
        )
        return report
