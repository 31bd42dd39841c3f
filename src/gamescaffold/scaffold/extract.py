"""
Stream a template archive onto disk, rewriting entry paths on the way.
"""

from __future__ import annotations

import logging
import tempfile
import zlib
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator, List
from zipfile import BadZipFile, ZipFile, ZipInfo

from ..config.settings import DEFAULT_BUFFER_SIZE
from ..errors import ArchiveCorrupt, ArchiveReadError, OutputWriteError
from .rewrite import PathRewriter

logger = logging.getLogger(__name__)

# Raised by zipfile/zlib for damaged archives; none of these are OSError.
_CORRUPT_ERRORS = (BadZipFile, zlib.error, EOFError, NotImplementedError)


@dataclass(frozen=True)
class ArchiveEntry:
    """
    One entry of a template archive.

    Attributes:
        path: Entry path as stored in the archive (forward slashes).
        is_directory: True for directory entries.
        size: Uncompressed size in bytes.
    """
    path: str
    is_directory: bool
    size: int

    @classmethod
    def from_info(cls, info: ZipInfo) -> "ArchiveEntry":
        return cls(path=info.filename, is_directory=info.is_dir(), size=info.file_size)


@dataclass
class ExtractionResult:
    """
    What an extraction wrote.

    Attributes:
        root: Resolved destination root.
        directories_created: Directories that did not exist before.
        files_written: Output files, in archive order.
    """
    root: Path
    directories_created: List[Path] = field(default_factory=list)
    files_written: List[Path] = field(default_factory=list)


def iter_entries(archive: ZipFile) -> Iterator[tuple[ArchiveEntry, ZipInfo]]:
    """Yield entries in archive order."""
    for info in archive.infolist():
        yield ArchiveEntry.from_info(info), info


def extract_archive(
    stream: BinaryIO,
    destination_root: Path | str,
    rewriter: PathRewriter,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> ExtractionResult:
    """
    Write every archive entry beneath destination_root.

    Directory entries only create directories. File entries are copied in
    chunks of buffer_size bytes to the path the rewriter resolves, replacing
    whatever was there. The caller keeps ownership of stream; everything this
    function opens is closed before it returns or raises. Nothing is rolled
    back on failure.

    Raises:
        ArchiveCorrupt: The archive is malformed or truncated.
        ArchiveReadError: Reading the stream failed.
        OutputWriteError: Creating a directory or writing a file failed.
        PathRewriteError, UnsafeEntryPath: An entry path is empty or escapes the root.
    """
    if buffer_size <= 0:
        raise ValueError("buffer_size must be positive")

    root = Path(destination_root).expanduser()
    _make_directory(root, entry_path=None, result=None)
    result = ExtractionResult(root=root.resolve())

    with ExitStack() as stack:
        seekable = _seekable(stream, stack, buffer_size)
        archive = stack.enter_context(_open_archive(seekable))
        for entry, info in iter_entries(archive):
            if entry.is_directory:
                target = rewriter.resolve(entry.path, result.root, directory=True)
                logger.debug("Directory %s -> %s", entry.path, target)
                _make_directory(target, entry_path=entry.path, result=result)
                continue

            target = rewriter.resolve(entry.path, result.root)
            logger.debug("File %s -> %s (%d bytes)", entry.path, target, entry.size)
            _make_directory(target.parent, entry_path=entry.path, result=result)
            _copy_entry(archive, info, target, buffer_size)
            result.files_written.append(target)

    logger.info(
        "Extracted %d file(s), created %d director(ies) under %s",
        len(result.files_written),
        len(result.directories_created),
        result.root,
    )
    return result


def _seekable(stream: BinaryIO, stack: ExitStack, buffer_size: int) -> BinaryIO:
    """
    Return stream itself when it can seek, otherwise a spooled temporary copy.

    Zip archives keep their index at the end of the file, so a forward-only
    stream has to be copied before entries can be listed.
    """
    try:
        if stream.seekable():
            return stream
    except AttributeError:
        pass
    except ValueError as exc:
        raise ArchiveReadError(f"Template archive stream is not readable: {exc}") from exc

    spool = stack.enter_context(tempfile.TemporaryFile())
    while True:
        try:
            chunk = stream.read(buffer_size)
        except OSError as exc:
            raise ArchiveReadError(f"Unable to read template archive: {exc}") from exc
        if not chunk:
            break
        try:
            spool.write(chunk)
        except OSError as exc:
            raise ArchiveReadError(f"Unable to spool template archive: {exc}") from exc
    spool.seek(0)
    return spool


def _open_archive(stream: BinaryIO) -> ZipFile:
    try:
        return ZipFile(stream)
    except _CORRUPT_ERRORS as exc:
        raise ArchiveCorrupt(f"Template archive is corrupt: {exc}") from exc
    except OSError as exc:
        raise ArchiveReadError(f"Unable to read template archive: {exc}") from exc


def _make_directory(path: Path, *, entry_path: str | None, result: ExtractionResult | None) -> None:
    if path.is_dir():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Unable to create directory {path}: {exc}", path=entry_path or path) from exc
    if result is not None:
        result.directories_created.append(path)


def _copy_entry(archive: ZipFile, info: ZipInfo, target: Path, buffer_size: int) -> None:
    try:
        source = archive.open(info)
    except _CORRUPT_ERRORS as exc:
        raise ArchiveCorrupt(f"Corrupt archive entry: {exc}", path=info.filename) from exc
    except OSError as exc:
        raise ArchiveReadError(f"Unable to read archive entry: {exc}", path=info.filename) from exc

    with source:
        try:
            sink = target.open("wb")
        except OSError as exc:
            raise OutputWriteError(f"Unable to open {target} for writing: {exc}", path=info.filename) from exc
        with sink:
            while True:
                try:
                    chunk = source.read(buffer_size)
                except _CORRUPT_ERRORS as exc:
                    raise ArchiveCorrupt(f"Corrupt archive entry: {exc}", path=info.filename) from exc
                except OSError as exc:
                    raise ArchiveReadError(f"Unable to read archive entry: {exc}", path=info.filename) from exc
                if not chunk:
                    break
                try:
                    sink.write(chunk)
                except OSError as exc:
                    raise OutputWriteError(f"Unable to write {target}: {exc}", path=info.filename) from exc
