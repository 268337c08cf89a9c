"""Directory scanner for media files.

This module walks a directory tree, keeps the files whose extension belongs to
the requested media filter, and classifies them.

Traversal yields one entry per step: either a FileRecord or a SkippedEntry
describing an entry that could not be read. Unreadable entries never abort
the walk; they are collected as diagnostics on the ScanResult.
"""

import logging
import stat
import time
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from mediascan.core.classifier import classify
from mediascan.core.errors import EntryAccessError, PathNotFoundError
from mediascan.core.registry import CategoryRegistry, default_registry, normalize_extension
from mediascan.models.core import FileRecord, MediaFilter, ScanResult, SkippedEntry

# Logger for this module
logger = logging.getLogger(__name__)

ScanEntry = Union[FileRecord, SkippedEntry]


def is_hidden(path: Path) -> bool:
    """Check if a directory entry is hidden (its name starts with a dot).

    Args:
        path: The entry to check

    Returns:
        True if the entry is hidden, False otherwise
    """
    return path.name.startswith(".")


def ensure_root(root: Path) -> Path:
    """Validate the scan root before any traversal.

    Args:
        root: Directory to scan.

    Returns:
        The absolute root path.

    Raises:
        PathNotFoundError: If the root is missing, not a directory, or cannot
            be listed.
    """
    root = Path(root).expanduser()
    try:
        if not root.exists():
            raise PathNotFoundError(root)
        if not root.is_dir():
            raise PathNotFoundError(root, "Path is not a directory")
        # Listing the root up front turns a permission problem into a fatal
        # error instead of an empty scan.
        next(root.iterdir(), None)
    except PathNotFoundError:
        raise
    except OSError as e:
        raise PathNotFoundError(root, f"Directory is not accessible ({e.strerror})") from e
    return root.absolute()


def _skip(error: EntryAccessError) -> SkippedEntry:
    logger.debug("Skipping entry: %s", error)
    return SkippedEntry(path=error.path, reason=str(error.cause))


def _record_from_path(path: Path) -> Optional[FileRecord]:
    """Build a FileRecord from a file's metadata.

    Returns None if the entry turns out not to be a regular file.

    Raises:
        EntryAccessError: If the metadata cannot be read (permission denied,
            broken link, file removed mid-scan).
    """
    try:
        st = path.stat()
    except OSError as e:
        raise EntryAccessError(path, e) from e
    if not stat.S_ISREG(st.st_mode):
        return None

    # st_birthtime exists on macOS/BSD and Windows; fall back to ctime elsewhere.
    created = getattr(st, "st_birthtime", st.st_ctime)
    return FileRecord(
        name=path.name,
        path=path,
        directory=path.parent,
        extension=path.suffix.lower(),
        size=st.st_size,
        created=datetime.fromtimestamp(created),
        modified=datetime.fromtimestamp(st.st_mtime),
    )


def _walk_directory(
    directory: Path,
    extensions: frozenset[str],
    recursive: bool,
    include_hidden: bool,
) -> Iterator[ScanEntry]:
    """Yield entries under *directory*, descending when *recursive*.

    Subdirectories are walked as soon as they are met, using a stack of
    directory listings rather than recursion so tree depth is unbounded.
    """
    pending: List[Iterator[Path]] = []
    to_open: Optional[Path] = directory

    while True:
        if to_open is not None:
            try:
                pending.append(iter(list(to_open.iterdir())))
            except OSError as e:
                yield _skip(EntryAccessError(to_open, e))
            to_open = None
        if not pending:
            return

        item = next(pending[-1], None)
        if item is None:
            pending.pop()
            continue

        if is_hidden(item) and not include_hidden:
            continue

        try:
            # Symlinked directories are not followed so no file is seen twice.
            is_dir = item.is_dir() and not item.is_symlink()
        except OSError as e:
            yield _skip(EntryAccessError(item, e))
            continue

        if is_dir:
            if recursive:
                to_open = item
            continue

        if item.suffix.lower() not in extensions:
            continue

        try:
            record = _record_from_path(item)
        except EntryAccessError as e:
            yield _skip(e)
            continue
        if record is not None:
            yield record


def iter_entries(
    root: Path,
    extensions: Iterable[str],
    *,
    recursive: bool = True,
    include_hidden: bool = False,
) -> Iterator[ScanEntry]:
    """Lazily walk *root* and yield matching files and skipped entries.

    Each call walks the tree again from scratch. Entries come out in
    filesystem traversal order.

    Args:
        root: Directory to walk. Assumed to exist (see :func:`ensure_root`).
        extensions: Extensions to keep; matching is case-insensitive.
        recursive: Descend into subdirectories.
        include_hidden: Include dot-prefixed files and directories.

    Yields:
        FileRecord for each matching file (unclassified), or SkippedEntry for
        each entry that could not be read.
    """
    wanted = frozenset(normalize_extension(e) for e in extensions if e)
    yield from _walk_directory(Path(root).absolute(), wanted, recursive, include_hidden)


def scan_directory(
    root: Path,
    media_filter: MediaFilter = MediaFilter.ALL,
    *,  # Force the rest of the parameters to be keyword-only
    registry: Optional[CategoryRegistry] = None,
    recursive: bool = True,
    include_hidden: bool = False,
) -> ScanResult:
    """Scan a directory for media files.

    Files are filtered by the extension set of *media_filter* first and
    classified afterwards.

    Args:
        root: The directory to scan
        media_filter: Media type to scan for
        registry: Extension registry; the built-in one if None
        recursive: Whether to descend into subdirectories
        include_hidden: Whether to include dot-prefixed entries

    Returns:
        ScanResult containing the classified files and skipped entries

    Raises:
        PathNotFoundError: If the root doesn't exist or can't be listed
    """
    root = ensure_root(root)
    if registry is None:
        registry = default_registry()
    extensions = registry.extensions_for(media_filter)

    start_time = time.time()

    files: List[FileRecord] = []
    diagnostics: List[SkippedEntry] = []
    for entry in iter_entries(
        root, extensions, recursive=recursive, include_hidden=include_hidden
    ):
        if isinstance(entry, SkippedEntry):
            diagnostics.append(entry)
        else:
            files.append(classify(entry, registry))

    scan_duration = time.time() - start_time
    logger.debug(
        "Scanned %s in %.3fs: %d files, %d skipped",
        root,
        scan_duration,
        len(files),
        len(diagnostics),
    )

    return ScanResult(
        files=files,
        root=root,
        media_filter=media_filter,
        recursive=recursive,
        include_hidden=include_hidden,
        duration_seconds=scan_duration,
        diagnostics=diagnostics,
    )
