import io
import os
import logging
import zipfile
from typing import BinaryIO, Iterator, List, Optional, Tuple
from ..config import Config
from .errors import ArchiveError
from .scanner import walk_tree

logger = logging.getLogger(__name__)


class _ChunkBuffer(io.RawIOBase):
    """Unseekable in-memory sink that hands out what was written since the last drain."""

    def __init__(self):
        super().__init__()
        self._chunks: List[bytes] = []

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        self._chunks.append(bytes(b))
        return len(b)

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


def _write_clean_entries(zf: zipfile.ZipFile, root_dir: str, chunk_size: int) -> Iterator[Tuple[str, bool]]:
    """
    Write every clean file below root_dir into zf, chunk by chunk.
    Yields (relative_path, finished) after each chunk so callers can flush the sink.
    Hidden directories are pruned, never visited.
    """
    for item in walk_tree(root_dir, descend_hidden=False):
        if item.hidden:
            continue
        try:
            zinfo = zipfile.ZipInfo.from_file(item.path, arcname=item.relative_path, strict_timestamps=False)
            zinfo.compress_type = zipfile.ZIP_DEFLATED
            with open(item.path, 'rb') as src, zf.open(zinfo, 'w') as dest:
                while True:
                    chunk = src.read(chunk_size)
                    if not chunk:
                        break
                    dest.write(chunk)
                    yield item.relative_path, False
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Failed to add {item.relative_path} to archive: {e}") from e
        yield item.relative_path, True


def stream_clean(root_dir: str, sink: BinaryIO, chunk_size: Optional[int] = None) -> List[str]:
    """
    Write a zip of all non-hidden files below root_dir to sink.
    The sink may be unseekable. Returns the archived relative paths.
    Raises ArchiveError if any entry fails; the sink content is then unusable.
    """
    if not os.path.isdir(root_dir):
        raise ArchiveError(f"Upload root not found: {root_dir}")

    chunk_size = chunk_size or Config.ARCHIVE_CHUNK_SIZE
    archived: List[str] = []
    with zipfile.ZipFile(sink, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        for rel, finished in _write_clean_entries(zf, root_dir, chunk_size):
            if finished:
                archived.append(rel)
    logger.info("Archived %d clean files from %s", len(archived), root_dir)
    return archived


def iter_clean_zip(root_dir: str, chunk_size: Optional[int] = None) -> Iterator[bytes]:
    """Same archive as stream_clean, produced lazily as byte chunks for an HTTP response."""
    if not os.path.isdir(root_dir):
        raise ArchiveError(f"Upload root not found: {root_dir}")

    chunk_size = chunk_size or Config.ARCHIVE_CHUNK_SIZE
    buffer = _ChunkBuffer()
    count = 0
    with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        for _, finished in _write_clean_entries(zf, root_dir, chunk_size):
            if finished:
                count += 1
            data = buffer.drain()
            if data:
                yield data

    # Central directory
    data = buffer.drain()
    if data:
        yield data
    logger.info("Streamed %d clean files from %s", count, root_dir)
