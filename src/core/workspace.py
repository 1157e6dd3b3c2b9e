import os
import shutil
import logging
import posixpath
import threading
from typing import BinaryIO, Optional
from ..config import Config
from .errors import UnsafePathError

logger = logging.getLogger(__name__)


def normalize_relative_path(raw_path: str) -> str:
    """
    Turn an uploaded name like "proj\\sub\\a.txt" or "./proj/a.txt" into "proj/sub/a.txt".
    Raises UnsafePathError for empty names, absolute paths and ".." components.
    """
    # No strip(): trailing control characters are part of names like "Icon\r"
    path = (raw_path or '').replace('\\', '/')
    if '\x00' in path:
        raise UnsafePathError(f"NUL byte in upload path: '{raw_path}'")
    is_drive = len(path) > 1 and path[0].isalpha() and path[1] == ':' and path[2:3] in ('', '/')
    if path.startswith('/') or is_drive:
        raise UnsafePathError(f"Absolute upload path not allowed: '{raw_path}'")

    parts = [p for p in path.split('/') if p not in ('', '.')]
    if not parts:
        raise UnsafePathError(f"Empty upload path: '{raw_path}'")
    if '..' in parts:
        raise UnsafePathError(f"Path traversal detected in upload: '{raw_path}'")
    return posixpath.join(*parts)


class Workspace:
    """
    Handle on one upload root. Every scan/delete/download operation receives it
    explicitly; `lock` serializes requests that touch the tree.
    """

    def __init__(self, root_dir: Optional[str] = None):
        self.root_dir = os.path.abspath(root_dir or Config.UPLOAD_DIR)
        self.lock = threading.Lock()

    def exists(self) -> bool:
        return os.path.isdir(self.root_dir)

    def ensure(self):
        os.makedirs(self.root_dir, exist_ok=True)

    def reset(self):
        """Empty and recreate the upload root."""
        if os.path.exists(self.root_dir):
            shutil.rmtree(self.root_dir)
        os.makedirs(self.root_dir)
        logger.info("Upload root reset: %s", self.root_dir)

    def resolve(self, relative_path: str) -> str:
        """Absolute on-disk path for an uploaded relative path, guaranteed inside the root."""
        rel = normalize_relative_path(relative_path)
        target = os.path.abspath(os.path.join(self.root_dir, *rel.split('/')))
        if os.path.commonpath([target, self.root_dir]) != self.root_dir:
            raise UnsafePathError(f"Path traversal detected in upload: '{relative_path}'")
        return target

    def save_upload(self, relative_path: str, fileobj: BinaryIO, chunk_size: Optional[int] = None) -> str:
        """Stream an uploaded file to its relative path below the root. Returns the normalized path."""
        chunk_size = chunk_size or Config.UPLOAD_CHUNK_SIZE
        target = self.resolve(relative_path)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, 'wb') as out:
            shutil.copyfileobj(fileobj, out, chunk_size)
        return normalize_relative_path(relative_path)
