import os
import shutil
import logging
from typing import List
from .classifier import is_hidden
from .scanner import join_relative

logger = logging.getLogger(__name__)

FULL_DIRECTORY_SUFFIX = " (full directory)"
NOW_EMPTY_SUFFIX = " (now empty)"


def delete_hidden(root_dir: str) -> List[str]:
    """
    Delete every hidden entry below root_dir and return what was removed.

    Hidden directories are removed with their whole subtree in one step and
    reported once as "<path> (full directory)". Other directories are walked
    first and, if nothing is left in them afterwards, removed and reported as
    "<path> (now empty)". Hidden files are reported by relative path.
    The root itself is never removed.
    """
    deleted: List[str] = []
    if not os.path.isdir(root_dir):
        return deleted

    # (path, relative path, children already handled)
    stack = [(root_dir, '', False)]
    while stack:
        dir_path, dir_rel, visited = stack.pop()

        if visited:
            # Second visit: children are done, drop the directory if it emptied
            if dir_rel and _is_empty_dir(dir_path):
                try:
                    os.rmdir(dir_path)
                    deleted.append(dir_rel + NOW_EMPTY_SUFFIX)
                except OSError as e:
                    logger.warning("Could not remove empty directory %s: %s", dir_path, e)
            continue

        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Skipping unreadable directory %s: %s", dir_path, e)
            continue

        stack.append((dir_path, dir_rel, True))
        subdirs = []
        for entry in entries:
            rel = join_relative(dir_rel, entry.name)
            try:
                if entry.is_dir(follow_symlinks=False):
                    if is_hidden(entry.name, rel):
                        shutil.rmtree(entry.path)
                        deleted.append(rel + FULL_DIRECTORY_SUFFIX)
                    else:
                        subdirs.append((entry.path, rel, False))
                elif is_hidden(entry.name, rel):
                    os.remove(entry.path)
                    deleted.append(rel)
            except OSError as e:
                logger.warning("Could not delete %s: %s", entry.path, e)

        stack.extend(reversed(subdirs))

    logger.info("Deleted %d hidden entries under %s", len(deleted), root_dir)
    return deleted


def _is_empty_dir(path: str) -> bool:
    try:
        with os.scandir(path) as it:
            return next(it, None) is None
    except OSError:
        return False
