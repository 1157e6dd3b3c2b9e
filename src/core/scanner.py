import os
import logging
from dataclasses import dataclass
from typing import Dict, Iterator
from ..data.schemas import ScanEntry, ScanSummary, StorageStats
from .classifier import is_hidden

logger = logging.getLogger(__name__)

@dataclass
class WalkItem:
    """A file discovered by walk_tree."""
    path: str
    relative_path: str
    name: str
    hidden: bool


def join_relative(parent_rel: str, name: str) -> str:
    return f"{parent_rel}/{name}" if parent_rel else name


def walk_tree(root_dir: str, descend_hidden: bool = True) -> Iterator[WalkItem]:
    """
    Lazy depth-first walk over the files below root_dir.

    Uses an explicit stack instead of recursion. A file is hidden when it matches
    the classifier itself or sits below a hidden directory. With descend_hidden=False
    hidden directories are pruned and their descendants are never visited.
    Unreadable directories are logged and skipped.
    """
    stack = [(root_dir, '', False)]
    while stack:
        dir_path, dir_rel, dir_hidden = stack.pop()
        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Skipping unreadable directory %s: %s", dir_path, e)
            continue

        subdirs = []
        for entry in entries:
            rel = join_relative(dir_rel, entry.name)
            hidden = dir_hidden or is_hidden(entry.name, rel)
            try:
                if entry.is_dir(follow_symlinks=False):
                    if hidden and not descend_hidden:
                        continue
                    subdirs.append((entry.path, rel, hidden))
                elif entry.is_file():
                    yield WalkItem(path=entry.path, relative_path=rel, name=entry.name, hidden=hidden)
            except OSError as e:
                logger.warning("Skipping unreadable entry %s: %s", entry.path, e)

        # Reverse so the first subdirectory is walked first
        stack.extend(reversed(subdirs))


def scan(root_dir: str) -> Dict[str, ScanEntry]:
    """Map every file below root_dir to its ScanEntry. Missing root -> empty result."""
    results: Dict[str, ScanEntry] = {}
    if not os.path.isdir(root_dir):
        return results

    for item in walk_tree(root_dir):
        try:
            stat = os.stat(item.path)
        except OSError as e:
            logger.warning("Could not stat %s: %s", item.path, e)
            continue

        results[item.relative_path] = ScanEntry(
            relative_path=item.relative_path,
            hidden=item.hidden,
            size=stat.st_size,
            last_modified=stat.st_mtime,
            extension=os.path.splitext(item.name)[1].lower(),
        )
    return results


def summarize(results: Dict[str, ScanEntry]) -> ScanSummary:
    return ScanSummary.from_results(results)


def collect_stats(root_dir: str) -> StorageStats:
    """Counts and byte totals of hidden vs clean files (zeroed when root is missing)."""
    stats = StorageStats()
    for entry in scan(root_dir).values():
        stats.add(entry)
    return stats
