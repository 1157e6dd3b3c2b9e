from dataclasses import dataclass, asdict
from typing import Dict
import datetime

@dataclass
class ScanEntry:
    """Represents a single uploaded file found while scanning."""
    relative_path: str # POSIX separators, relative to upload root
    hidden: bool
    size: int
    last_modified: float # unix timestamp
    extension: str # lowercase, with dot ("" if none)

    def to_dict(self):
        return {
            'relativePath': self.relative_path,
            'hidden': self.hidden,
            'size': self.size,
            'lastModified': datetime.datetime.fromtimestamp(
                self.last_modified, tz=datetime.timezone.utc
            ).isoformat(),
            'extension': self.extension,
        }

@dataclass
class ScanSummary:
    """Counts derived from a scan result."""
    total: int = 0
    hidden: int = 0
    clean: int = 0

    def to_dict(self):
        return asdict(self)

    @staticmethod
    def from_results(results: Dict[str, ScanEntry]) -> 'ScanSummary':
        hidden = sum(1 for e in results.values() if e.hidden)
        return ScanSummary(total=len(results), hidden=hidden, clean=len(results) - hidden)

@dataclass
class StorageStats:
    """Aggregate file counts and byte totals for the upload root."""
    total_files: int = 0
    hidden_files: int = 0
    clean_files: int = 0
    total_size: int = 0
    hidden_size: int = 0
    clean_size: int = 0

    def add(self, entry: ScanEntry):
        self.total_files += 1
        self.total_size += entry.size
        if entry.hidden:
            self.hidden_files += 1
            self.hidden_size += entry.size
        else:
            self.clean_files += 1
            self.clean_size += entry.size

    def to_dict(self):
        return {
            'totalFiles': self.total_files,
            'hiddenFiles': self.hidden_files,
            'cleanFiles': self.clean_files,
            'totalSize': self.total_size,
            'hiddenSize': self.hidden_size,
            'cleanSize': self.clean_size,
        }
