from pydantic import BaseModel
from typing import Dict, List, Optional

# Response shapes. Field names are camelCase to match the JSON the UI reads.

class ScanEntryModel(BaseModel):
    relativePath: str
    hidden: bool
    size: int
    lastModified: str
    extension: str

class ScanSummaryModel(BaseModel):
    total: int = 0
    hidden: int = 0
    clean: int = 0

class ScanResponse(BaseModel):
    success: bool = True
    results: Dict[str, ScanEntryModel]
    summary: ScanSummaryModel

class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    deleted: List[str]

class StorageStatsModel(BaseModel):
    totalFiles: int = 0
    hiddenFiles: int = 0
    cleanFiles: int = 0
    totalSize: int = 0
    hiddenSize: int = 0
    cleanSize: int = 0

class StatsResponse(BaseModel):
    success: bool = True
    stats: StorageStatsModel

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
