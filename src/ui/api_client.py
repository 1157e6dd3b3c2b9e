import os
from contextlib import ExitStack
from typing import Any, Dict, List, Tuple
import requests
from ..config import Config


class ApiError(Exception):
    """Raised when the server answers with success=false or an HTTP error."""


def collect_upload_files(folder: str) -> List[Tuple[str, str]]:
    """
    List (relative_path, absolute_path) for every file in folder.
    Paths are relative to the folder's parent so the folder name is kept,
    like a browser directory upload. Nothing is filtered here: the server decides what is hidden.
    """
    folder = os.path.abspath(folder)
    base = os.path.dirname(folder)
    files = []
    for dirpath, _dirnames, filenames in os.walk(folder):
        for fname in filenames:
            full = os.path.join(dirpath, fname)
            rel = os.path.relpath(full, base).replace(os.sep, '/')
            files.append((rel, full))
    return sorted(files)


class ApiClient:
    def __init__(self, base_url: str = None, timeout: float = 300):
        self.base_url = (base_url or Config.API_URL).rstrip('/')
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _parse(response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            response.raise_for_status()
            raise ApiError(f"Unexpected response from server ({response.status_code})")
        if not data.get('success', False):
            detail = data.get('error')
            msg = data.get('message', 'Request failed')
            raise ApiError(f"{msg}: {detail}" if detail else msg)
        return data

    def health(self) -> bool:
        try:
            r = requests.get(self._url("/health"), timeout=5)
            return r.ok
        except requests.RequestException:
            return False

    def scan_folder(self, folder: str) -> Dict[str, Any]:
        """Upload every file of a local folder and return the scan response."""
        files = collect_upload_files(folder)
        if not files:
            raise ApiError(f"No files found in {folder}")

        with ExitStack() as stack:
            parts = [
                (rel, (rel, stack.enter_context(open(full, 'rb'))))
                for rel, full in files
            ]
            r = requests.post(self._url("/scan"), files=parts, timeout=self.timeout)
        return self._parse(r)

    def rescan(self) -> Dict[str, Any]:
        """Scan what is already on the server without uploading again."""
        r = requests.post(self._url("/scan"), timeout=self.timeout)
        return self._parse(r)

    def delete_hidden(self) -> Dict[str, Any]:
        r = requests.post(self._url("/delete-hidden"), timeout=self.timeout)
        return self._parse(r)

    def download_clean(self) -> bytes:
        r = requests.get(self._url("/download-clean"), timeout=self.timeout)
        if r.status_code != 200:
            self._parse(r)
            raise ApiError(f"Download failed ({r.status_code})")
        return r.content

    def stats(self) -> Dict[str, Any]:
        r = requests.get(self._url("/stats"), timeout=self.timeout)
        return self._parse(r)['stats']

    def clear(self) -> Dict[str, Any]:
        r = requests.post(self._url("/clear"), timeout=self.timeout)
        return self._parse(r)
