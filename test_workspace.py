import io
import os
import tempfile
import pytest

from src.core.errors import UnsafePathError
from src.core.workspace import Workspace, normalize_relative_path

@pytest.mark.parametrize("raw,expected", [
    ("proj/readme.txt", "proj/readme.txt"),
    ("proj\\sub\\a.txt", "proj/sub/a.txt"),
    ("./proj//a.txt", "proj/a.txt"),
    ("proj/./.git/config", "proj/.git/config"),
])
def test_normalize(raw, expected):
    assert normalize_relative_path(raw) == expected

@pytest.mark.parametrize("raw", ["", "/etc/passwd", "C:/Windows/x", "../escape.txt", "proj/../../x", "./"])
def test_normalize_rejects_unsafe(raw):
    with pytest.raises(UnsafePathError):
        normalize_relative_path(raw)

def test_save_upload_creates_tree():
    with tempfile.TemporaryDirectory() as tmp:
        ws = Workspace(os.path.join(tmp, "uploads"))
        ws.reset()
        rel = ws.save_upload("proj\\docs\\a.txt", io.BytesIO(b"abc"), chunk_size=1)
        assert rel == "proj/docs/a.txt"
        with open(os.path.join(ws.root_dir, "proj", "docs", "a.txt"), "rb") as f:
            assert f.read() == b"abc"

def test_save_upload_rejects_traversal():
    with tempfile.TemporaryDirectory() as tmp:
        ws = Workspace(os.path.join(tmp, "uploads"))
        ws.reset()
        with pytest.raises(UnsafePathError):
            ws.save_upload("../outside.txt", io.BytesIO(b"x"))
        assert not os.path.exists(os.path.join(tmp, "outside.txt"))

def test_reset_empties_root():
    with tempfile.TemporaryDirectory() as tmp:
        ws = Workspace(os.path.join(tmp, "uploads"))
        assert not ws.exists()
        ws.reset()
        ws.save_upload("a/b.txt", io.BytesIO(b"x"))
        ws.reset()
        assert ws.exists()
        assert os.listdir(ws.root_dir) == []

@pytest.mark.parametrize("raw,expected", [
    ("1:notes.txt", "1:notes.txt"),
    ("proj/a:b.txt", "proj/a:b.txt"),
    ("proj/Icon\r", "proj/Icon\r"),
    (" proj/space.txt ", " proj/space.txt "),
])
def test_normalize_keeps_legal_names(raw, expected):
    assert normalize_relative_path(raw) == expected

@pytest.mark.parametrize("raw", ["C:", "d:/data/x.txt", "D:\\data\\x.txt", "proj/a\x00b"])
def test_normalize_rejects_drives_and_nul(raw):
    with pytest.raises(UnsafePathError):
        normalize_relative_path(raw)
