import os
import tempfile

from src.core.cleaner import delete_hidden
from src.core.scanner import scan, summarize


def make_tree(root, files):
    for rel, content in files.items():
        path = os.path.join(root, *rel.split("/"))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            f.write(content)


def test_example_project():
    with tempfile.TemporaryDirectory() as root:
        make_tree(root, {
            "proj/.git/config": "[core]",
            "proj/.git/objects/ab/cdef": "blob",
            "proj/readme.txt": "hello",
            "proj/.DS_Store": "x",
        })
        deleted = delete_hidden(root)

        assert sorted(deleted) == ["proj/.DS_Store", "proj/.git (full directory)"]
        # Nothing inside the hidden directory is reported on its own
        assert not any(d.startswith("proj/.git/") for d in deleted)
        assert list(scan(root)) == ["proj/readme.txt"]


def test_scan_delete_scan():
    with tempfile.TemporaryDirectory() as root:
        make_tree(root, {
            "site/index.html": "<html>",
            "site/__pycache__/mod.cpython-312.pyc": "",
            "site/assets/logo.png": "png",
            "site/assets/Thumbs.db": "",
            "site/draft.html~": "",
            "site/notes/.todo": "",
            "site/.idea/workspace.xml": "",
        })
        first = summarize(scan(root))
        delete_hidden(root)
        second = summarize(scan(root))

        assert second.hidden == 0
        assert second.total == first.clean


def test_emptied_directories_removed():
    with tempfile.TemporaryDirectory() as root:
        make_tree(root, {
            "proj/keep.txt": "x",
            "proj/junk/.DS_Store": "",
            "proj/junk/deeper/old.bak": "",
        })
        deleted = delete_hidden(root)

        assert "proj/junk/deeper/old.bak" in deleted
        assert "proj/junk/.DS_Store" in deleted
        assert "proj/junk/deeper (now empty)" in deleted
        assert "proj/junk (now empty)" in deleted
        # Children are reported before the directory that contained them
        assert deleted.index("proj/junk/deeper (now empty)") < deleted.index("proj/junk (now empty)")
        assert not os.path.exists(os.path.join(root, "proj", "junk"))
        assert os.path.exists(os.path.join(root, "proj", "keep.txt"))
        # The upload root itself always survives
        assert os.path.isdir(root)


def test_nothing_hidden():
    with tempfile.TemporaryDirectory() as root:
        make_tree(root, {"a/b.txt": "x", "c.txt": "y"})
        assert delete_hidden(root) == []
        assert sorted(scan(root)) == ["a/b.txt", "c.txt"]


def test_missing_root():
    with tempfile.TemporaryDirectory() as root:
        assert delete_hidden(os.path.join(root, "missing")) == []
