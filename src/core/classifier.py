from typing import Tuple

# OS metadata filenames (matched as case-insensitive substrings of the name)
SYSTEM_FILE_MARKERS: Tuple[str, ...] = (
    'thumbs.db',
    'desktop.ini',
    'folder.jpg',
    'albumartsmall.jpg',
    'albumart_{',
    '.ds_store',
    'icon\r', # macOS custom folder icon
    '__macosx',
    'ehthumbs.db',
    'ehthumbs_vista.db',
    'folder.htt',
)

# Tool/cache directories (matched as case-insensitive substrings of the relative path)
HIDDEN_DIR_MARKERS: Tuple[str, ...] = (
    '__pycache__',
    '.git',
    '.svn',
    '.hg',
    'node_modules/.cache',
    '.vscode',
    '.idea',
    '.tmp',
    'cache',
)

TEMP_SUFFIXES = ('~', '.tmp', '.temp')
TEMP_PREFIXES = ('~$',)
BACKUP_SUFFIXES = ('.bak', '.backup')


def is_hidden(name: str, relative_path: str) -> bool:
    """
    Decide whether a file or directory counts as hidden/junk.
    `name` is the last path component, `relative_path` its path below the upload root.
    The same predicate is used by scan, delete and download so their results agree.
    """
    # 1. Dotfiles
    if name.startswith('.'):
        return True

    # 2. OS metadata
    lower_name = name.lower()
    if any(marker in lower_name for marker in SYSTEM_FILE_MARKERS):
        return True

    # 3. Cache / VCS directories anywhere in the path
    lower_path = relative_path.replace('\\', '/').lower()
    if any(marker in lower_path for marker in HIDDEN_DIR_MARKERS):
        return True

    # 4. Temp files
    if name.endswith(TEMP_SUFFIXES) or name.startswith(TEMP_PREFIXES):
        return True

    # 5. Backups
    return name.endswith(BACKUP_SUFFIXES)
