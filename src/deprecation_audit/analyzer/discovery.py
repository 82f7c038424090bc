"""Source file discovery for a scan run."""
from pathlib import Path
from typing import Iterable, List

DEFAULT_EXTENSIONS = ('.ts', '.js')

# Installed packages are not part of the scanned codebase
EXCLUDED_DIRS = {'node_modules'}


def is_excluded(file_path: Path) -> bool:
    """Skip declaration files and anything named like a test."""
    name = file_path.name
    if name.endswith('.d.ts'):
        return True
    if 'test' in name:
        return True
    return False


def discover_source_files(root: str | Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> List[Path]:
    """Collect candidate source files under ``root``.

    The result is sorted by relative POSIX path so that reports do not depend
    on filesystem iteration order.

    Args:
        root: Directory to search recursively
        extensions: File suffixes to include, with leading dot

    Returns:
        Sorted list of file paths
    """
    root = Path(root)
    suffixes = {ext.lower() for ext in extensions}

    files = []
    for file_path in root.rglob('*'):
        if not file_path.is_file() or file_path.suffix.lower() not in suffixes:
            continue
        relative = file_path.relative_to(root)
        if any(part in EXCLUDED_DIRS or part.startswith('.') for part in relative.parts):
            continue
        if is_excluded(file_path):
            continue
        files.append(file_path)

    return sorted(files, key=lambda p: p.relative_to(root).as_posix())
