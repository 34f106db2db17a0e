"""Discovery of deck-level stylesheet and script files."""
from pathlib import Path
from typing import List, Union


def _read_all(directory: Union[str, Path], pattern: str) -> List[str]:
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return [
        path.read_text(encoding="utf-8")
        for path in sorted(directory.glob(pattern))
        if path.is_file()
    ]


def find_stylesheets(directory: Union[str, Path]) -> List[str]:
    """
    Contents of every ``*.css`` file directly inside *directory*.

    Args:
        directory: Folder to search (not recursive)

    Returns:
        File contents ordered by file name; empty if the folder is missing
    """
    return _read_all(directory, "*.css")


def find_javascripts(directory: Union[str, Path]) -> List[str]:
    """Contents of every ``*.js`` file directly inside *directory*, by file name."""
    return _read_all(directory, "*.js")
