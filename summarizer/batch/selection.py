import mimetypes
from collections.abc import Iterable, Iterator
from pathlib import Path

from summarizer.batch.models import PDF_MIME_TYPE, FileSelection, SelectedFile

NON_PDF_NOTICE = "Some selected files were not PDFs and have been ignored."


def guess_mime_type(path: Path) -> str | None:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type


def expand_paths(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield files in selection order; folders expand to their files, recursively and sorted."""
    for path in paths:
        if path.is_dir():
            yield from sorted(p for p in path.rglob("*") if p.is_file())
        elif path.exists():
            yield path
        else:
            raise FileNotFoundError(f"File not found: {path}")


def select_pdf_files(paths: Iterable[Path]) -> FileSelection:
    """Keep only PDF-typed files from a selection, preserving order.

    Raises:
        FileNotFoundError: if a selected path does not exist.
    """
    files: list[SelectedFile] = []
    ignored: list[Path] = []
    for path in expand_paths(paths):
        mime_type = guess_mime_type(path)
        if mime_type == PDF_MIME_TYPE:
            files.append(SelectedFile.from_path(path, mime_type=mime_type))
        else:
            ignored.append(path)
    return FileSelection(files=tuple(files), ignored=tuple(ignored))
