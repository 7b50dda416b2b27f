from __future__ import annotations

import logging
from pathlib import Path
import shutil


logger = logging.getLogger(__name__)


def _numbered(path: Path, number: int) -> Path:
    return path.with_name(f"{path.stem}_{number}{path.suffix}")


def save_pdf(pdf_bytes: bytes, filename: str | Path, *, copies: int = 1) -> list[Path]:
    """Write the PDF as `<filename>.pdf`, or as `<filename>_1.pdf` .. `_N.pdf` for N copies."""
    if copies <= 0:
        raise ValueError("copies must be > 0")

    path = Path(filename)
    if path.suffix.lower() != ".pdf":
        path = path.with_name(path.name + ".pdf")
    path.write_bytes(pdf_bytes)
    logger.debug("Wrote %s (%d bytes)", path, len(pdf_bytes))

    if copies == 1:
        return [path]

    written: list[Path] = []
    for copy in range(2, copies + 1):
        target = _numbered(path, copy)
        shutil.copyfile(path, target)
        written.append(target)
    first = path.replace(_numbered(path, 1))
    return [first] + written
