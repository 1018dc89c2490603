"""
Result Archive

Packs the output images of a batch into a single ZIP file for download.
"""

import io
import time
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Union

from ..core.batch import Result


def archive_name(index: int, result: Result) -> str:
    """File name of the ``index``-th (1-based) result inside the archive."""
    return f"halftone_{index}_{result.width}x{result.height}.png"


def batch_archive_name(now: Optional[float] = None) -> str:
    """Default archive file name, stamped with epoch milliseconds."""
    if now is None:
        now = time.time()
    return f"halftone_batch_{int(now * 1000)}.zip"


def build_zip(results: Iterable[Result]) -> bytes:
    """Build an in-memory ZIP with one PNG entry per result."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED,
                         compresslevel=6) as zf:
        for idx, result in enumerate(results, start=1):
            zf.writestr(archive_name(idx, result), result.output)
    return buf.getvalue()


def write_zip(results: Iterable[Result], filepath: Union[str, Path]) -> Path:
    """Write the archive to ``filepath`` and return the path."""
    path = Path(filepath)
    path.write_bytes(build_zip(results))
    return path
