"""Read expressions from a text file or an archive."""
import lzma
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr
from py7zr.exceptions import ArchiveError


def read_expressions(input_file: Path) -> List[str]:
    """
    Read one infix expression per line from a text file or an archive.

    Blank lines are dropped and surrounding whitespace is stripped.

    :param Path input_file: Path to a .txt file or a supported archive

    :return: List of non-empty expression lines
    :rtype: List[str]
    :raises ValueError: If the archive format is unsupported or contains no .txt file
    """
    if input_file.suffix == ".txt":
        content = input_file.read_text(encoding="utf-8")
    else:
        content = extract_archive(input_file)
    return [line.strip() for line in content.splitlines() if line.strip()]


# Standard-library extraction filter that refuses unsafe members (3.10.12+, 3.11.4+)
TAR_EXTRACT_KWARGS = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}

# Raised by the archive libraries for truncated or corrupt files
CORRUPT_ARCHIVE_ERRORS = (zipfile.BadZipFile, tarfile.TarError, lzma.LZMAError, py7zr.Bad7zFile, ArchiveError, EOFError)


def extract_archive(archive_path: Path) -> str:
    """
    Extract the first .txt file found in a supported archive and return its content as a string.

    Supported formats:
    - .zip
    - .tar.xz
    - .7z

    :param Path archive_path: Path to the archive file

    :return: Content of the extracted .txt file
    :rtype: str
    :raises ValueError: If no .txt file is found, the format is unsupported or the archive is corrupt
    """
    try:
        with tempfile.TemporaryDirectory() as tmpdir:
            return _extract_first_txt(archive_path, Path(tmpdir))
    except CORRUPT_ARCHIVE_ERRORS as exc:
        raise ValueError(f"📄❌ Corrupt archive {archive_path.name}: {exc}") from exc


def _extract_first_txt(archive_path: Path, tmpdir_path: Path) -> str:
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zf:
            txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
            if not txt_files:
                raise ValueError("📄❌ No .txt file found in zip archive")
            zf.extract(txt_files[0], path=tmpdir_path)
            return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

    elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
        with tarfile.open(archive_path, "r:xz") as tf:
            txt_files = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
            if not txt_files:
                raise ValueError("📄❌ No .txt file found in tar.xz archive")
            tf.extract(txt_files[0], path=tmpdir_path, **TAR_EXTRACT_KWARGS)
            return (tmpdir_path / txt_files[0].name).read_text(encoding="utf-8")

    elif archive_path.suffix == ".7z":
        with py7zr.SevenZipFile(archive_path, mode="r") as archive:
            txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
            if not txt_files:
                raise ValueError("📄❌ No .txt file found in 7z archive")
            archive.extract(path=tmpdir_path, targets=[txt_files[0]])
            return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

    else:
        raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")
