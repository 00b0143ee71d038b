"""
Input/Output utilities for tabular inputs and paired graph outputs.
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..exceptions import GraphWriteError, ProteomicsFileError


def read_table(
    filepath: str | Path,
    required_columns: Optional[Sequence[str]] = None,
    sep: str = "\t",
    comment: Optional[str] = None,
    names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Read a tab-separated table with every column as string.

    Parameters
    ----------
    filepath : str or Path
        Path to the table.
    required_columns : sequence of str, optional
        Columns that must be present in the header.
    sep : str
        Column separator.
    comment : str, optional
        Character starting comment lines.
    names : sequence of str, optional
        Column names of a headerless file. Missing trailing cells are read
        as empty strings.

    Returns
    -------
    pd.DataFrame
        Table with empty cells as empty strings.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ProteomicsFileError
        If a required column is missing or the file cannot be parsed.
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    compression = "gzip" if str(filepath).endswith(".gz") else None

    if names is None:
        layout = {"header": "infer"}
    else:
        # Headerless: short lines are padded, lines with extra fields dropped
        layout = {
            "header": None,
            "names": list(names),
            "index_col": False,
            "on_bad_lines": "skip",
        }

    try:
        df = pd.read_csv(
            filepath,
            sep=sep,
            dtype=str,
            keep_default_na=False,
            compression=compression,
            comment=comment,
            **layout,
        )
    except pd.errors.EmptyDataError as e:
        if names is None:
            raise ProteomicsFileError(f"Cannot parse {filepath}: {e}") from e
        df = pd.DataFrame(columns=list(names), dtype=str)
    except (pd.errors.ParserError, UnicodeDecodeError, EOFError, OSError) as e:
        raise ProteomicsFileError(f"Cannot parse {filepath}: {e}") from e

    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]

    for column in required_columns or []:
        if column not in df.columns:
            raise ProteomicsFileError(
                f"Column '{column}' not found in {filepath}. "
                f"Available columns: {list(df.columns)}"
            )

    return df


def write_text_files_atomically(contents: Dict[str | Path, str]) -> List[Path]:
    """
    Write several text files so that either all of them are replaced or the
    failure is reported and none of the new files is left behind.

    Every file is first written to a temporary file in its target directory
    and only then moved into place. If moving one of them fails, the files
    already moved in this call are removed again, because a partial set would
    describe a different graph than its companions.

    Files are UTF-8 encoded and get the permissions of a newly created file.

    Parameters
    ----------
    contents : dict
        Target path to file content.

    Returns
    -------
    list of Path
        Written paths, in input order.

    Raises
    ------
    GraphWriteError
        If any file could not be written.
    """
    staged: List[tuple] = []
    moved: List[Path] = []
    mode = _default_file_mode()

    try:
        for target, text in contents.items():
            target = Path(target)
            target.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            staged.append((Path(tmp_name), target))
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
            # mkstemp creates owner-only files
            os.chmod(tmp_name, mode)

        for tmp_path, target in staged:
            os.replace(tmp_path, target)
            moved.append(target)

    except Exception as e:
        for tmp_path, _ in staged:
            if tmp_path.exists():
                tmp_path.unlink()
        for target in moved:
            if target.exists():
                target.unlink()
        raise GraphWriteError(
            f"Failed to write {[str(Path(p)) for p in contents]}: {e}"
        ) from e

    return moved


def _default_file_mode() -> int:
    """Permissions of a newly created file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
