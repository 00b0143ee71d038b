"""
Proteomics file reader.

Reads the antibody platform annotation and the measurement values into
:class:`MeasurementRow` objects.

Platform file layout (tab-separated, one row per antibody)::

    ID          Symbols     Sites          Effect
    AKT_pS473   AKT1 AKT2   S473 S474      +
    EGFR_pY1068 EGFR        Y1068|Y1086    +
    AKT         AKT1 AKT2

Symbols are separated by whitespace. Site groups follow the symbol order,
separated by whitespace, and sites within a group by ``|``. An ``a`` in the
effect column marks an activity measurement.
"""

from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..exceptions import ProteomicsFileError
from ..utils.io import read_table
from ..utils.logging import get_logger
from .rows import ACTIVITY_CODE, Effect, MeasurementRow


logger = get_logger("reader")


def parse_symbols(cell: str) -> tuple:
    return tuple(s for s in str(cell).split() if s)


def parse_sites(cell: str, n_symbols: int) -> tuple:
    """
    Parse a site cell into one group per symbol.

    A single group given for several symbols applies to all of them.
    """
    groups = [
        tuple(site for site in group.split("|") if site)
        for group in str(cell).split()
    ]
    if not groups:
        return ()
    if len(groups) == 1 and n_symbols > 1:
        return tuple(groups * n_symbols)
    if len(groups) < n_symbols:
        groups += [()] * (n_symbols - len(groups))
    return tuple(groups[:n_symbols])


def read_annotation(
    platform_file: str | Path,
    id_column: str,
    symbols_column: str,
    sites_column: Optional[str] = None,
    effect_column: Optional[str] = None,
) -> List[MeasurementRow]:
    """
    Read the platform annotation file.

    Parameters
    ----------
    platform_file : str or Path
        Tab-separated annotation file.
    id_column : str
        Column of row identifiers.
    symbols_column : str
        Column of gene symbols.
    sites_column : str, optional
        Column of phosphorylation sites.
    effect_column : str, optional
        Column of site effects.

    Returns
    -------
    list of MeasurementRow
        Rows without values, in file order.
    """
    required = [id_column, symbols_column]
    required += [c for c in (sites_column, effect_column) if c]
    df = read_table(platform_file, required_columns=required)

    rows = []
    for record in df.to_dict(orient="records"):
        symbols = parse_symbols(record[symbols_column])
        sites = parse_sites(record[sites_column], len(symbols)) if sites_column else ()
        code = record[effect_column].strip().lower() if effect_column else ""

        rows.append(MeasurementRow(
            id=record[id_column].strip(),
            symbols=symbols,
            sites=sites,
            effect=Effect.parse(code),
            activity=code == ACTIVITY_CODE,
        ))

    logger.info(f"Read {len(rows)} annotation rows from {platform_file}")
    return rows


def add_values(
    rows: Sequence[MeasurementRow],
    values_file: str | Path,
    id_column: str,
    value_columns: Sequence[str],
    missing_value: float = 0.0,
) -> List[MeasurementRow]:
    """
    Attach measured values to annotation rows.

    Parameters
    ----------
    rows : sequence of MeasurementRow
        Annotation rows.
    values_file : str or Path
        Tab-separated values file.
    id_column : str
        Column of row identifiers, matching the annotation ids.
    value_columns : sequence of str
        Columns to read, in order.
    missing_value : float
        Value used for rows absent from the file or for empty cells.

    Returns
    -------
    list of MeasurementRow
        New rows carrying the values.
    """
    if not value_columns:
        raise ProteomicsFileError(f"No value columns requested for {values_file}")

    df = read_table(values_file, required_columns=[id_column, *value_columns])
    df[id_column] = df[id_column].str.strip()
    df = df.drop_duplicates(subset=id_column, keep="first").set_index(id_column)

    try:
        values = df[list(value_columns)].replace("", np.nan).apply(pd.to_numeric)
    except ValueError as e:
        raise ProteomicsFileError(f"Non-numeric value in {values_file}: {e}") from e
    values = values.fillna(missing_value)

    n_missing = 0
    result = []
    for row in rows:
        if row.id in values.index:
            result.append(row.with_values(values.loc[row.id].tolist()))
        else:
            n_missing += 1
            result.append(row.with_values([missing_value] * len(value_columns)))

    if n_missing:
        logger.warning(
            f"{n_missing} annotation rows have no values in {values_file}; "
            f"using {missing_value}"
        )
    return result
