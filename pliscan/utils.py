"""
Helper functions --- :mod:`pliscan.utils`
=========================================
"""

import warnings
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Union

import pandas as pd
from rdkit import rdBase

from pliscan.records import CSV_HEADER

if TYPE_CHECKING:
    from pliscan.records import InteractionRecord


@contextmanager
def catch_rdkit_logs() -> Iterator[None]:
    """Silences RDKit's own logs, then restores their previous state"""
    log_status = rdBase.LogStatus()
    rdBase.DisableLog("rdApp.*")
    try:
        yield
    finally:
        status = {
            st.split(":")[0]: st.split(":")[1] == "enabled"
            for st in log_status.split("\n")
            if ":" in st
        }
        for k, v in status.items():
            if v:
                rdBase.EnableLog(k)
            else:
                rdBase.DisableLog(k)


def to_dataframe(
    records: Union[
        Mapping[int, Iterable["InteractionRecord"]], Iterable["InteractionRecord"]
    ],
    index_col: str = "Ligand",
) -> pd.DataFrame:
    """Converts interaction records to a pandas DataFrame

    Parameters
    ----------
    records : dict or list
        Either a dict in the format ``{<ligand index>: [<InteractionRecord>, ...]}``
        as found in :attr:`pliscan.scanner.Scanner.records`, or a flat iterable of
        records (in which case every record is indexed by ``0``).
    index_col : str
        Name of the index column in the DataFrame

    Returns
    -------
    df : pandas.DataFrame
        One row per interaction, with the same columns as the CSV output

    Example
    -------
    ::

        >>> df = pliscan.to_dataframe(scanner.records)
        >>> df[["PROTEIN_ATOM_ID", "INTERACTION_TYPE", "INTERACTION_DISTANCE"]]
                 PROTEIN_ATOM_ID INTERACTION_TYPE  INTERACTION_DISTANCE
        Ligand
        0         A.ASP12.OD1            Ionic              3.012345
        ...

    """
    if not isinstance(records, Mapping):
        records = {0: records}
    index = []
    rows = []
    for i, ligand_records in records.items():
        for record in ligand_records:
            index.append(i)
            rows.append(record.to_dict())
    index = pd.Index(index, name=index_col)
    if not rows:
        warnings.warn("No interaction detected")
    return pd.DataFrame(rows, index=index, columns=list(CSV_HEADER))
