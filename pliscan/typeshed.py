"""Helper module containing type aliases."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal, Protocol, TypeAlias, Union

if TYPE_CHECKING:
    from pathlib import Path

    from pliscan.records import InteractionRecord

# utils
PathLike: TypeAlias = Union[str, "Path"]

# interactions
InteractionSelection: TypeAlias = Literal["all"] | Sequence[str] | None
InteractionParameters: TypeAlias = dict[str, dict[str, Any]]
"""Keyword arguments passed to each interaction class, indexed by class name."""

# results
ScanResults: TypeAlias = dict[int, list["InteractionRecord"]]
"""The interaction records found for each ligand, indexed by ligand number."""

# Interaction parameters
Angles: TypeAlias = tuple[float, float]


class RecordSink(Protocol):
    """Destination of the interaction records, e.g. :class:`pliscan.io.CSVWriter`"""

    def emit(self, record: "InteractionRecord") -> None: ...
