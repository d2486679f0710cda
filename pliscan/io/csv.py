"""
Writing interactions to CSV --- :mod:`pliscan.io.csv`
=====================================================

The output is a plain comma-separated file with a header row and one row per
interaction. Fields are written as-is, without any quoting.
"""

from typing import IO, TYPE_CHECKING, Any, Optional, Union

from pliscan.exceptions import SinkError
from pliscan.logger import logger
from pliscan.records import CSV_HEADER

if TYPE_CHECKING:
    from pliscan.records import InteractionRecord
    from pliscan.typeshed import PathLike


class CSVWriter:
    """Writes interaction records to a CSV file. Must be used in a ``with`` statement.

    The header is written when entering the ``with`` block, and the file is flushed
    and closed when leaving it, even if an exception was raised.

    Parameters
    ----------
    path_or_stream : str or pathlib.Path or file-like
        Path of the output file, or an already opened text stream. Streams are
        flushed but not closed on exit.

    Raises
    ------
    SinkError
        If the file cannot be created or written to

    Example
    -------
    ::

        >>> with CSVWriter("interactions.csv") as sink:
        ...     for record in scanner.generate(receptor, ligand):
        ...         sink.emit(record)

    """

    delimiter = ","

    def __init__(self, path_or_stream: Union["PathLike", IO[str]]) -> None:
        self._target = path_or_stream
        self._owns_stream = not hasattr(path_or_stream, "write")
        self._stream: Optional[IO[str]] = None
        self.n_records = 0

    @property
    def name(self) -> str:
        if self._owns_stream:
            return str(self._target)
        return str(getattr(self._target, "name", "<stream>"))

    def __enter__(self) -> "CSVWriter":
        if self._owns_stream:
            try:
                self._stream = open(self._target, "w")  # type: ignore[arg-type]
            except OSError as exc:
                raise SinkError(
                    exc.errno, f"Cannot create output file: {exc.strerror}", self.name
                ) from exc
        else:
            self._stream = self._target  # type: ignore[assignment]
        self._write_line(CSV_HEADER)
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._stream is None:
            return
        try:
            self._stream.flush()
        finally:
            if self._owns_stream:
                self._stream.close()
            self._stream = None
        logger.info("Wrote %d interactions to %s", self.n_records, self.name)

    def _write_line(self, fields: Any) -> None:
        if self._stream is None:
            raise SinkError("The CSV writer must be used in a `with` statement")
        try:
            self._stream.write(self.delimiter.join(fields) + "\n")
        except OSError as exc:
            raise SinkError(exc.errno, f"Cannot write output: {exc.strerror}") from exc

    def emit(self, record: "InteractionRecord") -> None:
        """Appends one record to the output"""
        self._write_line(record.as_row())
        self.n_records += 1
