"""
Scanning ligands in parallel --- :mod:`pliscan.parallel`
========================================================

This module provides the :class:`LigandPool` class used by
:meth:`~pliscan.scanner.Scanner.run_from_iterable` to process ligands in parallel.
"""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, ClassVar, Optional, cast

from multiprocess.pool import Pool
from tqdm.auto import tqdm

from pliscan.molecule import Molecule

if TYPE_CHECKING:
    from multiprocessing.pool import Pool as BuiltinPool

    from pliscan.records import InteractionRecord
    from pliscan.scanner import Scanner


class LigandPool:
    """Process pool for scanning an iterable of ligands against a single receptor.
    Must be used in a ``with`` statement.

    Results are yielded in the same order as the input ligands, so the stream of
    records is the same as for a serial run.

    Parameters
    ----------
    n_processes : int or None
        Max number of processes. ``None`` uses all available CPU threads.
    scanner : pliscan.scanner.Scanner
        Scanner instance used to detect the interactions
    receptor : pliscan.molecule.Molecule
        Receptor molecule, sent once to each child process
    tqdm_kwargs : dict
        Parameters for the :class:`~tqdm.std.tqdm` progress bar

    Attributes
    ----------
    pool : multiprocess.pool.Pool
        The underlying pool instance.
    """

    scanner: ClassVar["Scanner"]
    receptor: ClassVar[Molecule]

    def __init__(
        self,
        n_processes: Optional[int],
        scanner: "Scanner",
        receptor: Molecule,
        tqdm_kwargs: dict,
    ) -> None:
        self.tqdm_kwargs = tqdm_kwargs
        self.pool = cast(
            "BuiltinPool",
            Pool(
                n_processes,
                initializer=self.initializer,
                initargs=(scanner, receptor),
            ),
        )

    @classmethod
    def initializer(cls, scanner: "Scanner", receptor: Molecule) -> None:
        """Initializer classmethod passed to the pool so that each child process can
        access these objects without copying them."""
        cls.scanner = scanner
        cls.receptor = receptor

    @classmethod
    def executor(cls, ligand: Molecule) -> list["InteractionRecord"]:
        """Classmethod executed by each child process on a single ligand from the
        input iterable."""
        return cls.scanner.generate(cls.receptor, ligand)

    def process(
        self, ligands: Iterable[Molecule]
    ) -> Iterator[list["InteractionRecord"]]:
        """Maps the input iterable of ligands to the executor function.

        Parameters
        ----------
        ligands : typing.Iterable[pliscan.molecule.Molecule]
            An iterable yielding ligand molecules

        Returns
        -------
        records : typing.Iterator[list[pliscan.records.InteractionRecord]]
            The records of each ligand, in input order
        """
        results = self.pool.imap(self.executor, ligands, chunksize=1)
        return iter(tqdm(results, **self.tqdm_kwargs))

    def __enter__(self) -> "LigandPool":
        return self

    def __exit__(self, *exc: Any) -> None:
        """Stops the worker processes"""
        self.pool.terminate()
        self.pool.join()
