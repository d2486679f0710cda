"""
Scanning receptor-ligand interactions --- :mod:`pliscan.scanner`
================================================================

::

    import pliscan
    receptor = pliscan.read_molecule("receptor.pdb", pliscan.MoleculeKind.RECEPTOR)
    ligands = pliscan.ligand_supplier(["lig1.mol2", "lig2.mol2"])
    scanner = pliscan.Scanner()
    with pliscan.CSVWriter("interactions.csv") as sink:
        scanner.run_from_iterable(ligands, receptor, sink=sink)
    df = scanner.to_dataframe()

"""

from collections.abc import Iterable, Iterator, Sized
from typing import TYPE_CHECKING, Optional

from tqdm.auto import tqdm

from pliscan.interactions.base import _BASE_INTERACTIONS, _INTERACTIONS
from pliscan.logger import logger
from pliscan.parallel import LigandPool
from pliscan.utils import to_dataframe

if TYPE_CHECKING:
    import pandas as pd

    from pliscan.interactions.base import Interaction
    from pliscan.molecule import Molecule
    from pliscan.records import InteractionRecord
    from pliscan.typeshed import (
        InteractionParameters,
        InteractionSelection,
        RecordSink,
        ScanResults,
    )


class Scanner:
    """Class that detects the interactions between a receptor and ligands

    Interactions are always run in the order in which the interaction classes were
    registered::

        Hydrophobic, HBAcceptor, HBDonor, XBAcceptor, XBDonor, Anionic, Cationic,
        PiStacking, MetalAcceptor, MetalDonor

    so that each asymmetric interaction is checked with the receptor playing the
    named role first, then with the ligand playing it.

    Parameters
    ----------
    interactions : list or "all" or None
        List of names (str) of interaction classes as found in the
        :mod:`pliscan.interactions` module. ``None`` or ``"all"`` uses every
        available interaction.
    parameters : dict, optional
        New parameters for the interactions. Mapping between an interaction name and a
        dict of parameters as they appear in the interaction class, e.g.
        ``{"Hydrophobic": {"distance": 4.0}}``.

    Attributes
    ----------
    interactions : dict
        Dictionary of interaction instances indexed by class name, in execution order
    records : dict
        Records found by :meth:`run_from_iterable` for each ligand:
        ``{<ligand number>: [<InteractionRecord>, ...]}``. Ligands are numbered in
        the order they are yielded, so a file skipped by
        :class:`~pliscan.molecule.ligand_supplier` takes no number and the
        numbers of the following ligands differ from their position in the list of
        paths. The ``ligand_name`` of each record identifies its file.

    Raises
    ------
    NameError
        Unknown interaction in the ``interactions`` or ``parameters`` parameters.

    Notes
    -----
    Single interactions can also be used directly through the lowercase attribute of
    the same name::

        >>> records = list(scanner.hbdonor(receptor, ligand))

    """

    def __init__(
        self,
        interactions: "InteractionSelection" = None,
        parameters: Optional["InteractionParameters"] = None,
    ) -> None:
        self._set_interactions(interactions, parameters)
        self.records: "ScanResults" = {}

    def _set_interactions(
        self,
        interactions: "InteractionSelection",
        parameters: Optional["InteractionParameters"],
    ) -> None:
        # read interactions to compute
        parameters = parameters or {}
        if interactions is None or interactions == "all":
            interactions = self.list_available()
        # sanity check
        self._check_valid_interactions(interactions, "interactions")
        self._check_valid_interactions(parameters, "parameters")
        # add interaction methods
        self.interactions: dict[str, "Interaction"] = {}
        for name, interaction_cls in _INTERACTIONS.items():
            # create instance with custom parameters if available
            interaction = interaction_cls(**parameters.get(name, {}))
            setattr(self, name.lower(), interaction)
            if name in interactions:
                self.interactions[name] = interaction

    def _check_valid_interactions(
        self, interactions_iterable: Iterable[str], varname: str
    ) -> None:
        """Raises a NameError if an unknown interaction is given."""
        unsafe = set(interactions_iterable)
        unknown = unsafe - _INTERACTIONS.keys()
        if unknown:
            raise NameError(
                f"Unknown interaction(s) in {varname!r}: {', '.join(sorted(unknown))}"
            )

    def __repr__(self) -> str:  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        params = f"{self.n_interactions} interactions: {list(self.interactions.keys())}"
        return f"<{name}: {params} at {id(self):#x}>"

    @staticmethod
    def list_available(show_hidden: bool = False) -> list[str]:
        """List interactions available to the Scanner class, in execution order.

        Parameters
        ----------
        show_hidden : bool
            Show hidden classes (base classes meant to be inherited from to create
            custom interactions).
        """
        if show_hidden:
            return sorted(_BASE_INTERACTIONS) + list(_INTERACTIONS)
        return list(_INTERACTIONS)

    @property
    def n_interactions(self) -> int:
        return len(self.interactions)

    def iter_records(
        self, receptor: "Molecule", ligand: "Molecule"
    ) -> Iterator["InteractionRecord"]:
        """Yields the interactions between a receptor and a ligand, in emission
        order"""
        for interaction in self.interactions.values():
            yield from interaction(receptor, ligand)

    def generate(
        self, receptor: "Molecule", ligand: "Molecule"
    ) -> list["InteractionRecord"]:
        """Detects the interactions between two single structures

        Parameters
        ----------
        receptor : pliscan.molecule.Molecule
            The receptor
        ligand : pliscan.molecule.Molecule
            The ligand

        Returns
        -------
        records : list[pliscan.records.InteractionRecord]
            Every interaction found, in emission order

        Example
        -------
        ::

            >>> records = scanner.generate(receptor, ligand)
            >>> records[0].interaction_type
            'Hydrophobic'

        """
        records = list(self.iter_records(receptor, ligand))
        logger.info("%s: %d interactions", ligand.name, len(records))
        return records

    def run_from_iterable(
        self,
        ligands: Iterable["Molecule"],
        receptor: "Molecule",
        sink: Optional["RecordSink"] = None,
        *,
        progress: bool = True,
        n_jobs: Optional[int] = 1,
    ) -> "Scanner":
        """Detects the interactions between a list of ligands and a receptor

        Parameters
        ----------
        ligands : list or generator
            An iterable yielding ligands as :class:`~pliscan.molecule.Molecule`
            objects
        receptor : pliscan.molecule.Molecule
            The receptor
        sink : object, optional
            Any object with an ``emit(record)`` method, such as
            :class:`~pliscan.io.CSVWriter`. Records are emitted one at a time from
            the calling process, in the same order for serial and parallel runs.
        progress : bool
            Display a :class:`~tqdm.std.tqdm` progressbar while running the calculation.
            For sized inputs the total is ``len(ligands)``, which for a
            :class:`~pliscan.molecule.ligand_supplier` includes skipped files.
        n_jobs : int or None
            Number of processes to run in parallel. If ``n_jobs=None``, the
            analysis will use all available CPU threads, while if ``n_jobs=1``,
            the analysis will run in serial.

        Raises
        ------
        ValueError
            If ``n_jobs <= 0``

        Returns
        -------
        pliscan.scanner.Scanner
            The Scanner instance that detected the interactions
        """
        if n_jobs is not None and n_jobs < 1:
            raise ValueError("n_jobs must be > 0 or None")
        total = len(ligands) if isinstance(ligands, Sized) else None
        if n_jobs != 1:
            results = self._run_iter_parallel(
                ligands, receptor, progress, n_jobs, total
            )
        else:
            iterator = tqdm(ligands, total=total) if progress else ligands
            results = (self.generate(receptor, ligand) for ligand in iterator)
        self.records = {}
        for i, ligand_records in enumerate(results):
            self.records[i] = ligand_records
            if sink is not None:
                for record in ligand_records:
                    sink.emit(record)
        return self

    def _run_iter_parallel(
        self,
        ligands: Iterable["Molecule"],
        receptor: "Molecule",
        progress: bool,
        n_jobs: Optional[int],
        total: Optional[int],
    ) -> Iterator[list["InteractionRecord"]]:
        """Parallel implementation of :meth:`~Scanner.run_from_iterable`"""
        with LigandPool(
            n_jobs,
            scanner=self,
            receptor=receptor,
            tqdm_kwargs={"total": total, "disable": not progress},
        ) as pool:
            yield from pool.process(ligands)

    def to_dataframe(self, index_col: str = "Ligand") -> "pd.DataFrame":
        """Converts the records of the last :meth:`run_from_iterable` to a pandas
        DataFrame

        Parameters
        ----------
        index_col : str
            Name of the index column in the DataFrame

        Returns
        -------
        df : pandas.DataFrame
            One row per interaction, with the same columns as the CSV output

        Raises
        ------
        AttributeError
            If the :meth:`run_from_iterable` method hasn't been used
        """
        if not self.records:
            raise AttributeError(
                "Please use the `run_from_iterable` method before calling "
                "`to_dataframe`"
            )
        return to_dataframe(self.records, index_col=index_col)
