"""
Reading receptors and ligands --- :mod:`pliscan.molecule`
=========================================================
"""

import os
from collections.abc import Iterable, Iterator, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from rdkit import Chem

from pliscan.exceptions import EmptyConformerError, ParseError
from pliscan.features import FeatureMatchSet
from pliscan.logger import logger
from pliscan.utils import catch_rdkit_logs

if TYPE_CHECKING:
    from pathlib import Path

    import numpy as np
    from numpy.typing import NDArray
    from rdkit.Geometry import Point3D


class MoleculeKind(Enum):
    """Role of a molecule, which also decides the expected file format"""

    RECEPTOR = "pdb"
    LIGAND = "mol2"


class Molecule(Chem.Mol):
    """A receptor or ligand that behaves like an RDKit :class:`~rdkit.Chem.rdchem.Mol`
    with extra attributes.

    Parameters
    ----------
    mol : rdkit.Chem.rdchem.Mol
        A molecule with exactly one conformer
    name : str
        Identifier of the molecule, written in the output for ligands
    features : pliscan.features.FeatureMatchSet, optional
        Features of the molecule. If ``None``, they are searched with the SMARTS
        catalog of :mod:`pliscan.features`.

    Attributes
    ----------
    name : str
        Identifier of the molecule
    features : pliscan.features.FeatureMatchSet
        Every feature match found in the molecule
    xyz : numpy.ndarray
        XYZ coordinates of all atoms in the molecule

    Raises
    ------
    EmptyConformerError
        If the molecule doesn't have exactly one conformer
    """

    def __init__(
        self,
        mol: Chem.Mol,
        name: str = "UNL",
        features: Optional[FeatureMatchSet] = None,
    ) -> None:
        super().__init__(mol)
        n_conformers = self.GetNumConformers()
        if n_conformers != 1 or self.GetNumAtoms() == 0:
            raise EmptyConformerError(
                name, f"expected one conformer with atoms, found {n_conformers}"
            )
        self.name = name
        self._features = features

    def __repr__(self) -> str:  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        params = f"{self.name!r} with {self.GetNumAtoms()} atoms"
        return f"<{name} {params} at {id(self):#x}>"

    @property
    def features(self) -> FeatureMatchSet:
        if self._features is None:
            self._features = FeatureMatchSet.from_mol(self)
        return self._features

    @property
    def xyz(self) -> "NDArray[np.float64]":
        return self.GetConformer().GetPositions()  # type: ignore[no-any-return]

    def position(self, index: int) -> "Point3D":
        """Coordinates of an atom"""
        return self.GetConformer().GetAtomPosition(index)

    def positions(self, indices: Sequence[int]) -> list["Point3D"]:
        """Coordinates of several atoms, in the same order as ``indices``"""
        conformer = self.GetConformer()
        return [conformer.GetAtomPosition(i) for i in indices]


def molecule_name(path: Union[str, "Path"]) -> str:
    """Name of a molecule read from a file: its path without the extension"""
    return os.path.splitext(str(path))[0]


def parse(
    block: Union[str, bytes], kind: MoleculeKind, name: str = "UNL"
) -> Molecule:
    """Parses the content of a PDB (receptor) or MOL2 (ligand) file

    Hydrogen atoms are kept and the molecule is sanitized.

    Parameters
    ----------
    block : str or bytes
        Content of the file
    kind : MoleculeKind
        Selects the file grammar
    name : str
        Name given to the molecule

    Raises
    ------
    ParseError
        If RDKit could not read the block
    EmptyConformerError
        If the molecule doesn't have exactly one conformer
    """
    if isinstance(block, bytes):
        try:
            block = block.decode()
        except UnicodeDecodeError as exc:
            raise ParseError(name, str(exc)) from exc
    with catch_rdkit_logs():
        if kind is MoleculeKind.RECEPTOR:
            mol = Chem.MolFromPDBBlock(block, sanitize=True, removeHs=False)
        else:
            mol = Chem.MolFromMol2Block(block, sanitize=True, removeHs=False)
    if mol is None:
        raise ParseError(name, f"not a valid {kind.value.upper()} block")
    return Molecule(mol, name=name)


def read_molecule(path: Union[str, "Path"], kind: MoleculeKind) -> Molecule:
    """Reads a receptor or ligand file

    Raises
    ------
    ParseError
        If the file cannot be opened or parsed
    """
    try:
        with open(path, "rb") as f:
            content = f.read()
    except OSError as exc:
        raise ParseError(str(path), exc.strerror or str(exc)) from exc
    mol = parse(content, kind, name=molecule_name(path))
    logger.info(
        "Read %s %r with %d atoms",
        kind.name.lower(),
        mol.name,
        mol.GetNumAtoms(),
    )
    return mol


class ligand_supplier(Sequence[Molecule]):
    """Supplies ligands, given paths to MOL2 files

    Files that cannot be read are skipped when iterating, with a warning, so
    iterating may yield fewer molecules than ``len(suppl)``, which counts the
    files. Indexing reads a single file and raises
    :class:`~pliscan.exceptions.ParseError` if it cannot be read.

    Parameters
    ----------
    paths : list
        A list (or any iterable) of MOL2 files

    Example
    -------
    ::

        >>> lig_suppl = ligand_supplier(["lig1.mol2", "lig2.mol2"])
        >>> for lig in lig_suppl:
        ...     # do something with each ligand

    """

    def __init__(self, paths: Iterable[Union[str, "Path"]]) -> None:
        self.paths = list(paths)

    def __iter__(self) -> Iterator[Molecule]:
        for path in self.paths:
            try:
                yield read_molecule(path, MoleculeKind.LIGAND)
            except ParseError as exc:
                logger.warning("Skipping ligand: %s", exc)

    def __getitem__(self, index: int) -> Molecule:  # type: ignore[override]
        return read_molecule(self.paths[index], MoleculeKind.LIGAND)

    def __len__(self) -> int:
        return len(self.paths)
