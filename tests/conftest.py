from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Optional

import numpy as np
import pytest
from rdkit import Chem
from rdkit.Geometry import Point3D

from pliscan.features import FeatureCategory, FeatureMatchSet
from pliscan.interactions.base import _INTERACTIONS
from pliscan.molecule import Molecule

ResidueInfo = tuple[str, str, int, str]
XYZ = tuple[float, float, float]

ZN_PDB = (
    "HETATM    1 ZN    ZN A 101       0.000   0.000   0.000  1.00  0.00          ZN\n"
    "END\n"
)

METHANOL_MOL2 = """\
@<TRIPOS>MOLECULE
methanol
 6 5 0 0 0
SMALL
NO_CHARGES

@<TRIPOS>ATOM
      1 C1          3.4300    0.0000    0.0000 C.3       1  MOH1        0.0000
      2 O1          2.0000    0.0000    0.0000 O.3       1  MOH1        0.0000
      3 H1          3.7900    1.0200    0.0000 H         1  MOH1        0.0000
      4 H2          3.7900   -0.5100    0.8800 H         1  MOH1        0.0000
      5 H3          3.7900   -0.5100   -0.8800 H         1  MOH1        0.0000
      6 H4          1.6800    0.0000    0.9000 H         1  MOH1        0.0000
@<TRIPOS>BOND
     1     1     2    1
     2     1     3    1
     3     1     4    1
     4     1     5    1
     5     2     6    1
"""


def make_molecule(
    symbols: Sequence[str],
    coordinates: Sequence[Sequence[float]],
    features: Optional[Mapping[FeatureCategory, Sequence[Sequence[int]]]] = None,
    name: str = "UNL",
    residues: Optional[Sequence[ResidueInfo]] = None,
) -> Molecule:
    """Builds a molecule without bonds from element symbols and coordinates, with
    explicit feature matches"""
    rwmol = Chem.RWMol()
    for i, symbol in enumerate(symbols):
        atom = Chem.Atom(symbol)
        if residues is not None:
            chain, resname, resnumber, atomname = residues[i]
            atom.SetMonomerInfo(
                Chem.AtomPDBResidueInfo(
                    f" {atomname:<3}",
                    residueName=resname,
                    residueNumber=resnumber,
                    chainId=chain,
                )
            )
        rwmol.AddAtom(atom)
    conformer = Chem.Conformer(len(symbols))
    for i, xyz in enumerate(coordinates):
        conformer.SetAtomPosition(i, Point3D(*map(float, xyz)))
    rwmol.AddConformer(conformer, assignId=True)
    mol = rwmol.GetMol()
    mol.UpdatePropertyCache(strict=False)
    return Molecule(mol, name=name, features=FeatureMatchSet(features or {}))


def make_hexagon(
    center: Sequence[float],
    u1: Sequence[float] = (1, 0, 0),
    u2: Sequence[float] = (0, 1, 0),
    radius: float = 1.4,
) -> list[XYZ]:
    """Regular hexagon in the plane spanned by the unit vectors ``u1`` and ``u2``,
    first vertex along ``u1``"""
    c = np.asarray(center, dtype=float)
    v1 = np.asarray(u1, dtype=float)
    v2 = np.asarray(u2, dtype=float)
    return [
        tuple((c + radius * (np.cos(t) * v1 + np.sin(t) * v2)).tolist())
        for t in np.radians(np.arange(0, 360, 60))
    ]


@pytest.fixture(scope="session")
def mol_factory() -> Callable[..., Molecule]:
    return make_molecule


@pytest.fixture(scope="session")
def hexagon() -> Callable[..., list[XYZ]]:
    return make_hexagon


@pytest.fixture(scope="session")
def ring_factory() -> Callable[..., Molecule]:
    """Molecule made of a single aromatic ring of carbons"""

    def factory(points: Sequence[Sequence[float]], name: str = "UNL") -> Molecule:
        return make_molecule(
            ["C"] * len(points),
            points,
            {FeatureCategory.AROMATIC_RING: [tuple(range(len(points)))]},
            name=name,
        )

    return factory


@pytest.fixture
def cleanup_dummy() -> Iterator[None]:
    yield
    _INTERACTIONS.pop("Dummy", None)


@pytest.fixture(scope="session")
def zn_pdb() -> str:
    return ZN_PDB


@pytest.fixture(scope="session")
def methanol_mol2() -> str:
    return METHANOL_MOL2
