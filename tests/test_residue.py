import logging
from typing import TYPE_CHECKING

import pytest
from rdkit import Chem

from pliscan.residue import AtomLabel, ResidueId, ligand_label, receptor_label

if TYPE_CHECKING:
    from collections.abc import Callable

    from pliscan.molecule import Molecule


class TestResidueId:
    def test_str(self) -> None:
        resid = ResidueId("B", "ASP", 129, "OD2")
        assert str(resid) == "B.ASP129.OD2"

    def test_from_atom(self) -> None:
        atom = Chem.Atom(8)
        atom.SetMonomerInfo(
            Chem.AtomPDBResidueInfo(
                " OD2", residueName="ASP", residueNumber=129, chainId="B"
            )
        )
        assert ResidueId.from_atom(atom) == ResidueId("B", "ASP", 129, "OD2")

    def test_from_atom_no_info(self) -> None:
        assert ResidueId.from_atom(Chem.Atom(8)) is None


class TestLabels:
    def test_receptor(self, mol_factory: "Callable[..., Molecule]") -> None:
        mol = mol_factory(
            ["N", "C"],
            [(0, 0, 0), (1, 0, 0)],
            residues=[("A", "GLY", 1, "N"), ("A", "GLY", 1, "CA")],
        )
        label = receptor_label(mol, 1)
        assert label == AtomLabel("A.GLY1.CA", has_metadata=True)
        assert str(label) == "A.GLY1.CA"

    def test_receptor_without_residue(
        self,
        mol_factory: "Callable[..., Molecule]",
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mol = mol_factory(["C", "Br"], [(0, 0, 0), (1.9, 0, 0)])
        with caplog.at_level(logging.WARNING, logger="pliscan"):
            label = receptor_label(mol, 1)
        assert label.text == "1(Br)"
        assert label.has_metadata is False
        assert "has no residue information" in caplog.text

    def test_ligand(self, mol_factory: "Callable[..., Molecule]") -> None:
        mol = mol_factory(
            ["O", "C"], [(0, 0, 0), (1.4, 0, 0)], residues=[("A", "LIG", 1, "O1")] * 2
        )
        assert ligand_label(mol, 0) == AtomLabel("0(O)")
        assert ligand_label(mol, 1).text == "1(C)"
