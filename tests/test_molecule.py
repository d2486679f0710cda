import logging
import pickle
from pathlib import Path

import pytest
from rdkit import Chem

from pliscan.exceptions import EmptyConformerError, ParseError
from pliscan.features import AtomMatch, FeatureCategory, FeatureMatchSet
from pliscan.molecule import (
    Molecule,
    MoleculeKind,
    ligand_supplier,
    molecule_name,
    parse,
    read_molecule,
)
from pliscan.residue import ResidueId


@pytest.fixture
def ligand_files(tmp_path: Path, methanol_mol2: str) -> list[Path]:
    good = tmp_path / "methanol.mol2"
    good.write_text(methanol_mol2)
    bad = tmp_path / "broken.mol2"
    bad.write_text("@<TRIPOS>MOLECULE\nbroken\n")
    return [good, tmp_path / "missing.mol2", bad, good]


class TestMolecule:
    def test_receptor(self, zn_pdb: str) -> None:
        mol = parse(zn_pdb, MoleculeKind.RECEPTOR, name="receptor")
        assert isinstance(mol, Molecule)
        assert isinstance(mol, Chem.Mol)
        assert mol.name == "receptor"
        assert mol.GetNumAtoms() == 1
        resid = ResidueId.from_atom(mol.GetAtomWithIdx(0))
        assert resid == ResidueId("A", "ZN", 101, "ZN")
        assert str(resid) == "A.ZN101.ZN"
        assert mol.features[FeatureCategory.METAL] == (AtomMatch(0),)

    def test_ligand_keeps_hydrogens(self, methanol_mol2: str) -> None:
        mol = parse(methanol_mol2, MoleculeKind.LIGAND)
        assert mol.name == "UNL"
        assert mol.GetNumAtoms() == 6
        assert mol.xyz.shape == (6, 3)
        assert list(mol.position(1)) == pytest.approx([2.0, 0.0, 0.0])
        assert [list(p) for p in mol.positions([1, 0])] == [
            list(mol.position(1)),
            list(mol.position(0)),
        ]
        assert mol.features[FeatureCategory.CHELATED] == (AtomMatch(1),)
        (donor,) = mol.features[FeatureCategory.HYDROGEN_DONOR_H]
        assert donor == (1, 5)

    def test_bytes(self, methanol_mol2: str) -> None:
        mol = parse(methanol_mol2.encode(), MoleculeKind.LIGAND)
        assert mol.GetNumAtoms() == 6

    def test_invalid_bytes(self) -> None:
        with pytest.raises(ParseError, match="lig"):
            parse(b"\xff\xfe\xfa", MoleculeKind.LIGAND, name="lig")

    def test_invalid_mol2(self) -> None:
        with pytest.raises(ParseError):
            parse("@<TRIPOS>MOLECULE\nbroken\n", MoleculeKind.LIGAND)

    def test_invalid_pdb(self) -> None:
        with pytest.raises(ParseError):
            parse("this is not a PDB file\n", MoleculeKind.RECEPTOR)

    def test_no_conformer(self) -> None:
        with pytest.raises(EmptyConformerError, match="expected one conformer"):
            Molecule(Chem.MolFromSmiles("CCO"))

    def test_explicit_features(self, zn_pdb: str) -> None:
        rdmol = Chem.MolFromPDBBlock(zn_pdb)
        features = FeatureMatchSet({FeatureCategory.CHELATED: [(0,)]})
        mol = Molecule(rdmol, features=features)
        assert mol.features is features
        assert FeatureCategory.METAL not in mol.features

    def test_pickle(self, zn_pdb: str) -> None:
        mol = parse(zn_pdb, MoleculeKind.RECEPTOR, name="receptor")
        features = mol.features
        loaded = pickle.loads(pickle.dumps(mol))
        assert isinstance(loaded, Molecule)
        assert loaded.name == "receptor"
        assert list(loaded.position(0)) == list(mol.position(0))
        metal = FeatureCategory.METAL
        assert loaded.features[metal] == features[metal]
        resid = ResidueId.from_atom(loaded.GetAtomWithIdx(0))
        assert str(resid) == "A.ZN101.ZN"


class TestReadMolecule:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("lig.mol2", "lig"),
            ("data/ligands/lig_1.mol2", "data/ligands/lig_1"),
            ("no_extension", "no_extension"),
        ],
    )
    def test_molecule_name(self, path: str, expected: str) -> None:
        assert molecule_name(path) == expected

    def test_read(self, tmp_path: Path, methanol_mol2: str) -> None:
        path = tmp_path / "methanol.mol2"
        path.write_text(methanol_mol2)
        mol = read_molecule(path, MoleculeKind.LIGAND)
        assert mol.name == str(tmp_path / "methanol")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="missing.pdb"):
            read_molecule(tmp_path / "missing.pdb", MoleculeKind.RECEPTOR)


class TestLigandSupplier:
    def test_len(self, ligand_files: list[Path]) -> None:
        assert len(ligand_supplier(ligand_files)) == 4

    def test_skips_invalid(
        self, ligand_files: list[Path], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="pliscan"):
            ligands = list(ligand_supplier(ligand_files))
        assert [lig.GetNumAtoms() for lig in ligands] == [6, 6]
        assert all(lig.name.endswith("methanol") for lig in ligands)
        skipped = [r for r in caplog.records if "Skipping ligand" in r.getMessage()]
        assert len(skipped) == 2

    def test_getitem(self, ligand_files: list[Path]) -> None:
        assert ligand_supplier(ligand_files)[0].GetNumAtoms() == 6
        with pytest.raises(ParseError):
            ligand_supplier(ligand_files)[1]
