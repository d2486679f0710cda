import pytest
from rdkit import Chem

from pliscan.features import (
    SMARTS_PATTERNS,
    AtomMatch,
    FeatureCategory,
    FeatureMatchSet,
    HalogenAcceptorMatch,
    HalogenDonorMatch,
    HydrogenDonorMatch,
    RingMatch,
    find_features,
)


@pytest.fixture(scope="module")
def benzene() -> Chem.Mol:
    return Chem.MolFromSmiles("c1ccccc1")


def test_categories_are_ordered() -> None:
    assert [c.ordinal for c in FeatureCategory] == list(range(10))
    assert FeatureCategory.AROMATIC_RING.tag == "Aromatic_ring"
    assert FeatureCategory.HYDROGEN_DONOR_H.tag == "Hydrogen donor"


def test_every_smarts_is_valid() -> None:
    for category, smarts in SMARTS_PATTERNS:
        assert Chem.MolFromSmarts(smarts) is not None, category


@pytest.mark.parametrize(
    ("category", "indices", "expected"),
    [
        (FeatureCategory.HYDROPHOBIC, (3,), AtomMatch(3)),
        (FeatureCategory.HYDROGEN_DONOR_H, (1, 5), HydrogenDonorMatch(1, 5)),
        (FeatureCategory.HALOGEN_DONOR_HALOGEN, (1, 0), HalogenDonorMatch(1, 0)),
        (FeatureCategory.HALOGEN_ACCEPTOR_ANY, (2, 4), HalogenAcceptorMatch(2, 4)),
        (FeatureCategory.AROMATIC_RING, (0, 1, 2, 3, 4), RingMatch((0, 1, 2, 3, 4))),
        (FeatureCategory.METAL, (0,), AtomMatch(0)),
    ],
)
def test_make_match(category: FeatureCategory, indices: tuple, expected: tuple) -> None:
    match = category.make_match(indices)
    assert match == expected
    assert type(match) is type(expected)


def test_make_match_ring_size() -> None:
    with pytest.raises(ValueError, match="5 or 6 atoms"):
        FeatureCategory.AROMATIC_RING.make_match((0, 1, 2, 3))


class TestFeatureMatchSet:
    def test_empty(self) -> None:
        features = FeatureMatchSet()
        assert len(features) == len(FeatureCategory)
        assert features.n_matches == 0
        for category in FeatureCategory:
            assert features[category] == ()
            assert category not in features

    def test_explicit_matches(self) -> None:
        features = FeatureMatchSet(
            {
                FeatureCategory.CATION: [(2,)],
                FeatureCategory.HYDROGEN_DONOR_H: [HydrogenDonorMatch(0, 1)],
            }
        )
        assert features[FeatureCategory.CATION] == (AtomMatch(2),)
        assert features[FeatureCategory.HYDROGEN_DONOR_H] == (
            HydrogenDonorMatch(0, 1),
        )
        assert FeatureCategory.CATION in features
        assert FeatureCategory.ANION not in features
        assert "Cation" not in features
        assert features.n_matches == 2
        assert list(features) == list(FeatureCategory)

    def test_benzene(self, benzene: Chem.Mol) -> None:
        features = FeatureMatchSet.from_mol(benzene)
        (ring,) = features[FeatureCategory.AROMATIC_RING]
        assert isinstance(ring, RingMatch)
        assert sorted(ring.atoms) == list(range(6))
        assert len(features[FeatureCategory.HYDROPHOBIC]) == 6
        assert FeatureCategory.CATION not in features

    def test_five_membered_rings_first(self) -> None:
        mol = Chem.MolFromSmiles("c1ccc(cc1)-c1ccc[nH]1")
        features = find_features(mol)
        rings = features[FeatureCategory.AROMATIC_RING]
        assert [len(r.atoms) for r in rings] == [5, 6]  # type: ignore[union-attr]
        assert set(rings[0].atoms) == set(range(6, 11))  # type: ignore[union-attr]
        assert set(rings[1].atoms) == set(range(6))  # type: ignore[union-attr]

    @pytest.mark.parametrize(
        ("smiles", "category", "expected"),
        [
            ("CC(=O)[O-]", FeatureCategory.ANION, [AtomMatch(2), AtomMatch(3)]),
            ("C[NH3+]", FeatureCategory.CATION, [AtomMatch(1)]),
            ("[Zn+2]", FeatureCategory.METAL, [AtomMatch(0)]),
            (
                "Clc1ccccc1",
                FeatureCategory.HALOGEN_DONOR_HALOGEN,
                [HalogenDonorMatch(1, 0)],
            ),
            ("CO", FeatureCategory.HALOGEN_ACCEPTOR_ANY, [HalogenAcceptorMatch(1, 0)]),
            ("CO", FeatureCategory.HYDROGEN_ACCEPTOR, [AtomMatch(1)]),
            ("CO", FeatureCategory.CHELATED, [AtomMatch(1)]),
        ],
    )
    def test_smarts_matches(
        self, smiles: str, category: FeatureCategory, expected: list
    ) -> None:
        features = find_features(Chem.MolFromSmiles(smiles))
        assert sorted(features[category]) == expected

    def test_hydrogen_donor(self) -> None:
        mol = Chem.AddHs(Chem.MolFromSmiles("CO"))
        features = find_features(mol)
        (match,) = features[FeatureCategory.HYDROGEN_DONOR_H]
        assert isinstance(match, HydrogenDonorMatch)
        assert match.donor == 1
        hydrogen = mol.GetAtomWithIdx(match.hydrogen)
        assert hydrogen.GetSymbol() == "H"
        assert hydrogen.GetNeighbors()[0].GetIdx() == 1

    def test_max_matches(self, benzene: Chem.Mol) -> None:
        features = FeatureMatchSet.from_mol(benzene, max_matches=2)
        assert len(features[FeatureCategory.HYDROPHOBIC]) == 2
