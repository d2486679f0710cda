"""
Chemical features --- :mod:`pliscan.features`
=============================================

Feature categories, the SMARTS catalog used to locate them, and the
:class:`FeatureMatchSet` storing every match found in a molecule.

Each category has its own match type so that the meaning of every atom in a
match is explicit:

.. code-block:: text

    Hydrophobic, HydrogenAcceptor, Anion, Cation, Metal, Chelated -> AtomMatch(atom)
    HydrogenDonorH                                               -> HydrogenDonorMatch(donor, hydrogen)
    HalogenDonorHalogen                                          -> HalogenDonorMatch(donor, halogen)
    HalogenAcceptorAny                                           -> HalogenAcceptorMatch(acceptor, partner)
    AromaticRing                                                 -> RingMatch(atoms)

"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Union

from rdkit.Chem import MolFromSmarts

from pliscan.logger import logger

if TYPE_CHECKING:
    from rdkit import Chem


class AtomMatch(NamedTuple):
    atom: int


class HydrogenDonorMatch(NamedTuple):
    donor: int
    hydrogen: int


class HalogenDonorMatch(NamedTuple):
    donor: int
    halogen: int


class HalogenAcceptorMatch(NamedTuple):
    acceptor: int
    partner: int


class RingMatch(NamedTuple):
    """Ring atoms, in the order of the SMARTS template"""

    atoms: tuple[int, ...]


FeatureMatch = Union[
    AtomMatch, HydrogenDonorMatch, HalogenDonorMatch, HalogenAcceptorMatch, RingMatch
]
_MATCH_TYPES = (
    AtomMatch,
    HydrogenDonorMatch,
    HalogenDonorMatch,
    HalogenAcceptorMatch,
    RingMatch,
)


class FeatureCategory(Enum):
    """Closed set of chemical feature categories

    The value of each member is ``(ordinal, tag)``: the ordinal indexes the storage
    of a :class:`FeatureMatchSet` and the tag is the label written in the output.
    """

    HYDROPHOBIC = (0, "Hydrophobic")
    HYDROGEN_DONOR_H = (1, "Hydrogen donor")
    HYDROGEN_ACCEPTOR = (2, "Hydrogen acceptor")
    HALOGEN_DONOR_HALOGEN = (3, "Halogen donor")
    HALOGEN_ACCEPTOR_ANY = (4, "Halogen acceptor")
    ANION = (5, "Anion")
    CATION = (6, "Cation")
    AROMATIC_RING = (7, "Aromatic_ring")
    METAL = (8, "Metal")
    CHELATED = (9, "Chelated")

    @property
    def ordinal(self) -> int:
        return self.value[0]

    @property
    def tag(self) -> str:
        return self.value[1]

    def make_match(self, indices: Sequence[int]) -> FeatureMatch:
        """Converts the atom indices of a substructure match to the match type of
        this category."""
        if self is FeatureCategory.HYDROGEN_DONOR_H:
            return HydrogenDonorMatch(indices[0], indices[1])
        if self is FeatureCategory.HALOGEN_DONOR_HALOGEN:
            return HalogenDonorMatch(indices[0], indices[1])
        if self is FeatureCategory.HALOGEN_ACCEPTOR_ANY:
            return HalogenAcceptorMatch(indices[0], indices[1])
        if self is FeatureCategory.AROMATIC_RING:
            if len(indices) not in (5, 6):
                raise ValueError(
                    f"Aromatic rings must have 5 or 6 atoms, got {len(indices)}"
                )
            return RingMatch(tuple(indices))
        return AtomMatch(indices[0])


# The two aromatic ring templates are accumulated in this order
SMARTS_PATTERNS: tuple[tuple[FeatureCategory, str], ...] = (
    (
        FeatureCategory.HYDROPHOBIC,
        "[c,s,Br,I,S&H0&v2,$([D3,D4;#6])&!$([#6]~[#7,#8,#9])&!$([#6X4H0]);+0]",
    ),
    (
        FeatureCategory.HYDROGEN_DONOR_H,
        "[$([O,S;+0]),$([N;v3,v4&+1]),n+0]-[H]",
    ),
    (
        FeatureCategory.HYDROGEN_ACCEPTOR,
        "[#7&!$([nX3])&!$([NX3]-*=[O,N,P,S])&!$([NX3]-[a])&!$([Nv4&+1])"
        ",O&!$([OX2](C)C=O)&!$(O(~a)~a)&!$(O=N-*)&!$([O-]-N=O)"
        ",o+0"
        ",F&$(F-[#6])&!$(F-[#6][F,Cl,Br,I])]",
    ),
    (
        FeatureCategory.HALOGEN_DONOR_HALOGEN,
        "[#6,#7,Si,F,Cl,Br,I]-[Cl,Br,I,At]",
    ),
    (
        FeatureCategory.HALOGEN_ACCEPTOR_ANY,
        "[#7,#8,P,S,Se,Te,a;!+{1-}][*]",
    ),
    (
        FeatureCategory.ANION,
        "[-{1-},$(O=[C,S,P]-[O-])]",
    ),
    (
        FeatureCategory.CATION,
        "[+{1-},$([NX3&!$([NX3]-O)]-[C]=[NX3+])]",
    ),
    (
        FeatureCategory.AROMATIC_RING,
        "[a;r5]1:[a;r5]:[a;r5]:[a;r5]:[a;r5]:1",
    ),
    (
        FeatureCategory.AROMATIC_RING,
        "[a;r6]1:[a;r6]:[a;r6]:[a;r6]:[a;r6]:[a;r6]:1",
    ),
    (
        FeatureCategory.METAL,
        "[Ca,Cd,Co,Cu,Fe,Mg,Mn,Ni,Zn]",
    ),
    (
        FeatureCategory.CHELATED,
        "[O,#7&!$([nX3])&!$([NX3]-*=[!#6])&!$([NX3]-[a])&!$([NX4]),-{1-};!+{1-}]",
    ),
)

_QUERIES: list[tuple[FeatureCategory, "Chem.Mol"]] = []


def _get_queries() -> list[tuple[FeatureCategory, "Chem.Mol"]]:
    if not _QUERIES:
        for category, smarts in SMARTS_PATTERNS:
            query = MolFromSmarts(smarts)
            if query is None:  # pragma: no cover
                raise ValueError(f"Invalid SMARTS for {category.name}: {smarts!r}")
            _QUERIES.append((category, query))
    return _QUERIES


class FeatureMatchSet(Mapping[FeatureCategory, tuple[FeatureMatch, ...]]):
    """Every feature match found in a single molecule

    Behaves like a read-only dictionary indexed by :class:`FeatureCategory` where all
    categories can be accessed: a category without any match maps to an empty tuple,
    and ``category in features`` is only true if there is at least one match.

    Parameters
    ----------
    matches : dict, optional
        Mapping of category to an iterable of matches (or of raw atom indices tuples)

    Examples
    --------
    ::

        >>> features = FeatureMatchSet.from_mol(mol)
        >>> features[FeatureCategory.HYDROGEN_DONOR_H]
        (HydrogenDonorMatch(donor=3, hydrogen=12),)
        >>> FeatureCategory.METAL in features
        False

    """

    __slots__ = ("_matches",)

    def __init__(
        self,
        matches: Mapping[FeatureCategory, Iterable[Sequence[int]]] | None = None,
    ) -> None:
        self._matches: list[tuple[FeatureMatch, ...]] = [() for _ in FeatureCategory]
        for category, category_matches in (matches or {}).items():
            self._matches[category.ordinal] = tuple(
                m if isinstance(m, _MATCH_TYPES) else category.make_match(m)
                for m in category_matches
            )

    @classmethod
    def from_mol(cls, mol: "Chem.Mol", max_matches: int = 1000) -> "FeatureMatchSet":
        """Runs every SMARTS query of the catalog on a molecule

        Parameters
        ----------
        mol : rdkit.Chem.rdchem.Mol
            A sanitized molecule
        max_matches : int
            Maximum number of matches per SMARTS query
        """
        found: dict[FeatureCategory, list[FeatureMatch]] = {}
        for category, query in _get_queries():
            hits = mol.GetSubstructMatches(query, maxMatches=max_matches)
            if hits:
                found.setdefault(category, []).extend(
                    category.make_match(hit) for hit in hits
                )
        features = cls(found)
        logger.debug(
            "Features found: %s",
            ", ".join(f"{c.name}={len(features[c])}" for c in FeatureCategory),
        )
        return features

    def __getitem__(self, category: FeatureCategory) -> tuple[FeatureMatch, ...]:
        return self._matches[category.ordinal]

    def __iter__(self) -> Iterator[FeatureCategory]:
        return iter(FeatureCategory)

    def __len__(self) -> int:
        return len(self._matches)

    def __contains__(self, category: object) -> bool:
        if isinstance(category, FeatureCategory):
            return bool(self._matches[category.ordinal])
        return False

    def __repr__(self) -> str:  # pragma: no cover
        name = ".".join([self.__class__.__module__, self.__class__.__name__])
        counts = {c.name: len(m) for c, m in zip(FeatureCategory, self._matches) if m}
        return f"<{name} {counts} at {id(self):#x}>"

    @property
    def n_matches(self) -> int:
        return sum(len(m) for m in self._matches)


def find_features(mol: "Chem.Mol") -> FeatureMatchSet:
    """Shortcut for :meth:`FeatureMatchSet.from_mol`"""
    return FeatureMatchSet.from_mol(mol)
