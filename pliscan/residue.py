"""
Atom labels --- :mod:`pliscan.residue`
======================================

Builds the human-readable identifiers written for each atom involved in an
interaction.
"""

from typing import TYPE_CHECKING, NamedTuple, Optional

from pliscan.logger import logger

if TYPE_CHECKING:
    from rdkit import Chem


class ResidueId(NamedTuple):
    """Residue information of a receptor atom, read from its PDB record"""

    chain: str
    name: str
    number: int
    atom_name: str

    def __str__(self) -> str:
        return f"{self.chain}.{self.name}{self.number}.{self.atom_name}"

    @classmethod
    def from_atom(cls, atom: "Chem.Atom") -> Optional["ResidueId"]:
        """Creates a ResidueId from an RDKit atom, or returns ``None`` if the atom
        doesn't have an :class:`~rdkit.Chem.rdchem.AtomPDBResidueInfo`"""
        mi = atom.GetPDBResidueInfo()
        if mi is None:
            return None
        return cls(
            mi.GetChainId(),
            mi.GetResidueName().strip(),
            mi.GetResidueNumber(),
            mi.GetName().strip(),
        )


class AtomLabel(NamedTuple):
    """Label of an atom

    Attributes
    ----------
    text : str
        ``<chain>.<resname><resnumber>.<atomname>`` for receptor atoms with residue
        information, ``<index>(<element>)`` otherwise
    has_metadata : bool
        ``False`` when a receptor atom was missing its residue information
    """

    text: str
    has_metadata: bool = True

    def __str__(self) -> str:
        return self.text


def _index_label(atom: "Chem.Atom") -> str:
    return f"{atom.GetIdx()}({atom.GetSymbol()})"


def receptor_label(mol: "Chem.Mol", index: int) -> AtomLabel:
    """Label for an atom of the receptor

    Falls back to ``<index>(<element>)`` with ``has_metadata=False`` and logs a
    warning when the atom has no residue information.
    """
    atom = mol.GetAtomWithIdx(index)
    resid = ResidueId.from_atom(atom)
    if resid is None:
        logger.warning(
            "Receptor atom %d (%s) has no residue information",
            index,
            atom.GetSymbol(),
        )
        return AtomLabel(_index_label(atom), has_metadata=False)
    return AtomLabel(str(resid))


def ligand_label(mol: "Chem.Mol", index: int) -> AtomLabel:
    """Label for an atom of a ligand"""
    return AtomLabel(_index_label(mol.GetAtomWithIdx(index)))
