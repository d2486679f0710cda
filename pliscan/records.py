"""
Interaction records --- :mod:`pliscan.records`
==============================================

Results produced by the interaction classes: a :class:`Hit` is the raw geometric
result of a detection between two molecules, an :class:`InteractionRecord` is the
final, labelled row written to the output.
"""

from typing import TYPE_CHECKING, Any, NamedTuple

from pliscan.geometry import Point3
from pliscan.residue import AtomLabel

if TYPE_CHECKING:
    from rdkit.Geometry import Point3D

CSV_HEADER = (
    "LIGAND_NAME",
    "PROTEIN_ATOM_ID",
    "PROTEIN_PATTERN",
    "PROTEIN_X",
    "PROTEIN_Y",
    "PROTEIN_Z",
    "LIGAND_ATOM_ID",
    "LIGAND_PATTERN",
    "LIGAND_X",
    "LIGAND_Y",
    "LIGAND_Z",
    "INTERACTION_TYPE",
    "INTERACTION_DISTANCE",
)


def format_number(value: float) -> str:
    """Shortest general representation with 6 significant digits"""
    return format(value, "g")


class Site(NamedTuple):
    """One side of an interaction

    Attributes
    ----------
    index : int
        Index of the atom used to label the site. For aromatic rings, the last atom
        of the ring.
    tag : str
        Feature tag of the site, e.g. ``"Hydrogen donor"``
    xyz : rdkit.Geometry.Point3D
        Coordinates reported for the site. For aromatic rings, the ring centroid.
    """

    index: int
    tag: str
    xyz: "Point3D"


class Hit(NamedTuple):
    """Interaction detected between the ``first`` and ``second`` molecules given to
    :meth:`pliscan.interactions.base.Interaction.detect`"""

    first: Site
    second: Site
    distance: float

    def inverted(self) -> "Hit":
        return Hit(self.second, self.first, self.distance)


class InteractionRecord(NamedTuple):
    """An interaction between a receptor and a ligand"""

    ligand_name: str
    receptor_label: AtomLabel
    receptor_tag: str
    receptor_xyz: Point3
    ligand_label: AtomLabel
    ligand_tag: str
    ligand_xyz: Point3
    interaction_type: str
    distance: float

    def as_row(self) -> list[str]:
        """Fields of the record, formatted as in the CSV output"""
        return [
            self.ligand_name,
            str(self.receptor_label),
            self.receptor_tag,
            *map(format_number, self.receptor_xyz),
            str(self.ligand_label),
            self.ligand_tag,
            *map(format_number, self.ligand_xyz),
            self.interaction_type,
            format_number(self.distance),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Unformatted fields of the record, indexed by CSV column name"""
        values = [
            self.ligand_name,
            str(self.receptor_label),
            self.receptor_tag,
            *self.receptor_xyz,
            str(self.ligand_label),
            self.ligand_tag,
            *self.ligand_xyz,
            self.interaction_type,
            self.distance,
        ]
        return dict(zip(CSV_HEADER, values))
