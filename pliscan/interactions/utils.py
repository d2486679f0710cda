"""
Utility functions for interactions --- :mod:`pliscan.interactions.utils`
========================================================================

This module contains some utilities used by the interaction classes.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING, NamedTuple, Optional

from pliscan.features import FeatureCategory, RingMatch
from pliscan.geometry import centroid, normal, vector_angle
from pliscan.logger import logger
from pliscan.records import Site

if TYPE_CHECKING:
    from rdkit.Geometry import Point3D

    from pliscan.molecule import Molecule


class Ring(NamedTuple):
    """Coordinates of an aromatic ring, in the order of its SMARTS match

    Attributes
    ----------
    match : pliscan.features.RingMatch
        Indices of the ring atoms
    points : list
        Positions of the ring atoms
    centroid : rdkit.Geometry.Point3D
        Center of the ring
    """

    match: RingMatch
    points: list["Point3D"]
    centroid: "Point3D"

    @classmethod
    def from_match(cls, mol: "Molecule", match: RingMatch) -> "Ring":
        points = mol.positions(match.atoms)
        return cls(match, points, centroid(points))

    def normal(self, i: int, j: int, k: int) -> Optional["Point3D"]:
        """Normal vector of the plane going through the ring atoms at positions
        ``i``, ``j`` and ``k`` of the match. ``None`` if they are collinear."""
        return normal(self.points[i], self.points[j], self.points[k])

    def site(self) -> Site:
        """The ring is reported at its centroid and labelled with its last atom"""
        return Site(
            self.match.atoms[-1], FeatureCategory.AROMATIC_RING.tag, self.centroid
        )


def iter_rings(mol: "Molecule") -> Iterator[Ring]:
    """Rings of a molecule, 5-membered first"""
    for match in mol.features[FeatureCategory.AROMATIC_RING]:
        yield Ring.from_match(mol, match)  # type: ignore[arg-type]


class RingPair(NamedTuple):
    """Measures between two aromatic rings used by the pi-stacking classes

    Attributes
    ----------
    first, second : Ring
        The two rings
    distance : float
        Distance between both centroids
    normals : tuple
        Normal vector of each ring, from atoms at positions 0, 2 and 3
    plane_angle : float
        Angle between both ring planes, in degrees (0 to 90)
    normal_to_centroid_angles : tuple
        Angle between each ring's normal and the centroid-to-centroid vector, in
        degrees (0 to 90)
    """

    first: Ring
    second: Ring
    distance: float
    normals: tuple["Point3D", "Point3D"]
    plane_angle: float
    normal_to_centroid_angles: tuple[float, float]

    @property
    def centroids_vector(self) -> "Point3D":
        return self.second.centroid - self.first.centroid

    @classmethod
    def measure(cls, first: Ring, second: Ring) -> Optional["RingPair"]:
        """Measures distances and angles between two rings, or returns ``None`` when
        the geometry is degenerate (collinear ring atoms, superimposed centroids)"""
        normal_a = first.normal(0, 2, 3)
        normal_b = second.normal(0, 2, 3)
        if normal_a is None or normal_b is None:
            logger.debug("Skipping ring pair: collinear ring atoms")
            return None
        plane_angle = vector_angle(normal_a, normal_b)
        centroids_vector = second.centroid - first.centroid
        angle_a = vector_angle(centroids_vector, normal_a)
        angle_b = vector_angle(centroids_vector, normal_b)
        if plane_angle is None or angle_a is None or angle_b is None:
            logger.debug("Skipping ring pair: superimposed centroids")
            return None
        return cls(
            first,
            second,
            centroids_vector.Length(),
            (normal_a, normal_b),
            plane_angle,
            (angle_a, angle_b),
        )
