"""
Detecting interactions between a receptor and a ligand --- :mod:`pliscan.interactions.interactions`
===================================================================================================

All distances are in angstroms and all angles in degrees. Angles written as
``angle(a, b, c)`` are measured at vertex ``b``, see :func:`pliscan.geometry.angle`.
In parameter names such as ``DHA_angle``, the middle letter is the vertex.

"""

from collections.abc import Iterator
from itertools import product
from typing import TYPE_CHECKING, Optional

from pliscan.features import FeatureCategory
from pliscan.geometry import (
    angle,
    distance,
    in_range,
    point_plane_distance,
    segments_intersect,
)
from pliscan.interactions.base import (
    BasePiStacking,
    Distance,
    Interaction,
    iter_ring_pairs,
    log_rejected,
    ring_pair_hit,
)
from pliscan.interactions.utils import RingPair, iter_rings
from pliscan.logger import logger
from pliscan.records import Hit, Site

if TYPE_CHECKING:
    from pliscan.molecule import Molecule
    from pliscan.typeshed import Angles

__all__ = [
    "Anionic",
    "Cationic",
    "HBAcceptor",
    "HBDonor",
    "Hydrophobic",
    "MetalAcceptor",
    "MetalDonor",
    "PiStacking",
    "Sandwich",
    "TShape",
    "XBAcceptor",
    "XBDonor",
]


class Hydrophobic(Distance):
    """Hydrophobic interaction

    Parameters
    ----------
    distance : float
        Distance threshold for the interaction
    """

    interaction_type = "Hydrophobic"

    def __init__(self, distance: float = 4.5) -> None:
        super().__init__(
            first_category=FeatureCategory.HYDROPHOBIC,
            second_category=FeatureCategory.HYDROPHOBIC,
            distance=distance,
        )


class HBAcceptor(Interaction):
    """Hbond interaction between a ligand (acceptor) and a receptor (donor)

    Parameters
    ----------
    distance : float
        Distance threshold between the donor heavy atom and the acceptor
    DHA_angle : tuple
        Min and max values for the Donor-Hydrogen-Acceptor angle, measured at
        the hydrogen

    Notes
    -----
    The donor heavy atom and the acceptor are reported.
    """

    interaction_type = "Hydrogen Bond"

    def __init__(
        self, distance: float = 3.5, DHA_angle: "Angles" = (130, 180)
    ) -> None:
        self.distance = distance
        self.DHA_angle = DHA_angle

    def detect(self, first: "Molecule", second: "Molecule") -> Iterator[Hit]:
        donors = first.features[FeatureCategory.HYDROGEN_DONOR_H]
        acceptors = second.features[FeatureCategory.HYDROGEN_ACCEPTOR]
        for donor_match, acceptor_match in product(donors, acceptors):
            donor = first.position(donor_match.donor)
            hydrogen = first.position(donor_match.hydrogen)
            acceptor = second.position(acceptor_match.atom)
            dist = distance(donor, acceptor)
            if dist > self.distance:
                continue
            dha = angle(donor, hydrogen, acceptor)
            if dha is None:
                log_rejected(self, "coincident atoms for donor %d", donor_match.donor)
                continue
            if in_range(dha, *self.DHA_angle):
                yield Hit(
                    Site(
                        donor_match.donor,
                        FeatureCategory.HYDROGEN_DONOR_H.tag,
                        donor,
                    ),
                    Site(
                        acceptor_match.atom,
                        FeatureCategory.HYDROGEN_ACCEPTOR.tag,
                        acceptor,
                    ),
                    dist,
                )


HBDonor = HBAcceptor.invert_role(
    "HBDonor",
    "Hbond interaction between a ligand (donor) and a receptor (acceptor)",
)


class XBAcceptor(Interaction):
    """Halogen bonding between a ligand (acceptor) and a receptor (donor)

    Parameters
    ----------
    distance : float
        Cutoff distance between the donor and acceptor atoms
    AXD_angle : tuple
        Min and max values for the Acceptor-Halogen-Donor angle, measured at the
        halogen
    XAR_angle : tuple
        Min and max values for the Halogen-Acceptor-R angle, measured at the
        acceptor, where ``R`` is the atom bonded to the acceptor

    Notes
    -----
    The donor atom (bonded to the halogen) and the acceptor are reported.
    """

    interaction_type = "Halogen Bond"

    def __init__(
        self,
        distance: float = 3.5,
        AXD_angle: "Angles" = (130, 180),
        XAR_angle: "Angles" = (80, 140),
    ) -> None:
        self.distance = distance
        self.AXD_angle = AXD_angle
        self.XAR_angle = XAR_angle

    def detect(self, first: "Molecule", second: "Molecule") -> Iterator[Hit]:
        donors = first.features[FeatureCategory.HALOGEN_DONOR_HALOGEN]
        acceptors = second.features[FeatureCategory.HALOGEN_ACCEPTOR_ANY]
        for donor_match, acceptor_match in product(donors, acceptors):
            donor = first.position(donor_match.donor)
            halogen = first.position(donor_match.halogen)
            acceptor = second.position(acceptor_match.acceptor)
            partner = second.position(acceptor_match.partner)
            dist = distance(donor, acceptor)
            if dist > self.distance:
                continue
            axd = angle(acceptor, halogen, donor)
            xar = angle(halogen, acceptor, partner)
            if axd is None or xar is None:
                log_rejected(self, "coincident atoms for donor %d", donor_match.donor)
                continue
            if in_range(axd, *self.AXD_angle) and in_range(xar, *self.XAR_angle):
                yield Hit(
                    Site(
                        donor_match.donor,
                        FeatureCategory.HALOGEN_DONOR_HALOGEN.tag,
                        donor,
                    ),
                    Site(
                        acceptor_match.acceptor,
                        FeatureCategory.HALOGEN_ACCEPTOR_ANY.tag,
                        acceptor,
                    ),
                    dist,
                )


XBDonor = XBAcceptor.invert_role(
    "XBDonor",
    "Halogen bonding between a ligand (donor) and a receptor (acceptor)",
)


class Anionic(Interaction):
    """Ionic interaction between a ligand (anion or aromatic ring) and a receptor
    (cation)

    Cations are paired with every anion first, then with every aromatic ring.

    Parameters
    ----------
    distance : float
        Cutoff distance between the cation and the anion or ring centroid
    ring_angle : tuple
        The ring interaction is accepted when the angle between the ring normal and
        the cation, measured at the ring centroid, is outside of these bounds or
        exactly equal to one of them. The ring normal is computed from the ring
        atoms at positions 0, 1 and 2.

    Notes
    -----
    Accepting angles outside of the bounds, and on the bounds themselves, is the
    opposite of every other angle constraint. It accepts cations lying close to
    the axis normal to the ring, on either side of it.
    """

    interaction_type = "Ionic"

    def __init__(self, distance: float = 4.5, ring_angle: "Angles" = (30, 150)) -> None:
        self.distance = distance
        self.ring_angle = ring_angle

    def accepts_ring_angle(self, value: float) -> bool:
        lower, upper = self.ring_angle
        return not in_range(value, lower, upper) or value in (lower, upper)

    def detect(self, first: "Molecule", second: "Molecule") -> Iterator[Hit]:
        cations = first.features[FeatureCategory.CATION]
        if not cations:
            return
        cation_tag = FeatureCategory.CATION.tag
        for cation_match, anion_match in product(
            cations, second.features[FeatureCategory.ANION]
        ):
            cation = first.position(cation_match.atom)
            anion = second.position(anion_match.atom)
            dist = distance(cation, anion)
            if dist <= self.distance:
                yield Hit(
                    Site(cation_match.atom, cation_tag, cation),
                    Site(anion_match.atom, FeatureCategory.ANION.tag, anion),
                    dist,
                )
        rings = list(iter_rings(second))
        for cation_match, ring in product(cations, rings):
            cation = first.position(cation_match.atom)
            dist = distance(cation, ring.centroid)
            if dist > self.distance:
                continue
            ring_normal = ring.normal(0, 1, 2)
            if ring_normal is None:
                log_rejected(self, "collinear ring atoms %s", ring.match.atoms)
                continue
            value = angle(ring.centroid + ring_normal, ring.centroid, cation)
            if value is None:
                log_rejected(self, "cation %d on the ring center", cation_match.atom)
                continue
            if self.accepts_ring_angle(value):
                site = Site(cation_match.atom, cation_tag, cation)
                yield Hit(site, ring.site(), dist)


Cationic = Anionic.invert_role(
    "Cationic",
    "Ionic interaction between a ligand (cation) and a receptor (anion or aromatic "
    "ring)",
)


class Sandwich(BasePiStacking, is_abstract=True):
    """Face-to-face Pi-Stacking interaction between a ligand and a receptor

    Parameters
    ----------
    distance : float
        Cutoff distance between each rings centroid
    plane_angle : tuple
        Min and max values for the angle between the ring planes
    normal_to_centroid_angle : tuple
        Min and max angles allowed between the vector normal to each ring's plane,
        and the vector between the centroid of both rings.
    """

    subtype = "sandwich"

    def __init__(
        self,
        distance: float = 5.5,
        plane_angle: "Angles" = (0, 30),
        normal_to_centroid_angle: "Angles" = (0, 33),
    ) -> None:
        super().__init__(
            distance=distance,
            plane_angle=plane_angle,
            normal_to_centroid_angle=normal_to_centroid_angle,
        )


class TShape(BasePiStacking, is_abstract=True):
    """Edge-to-face Pi-Stacking interaction between a ligand and a receptor

    Parameters
    ----------
    distance : float
        Cutoff distance between each rings centroid
    plane_angle : tuple
        Min and max values for the angle between the ring planes
    normal_to_centroid_angle : tuple
        Min and max angles allowed between the vector normal to each ring's plane,
        and the vector between the centroid of both rings.

    Notes
    -----
    In addition to the angles, the centroid of the second ring is projected on the
    plane of the first ring (defined by its atoms at positions 1, 2 and 3), and the
    segment between this projection and the first ring's centroid must not cross
    any edge of the first ring.
    """

    subtype = "T-shape"

    def __init__(
        self,
        distance: float = 6.5,
        plane_angle: "Angles" = (50, 90),
        normal_to_centroid_angle: "Angles" = (0, 30),
    ) -> None:
        super().__init__(
            distance=distance,
            plane_angle=plane_angle,
            normal_to_centroid_angle=normal_to_centroid_angle,
        )

    def accepts(self, pair: RingPair) -> bool:
        return super().accepts(pair) and self.count_intersections(pair) == 0

    @staticmethod
    def count_intersections(pair: RingPair) -> Optional[int]:
        """Number of edges of the first ring crossed by the segment between its
        centroid and the projection of the second ring's centroid on its plane.
        ``None`` if the first ring's plane is degenerate."""
        points = pair.first.points
        plane_dist = point_plane_distance(
            points[1], points[2], points[3], pair.second.centroid
        )
        if plane_dist < 0:
            return None
        normal_a = pair.normals[0]
        sign = -1 if pair.centroids_vector.DotProduct(normal_a) > 0 else 1
        projection = pair.second.centroid + normal_a * (plane_dist * sign)
        n_points = len(points)
        return sum(
            segments_intersect(
                projection,
                pair.first.centroid,
                points[k],
                points[(k + 1) % n_points],
            )
            for k in range(n_points)
        )


class PiStacking(Interaction):
    """Pi-Stacking interaction between a ligand and a receptor

    The angle between the ring planes decides which geometry is checked: sandwich
    first, then T-shape. Both are reported as ``Pi Stacking``.

    Parameters
    ----------
    sandwich_kwargs : dict
        Parameters to pass to the underlying :class:`Sandwich` class
    tshape_kwargs : dict
        Parameters to pass to the underlying :class:`TShape` class
    """

    interaction_type = "Pi Stacking"

    def __init__(
        self,
        sandwich_kwargs: Optional[dict] = None,
        tshape_kwargs: Optional[dict] = None,
    ) -> None:
        self.sandwich = Sandwich(**sandwich_kwargs or {})
        self.tshape = TShape(**tshape_kwargs or {})

    def detect(self, first: "Molecule", second: "Molecule") -> Iterator[Hit]:
        for pair in iter_ring_pairs(first, second):
            for stacking in (self.sandwich, self.tshape):
                if stacking.matches_plane(pair):
                    if stacking.accepts(pair):
                        logger.debug(
                            "Pi Stacking (%s) between rings %s and %s",
                            stacking.subtype,
                            pair.first.match.atoms,
                            pair.second.match.atoms,
                        )
                        yield ring_pair_hit(pair)
                    break


class MetalAcceptor(Distance):
    """Metal complexation interaction between a ligand (chelated) and a receptor
    (metal)

    Parameters
    ----------
    distance : float
        Cutoff distance
    """

    interaction_type = "Metal"

    def __init__(self, distance: float = 2.8) -> None:
        super().__init__(
            first_category=FeatureCategory.METAL,
            second_category=FeatureCategory.CHELATED,
            distance=distance,
        )


MetalDonor = MetalAcceptor.invert_role(
    "MetalDonor",
    "Metal complexation interaction between a ligand (metal) and a receptor (chelated)",
)
