"""
Base interaction classes --- :mod:`pliscan.interactions.base`
=============================================================

This module contains the base classes used to build the interactions.

Every interaction works on two molecules: ``first`` plays the role that is named by
the class (donor, cation, metal...) and ``second`` the other one. Calling an
interaction object with a receptor and a ligand passes the receptor as ``first``;
classes created with :meth:`Interaction.invert_role` swap both molecules so that the
ligand plays that role.
"""

import warnings
from collections.abc import Iterator
from itertools import product
from typing import TYPE_CHECKING, Optional

from pliscan.features import FeatureCategory
from pliscan.geometry import Point3, distance, in_range
from pliscan.interactions.utils import Ring, RingPair, iter_rings
from pliscan.logger import logger
from pliscan.records import Hit, InteractionRecord, Site
from pliscan.residue import ligand_label, receptor_label

if TYPE_CHECKING:
    from pliscan.molecule import Molecule
    from pliscan.typeshed import Angles

_INTERACTIONS: dict[str, type["Interaction"]] = {}
_BASE_INTERACTIONS: dict[str, type["Interaction"]] = {}


class Interaction:
    """Base class for interactions

    All interaction classes must inherit this class and define a :meth:`detect`
    method yielding a :class:`~pliscan.records.Hit` for each interaction found
    between two molecules.

    Attributes
    ----------
    interaction_type : str
        Label of the interaction written in the output
    """

    interaction_type: str = ""

    def __init_subclass__(cls, is_abstract: bool = False) -> None:
        super().__init_subclass__()
        name = cls.__name__
        register = _BASE_INTERACTIONS if is_abstract else _INTERACTIONS
        if not hasattr(cls, "detect"):
            raise TypeError(
                f"Can't instantiate interaction class {name} without a `detect` method."
            )
        if name in register:
            warnings.warn(
                f"The {name!r} interaction has been superseded by a "
                f"new class with id {id(cls):#x}",
                stacklevel=2,
            )
        register[name] = cls

    def __call__(
        self, receptor: "Molecule", ligand: "Molecule"
    ) -> Iterator[InteractionRecord]:
        for hit in self.detect(receptor, ligand):  # type: ignore[attr-defined]
            yield self.record(receptor, ligand, hit)

    def __repr__(self) -> str:  # pragma: no cover
        cls = self.__class__
        return f"<{cls.__module__}.{cls.__name__} at {id(self):#x}>"

    def record(
        self, receptor: "Molecule", ligand: "Molecule", hit: Hit
    ) -> InteractionRecord:
        """Labels a hit between a receptor (first site) and a ligand (second site)"""
        return InteractionRecord(
            ligand.name,
            receptor_label(receptor, hit.first.index),
            hit.first.tag,
            Point3.from_rdkit(hit.first.xyz),
            ligand_label(ligand, hit.second.index),
            hit.second.tag,
            Point3.from_rdkit(hit.second.xyz),
            self.interaction_type,
            hit.distance,
        )

    @classmethod
    def invert_role(cls, name: str, docstring: str) -> type["Interaction"]:
        """Creates a new interaction class where the role of the receptor and ligand
        have been swapped. Useful to create e.g. an acceptor class from a donor class.
        """
        cls_docstring = cls.__doc__ or "\n"
        parameters_doc = cls_docstring.split("\n", maxsplit=1)[1]
        __doc__ = f"{docstring}\n{parameters_doc}"
        inverted = type(
            name, (cls,), {"__doc__": __doc__, "__module__": cls.__module__}
        )

        def detect(
            self: "Interaction", first: "Molecule", second: "Molecule"
        ) -> Iterator[Hit]:
            for hit in super(inverted, self).detect(second, first):  # type: ignore[misc]
                yield hit.inverted()

        inverted.detect = detect  # type: ignore[attr-defined]
        return inverted


class Distance(Interaction, is_abstract=True):
    """Generic class for distance-based interactions between single atoms

    Parameters
    ----------
    first_category : pliscan.features.FeatureCategory
        Feature looked for in the first molecule
    second_category : pliscan.features.FeatureCategory
        Feature looked for in the second molecule
    distance : float
        Cutoff distance between both atoms
    """

    def __init__(
        self,
        first_category: FeatureCategory,
        second_category: FeatureCategory,
        distance: float,
    ) -> None:
        self.first_category = first_category
        self.second_category = second_category
        self.distance = distance

    def detect(self, first: "Molecule", second: "Molecule") -> Iterator[Hit]:
        first_matches = first.features[self.first_category]
        second_matches = second.features[self.second_category]
        for first_match, second_match in product(first_matches, second_matches):
            a = first.position(first_match[0])
            b = second.position(second_match[0])
            dist = distance(a, b)
            if dist <= self.distance:
                yield Hit(
                    Site(first_match[0], self.first_category.tag, a),
                    Site(second_match[0], self.second_category.tag, b),
                    dist,
                )


class BasePiStacking(Interaction, is_abstract=True):
    """Base class for Pi-Stacking interactions

    Parameters
    ----------
    distance : float
        Cutoff distance between each rings centroid
    plane_angle : tuple
        Min and max values for the angle between the ring planes
    normal_to_centroid_angle : tuple
        Min and max angles allowed between the vector normal to each ring's plane,
        and the vector between the centroid of both rings. Both rings must satisfy
        this constraint.
    """

    interaction_type = "Pi Stacking"
    subtype = "pi-stacking"

    def __init__(
        self,
        distance: float,
        plane_angle: "Angles",
        normal_to_centroid_angle: "Angles",
    ) -> None:
        self.distance = distance
        self.plane_angle = plane_angle
        self.normal_to_centroid_angle = normal_to_centroid_angle

    def matches_plane(self, pair: RingPair) -> bool:
        """Whether the angle between the ring planes corresponds to this geometry"""
        return in_range(pair.plane_angle, *self.plane_angle)

    def accepts(self, pair: RingPair) -> bool:
        """Checks the remaining constraints once the plane angle matches"""
        return pair.distance <= self.distance and all(
            in_range(angle, *self.normal_to_centroid_angle)
            for angle in pair.normal_to_centroid_angles
        )

    def detect(self, first: "Molecule", second: "Molecule") -> Iterator[Hit]:
        for pair in iter_ring_pairs(first, second):
            if self.matches_plane(pair) and self.accepts(pair):
                yield ring_pair_hit(pair)


def iter_ring_pairs(first: "Molecule", second: "Molecule") -> Iterator[RingPair]:
    """Measures every pair of rings between two molecules, skipping degenerate ones"""
    second_rings: Optional[list[Ring]] = None
    for ring_a in iter_rings(first):
        if second_rings is None:
            second_rings = list(iter_rings(second))
        for ring_b in second_rings:
            pair = RingPair.measure(ring_a, ring_b)
            if pair is not None:
                yield pair


def ring_pair_hit(pair: RingPair) -> Hit:
    return Hit(pair.first.site(), pair.second.site(), pair.distance)


def log_rejected(interaction: Interaction, reason: str, *args: object) -> None:
    logger.debug(f"{interaction.__class__.__name__}: {reason}", *args)
