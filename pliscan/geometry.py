"""
Geometric primitives --- :mod:`pliscan.geometry`
================================================

Distances, angles and planes used by the interaction classifiers. Points are
:class:`rdkit.Geometry.Point3D` objects, as returned by
:meth:`rdkit.Chem.Conformer.GetAtomPosition`.

Functions that cannot produce a meaningful value for degenerate input
(coincident points, collinear points, null vectors) return ``None`` instead of a
number, except :func:`point_plane_distance` which returns ``-1``.
"""

from collections.abc import Iterable, Sequence
from math import degrees
from typing import NamedTuple

import numpy as np
from rdkit.Geometry import Point3D

EPSILON = 1e-10


class Point3(NamedTuple):
    """Immutable coordinates of a reported interaction site"""

    x: float
    y: float
    z: float

    @classmethod
    def from_rdkit(cls, point: Point3D) -> "Point3":
        return cls(point.x, point.y, point.z)

    def to_rdkit(self) -> Point3D:
        return Point3D(self.x, self.y, self.z)


def distance(p: Point3D, q: Point3D) -> float:
    """Euclidean distance between two points"""
    return p.Distance(q)


def distance_2d(p: Sequence[float], q: Sequence[float]) -> float:
    """Euclidean distance between two points of the plane"""
    return float(np.linalg.norm(np.subtract(p[:2], q[:2])))


def angle(a: Point3D, b: Point3D, c: Point3D) -> float | None:
    """Angle at vertex ``b`` of the triangle ``a-b-c``, in degrees

    Returns ``None`` when two of the points coincide.
    """
    ba = a - b
    bc = c - b
    if ba.Length() < EPSILON or bc.Length() < EPSILON or a.Distance(c) < EPSILON:
        return None
    return degrees(ba.AngleTo(bc))


def vector_angle(u: Point3D, v: Point3D) -> float | None:
    """Angle between the lines carrying ``u`` and ``v``, in degrees

    The result is always between 0 and 90, which is what comparing ring planes
    needs. Returns ``None`` for a null vector.
    """
    if u.Length() * v.Length() < EPSILON:
        return None
    value = degrees(u.AngleTo(v))
    return min(value, 180 - value)


def centroid(points: Iterable[Point3D]) -> Point3D:
    """Arithmetic mean of a non-empty sequence of points"""
    coordinates = np.array([list(p) for p in points], dtype=np.float64)
    if coordinates.size == 0:
        raise ValueError("Cannot compute the centroid of an empty sequence")
    return Point3D(*np.mean(coordinates, axis=0))


def normal(p1: Point3D, p2: Point3D, p3: Point3D) -> Point3D | None:
    """Unit vector normal to the plane going through three points

    Returns ``None`` if the points are collinear.
    """
    vector = (p2 - p1).CrossProduct(p3 - p1)
    if vector.Length() < EPSILON:
        return None
    vector.Normalize()
    return vector


def point_plane_distance(p1: Point3D, p2: Point3D, p3: Point3D, q: Point3D) -> float:
    """Distance between ``q`` and the plane going through ``p1``, ``p2`` and ``p3``

    Returns ``-1`` if the three points do not define a plane.
    """
    plane_normal = normal(p1, p2, p3)
    if plane_normal is None:
        return -1
    return abs(plane_normal.DotProduct(q - p1))


_AXES_PAIRS = ([0, 1], [0, 2], [1, 2])


def segments_intersect(a1: Point3D, b1: Point3D, a2: Point3D, b2: Point3D) -> bool:
    """Whether the segments ``a1-b1`` and ``a2-b2`` intersect

    Both segments must lie in the same plane. The parametric equation
    ``a1 + t (b1 - a1) = a2 + s (b2 - a2)`` is solved on the pair of coordinate
    axes giving the best conditioned 2x2 system. Parallel or degenerate segments
    never intersect.
    """
    d1 = np.array(list(b1 - a1))
    d2 = np.array(list(b2 - a2))
    r = np.array(list(a2 - a1))
    systems = [np.array([d1[axes], -d2[axes]]).T for axes in _AXES_PAIRS]
    determinants = [abs(np.linalg.det(A)) for A in systems]
    best = int(np.argmax(determinants))
    if determinants[best] < EPSILON:
        return False
    t, s = np.linalg.solve(systems[best], r[_AXES_PAIRS[best]])
    return 0 <= t <= 1 and 0 <= s <= 1


def in_range(value: float, lower: float, upper: float) -> bool:
    """Inclusive bounds check"""
    return lower <= value <= upper
