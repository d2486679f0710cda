# ruff: noqa: F401
from pliscan.interactions.base import BasePiStacking, Distance, Interaction
from pliscan.interactions.interactions import (
    Anionic,
    Cationic,
    HBAcceptor,
    HBDonor,
    Hydrophobic,
    MetalAcceptor,
    MetalDonor,
    PiStacking,
    Sandwich,
    TShape,
    XBAcceptor,
    XBDonor,
)
