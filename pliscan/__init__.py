# ruff: noqa: F401
from pliscan._version import __version__
from pliscan.features import FeatureCategory, FeatureMatchSet, find_features
from pliscan.io import CSVWriter
from pliscan.molecule import (
    Molecule,
    MoleculeKind,
    ligand_supplier,
    parse,
    read_molecule,
)
from pliscan.records import InteractionRecord
from pliscan.residue import ResidueId
from pliscan.scanner import Scanner
from pliscan.utils import to_dataframe
