"""
Command-line interface --- :mod:`pliscan.command_line`
======================================================

::

    pliscan receptor.pdb lig1.mol2 lig2.mol2 -o interactions.csv

"""

import argparse
import json
import textwrap
from typing import Optional

from pliscan._version import __version__
from pliscan.exceptions import PliscanError
from pliscan.interactions.base import _INTERACTIONS
from pliscan.io import CSVWriter
from pliscan.logger import logger, set_log_level
from pliscan.molecule import MoleculeKind, ligand_supplier, read_molecule
from pliscan.scanner import Scanner

INTERACTIONS_TABLE = [
    ["", "Class", "Receptor", "Ligand"],
    ["", "―" * 15, "―" * 15, "―" * 15],
    ["Hydrophobic", "Hydrophobic", "hydrophobic", "hydrophobic"],
    ["HBAcceptor", "Hydrogen bond", "donor", "acceptor"],
    ["HBDonor", "Hydrogen bond", "acceptor", "donor"],
    ["XBAcceptor", "Halogen bond", "donor", "acceptor"],
    ["XBDonor", "Halogen bond", "acceptor", "donor"],
    ["Anionic", "Ionic", "cation", "anion/aromatic"],
    ["Cationic", "Ionic", "anion/aromatic", "cation"],
    ["PiStacking", "π-stacking", "aromatic", "aromatic"],
    ["MetalAcceptor", "Metal", "metal", "chelated"],
    ["MetalDonor", "Metal", "chelated", "metal"],
]


def n_jobs_type(value: str) -> int:
    n_jobs = int(value)
    if n_jobs < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {n_jobs}")
    return n_jobs


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    description = (
        "pliscan: Protein-Ligand Interaction Scanner\n"
        "Detects non-covalent interactions between a receptor and ligands"
    )
    epilog = "Receptor in PDB format, ligands in MOL2 format."
    parser = argparse.ArgumentParser(
        prog="pliscan",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    group_input = parser.add_argument_group("INPUT arguments")
    group_input.add_argument(
        "receptor", metavar="RECEPTOR", type=str, help="Path to the receptor."
    )
    group_input.add_argument(
        "ligands", metavar="LIGAND", type=str, nargs="+", help="Path to the ligand(s)."
    )

    group_output = parser.add_argument_group("OUTPUT arguments")
    group_output.add_argument(
        "-o",
        "--output",
        metavar="fileName",
        type=str,
        default="interactions.csv",
        help="Path to the output CSV file. Default: interactions.csv",
    )
    group_output.add_argument(
        "--log",
        metavar="level",
        help="Set the level of the logger. Default: INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="INFO",
    )
    group_output.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        help="Hide the progress bar",
    )
    group_output.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"pliscan {__version__}",
        help="Show version and exit",
    )

    group_args = parser.add_argument_group("Other arguments")
    table_as_str = "\n".join(
        "{:>13} │{:>15}{:>15}{:>15}".format(*line) for line in INTERACTIONS_TABLE
    )
    group_args.add_argument(
        "--interactions",
        metavar="name",
        nargs="+",
        choices=list(_INTERACTIONS),
        default=None,
        help=textwrap.dedent(
            """Interactions to detect. They always run in the order below.
            {}\nDefault: all"""
        ).format(table_as_str),
    )
    group_args.add_argument(
        "--parameters",
        metavar="fileName",
        type=str,
        default=None,
        help=(
            "Path to a JSON file with custom parameters for the interactions, e.g.\n"
            '{"Hydrophobic": {"distance": 4.0}}'
        ),
    )
    group_args.add_argument(
        "-j",
        "--n-jobs",
        metavar="int",
        type=n_jobs_type,
        default=1,
        help="Number of processes. 0 uses all available CPU threads. Default: 1",
    )

    return parser.parse_args(argv)


def load_parameters(path: Optional[str]) -> Optional[dict]:
    """Reads interaction parameters from a JSON file"""
    if path is None:
        return None
    try:
        with open(path) as f:
            parameters = json.load(f)
    except (OSError, ValueError) as exc:
        raise PliscanError(f"Could not read parameters from {path!r}: {exc}") from exc
    return parameters  # type: ignore[no-any-return]


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    set_log_level(args.log)
    try:
        scanner = Scanner(
            interactions=args.interactions,
            parameters=load_parameters(args.parameters),
        )
        with CSVWriter(args.output) as sink:
            receptor = read_molecule(args.receptor, MoleculeKind.RECEPTOR)
            ligands = ligand_supplier(args.ligands)
            scanner.run_from_iterable(
                ligands,
                receptor,
                sink=sink,
                progress=args.progress,
                n_jobs=args.n_jobs or None,
            )
    except (PliscanError, NameError, TypeError) as exc:
        logger.error("%s", exc)
        return 1
    return 0
