"""Command-line interface for mendelcheck."""

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .config import load_config
from .exceptions import MendelCheckError, PedParseError
from .inheritance.parallel_analyzer import analyze_inheritance_parallel
from .ped_reader import read_ped_file
from .pedigree import Pedigree
from .version import __version__

logger = logging.getLogger("mendelcheck")

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for the mendelcheck CLI."""
    parser = argparse.ArgumentParser(
        description="mendelcheck: Annotate variants with compatible Mendelian modes of inheritance."
    )

    # General Options
    general_group = parser.add_argument_group("General Options")
    general_group.add_argument(
        "--version",
        action="version",
        version=f"mendelcheck {__version__}",
        help="Show the current version and exit",
    )
    general_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )
    general_group.add_argument(
        "--log-file", help="Path to a file to write logs to (in addition to stderr)."
    )
    general_group.add_argument(
        "-c",
        "--config",
        help="Path to configuration file",
        default=None,
    )

    # Core Input/Output
    io_group = parser.add_argument_group("Core Input/Output")
    io_group.add_argument(
        "-i",
        "--input",
        required=True,
        help="Tab-separated variant table with CHROM, GENE and one genotype column per sample",
    )
    io_group.add_argument(
        "-o",
        "--output",
        default="stdout",
        help="Output file name or 'stdout'/'-' for stdout",
    )

    # Pedigree Options
    ped_group = parser.add_argument_group("Pedigree Options")
    ped_source = ped_group.add_mutually_exclusive_group(required=True)
    ped_source.add_argument("--ped", help="PED file describing the family")
    ped_source.add_argument(
        "--sample", help="Analyze a single affected individual with this name (no PED file)"
    )
    ped_group.add_argument(
        "--pedigree-name",
        help="Pedigree to use from the PED file; required if the file holds several",
    )

    # Performance Options
    perf_group = parser.add_argument_group("Performance Options")
    perf_group.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of worker threads for the per-gene analysis (default: CPU count)",
    )
    return parser


def parse_args(args_list: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Parameters
    ----------
    args_list : list of str, optional
        Arguments to parse; ``sys.argv[1:]`` when None

    Returns
    -------
    argparse.Namespace
        Parsed arguments
    """
    parser = create_parser()
    return parser.parse_args(args_list)


def _configure_logging(log_level: str, log_file: Optional[str]) -> None:
    logger.setLevel(LOG_LEVEL_MAP[log_level])

    # If a log file is specified, add a file handler
    if log_file:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(log_file)
        fh.setLevel(LOG_LEVEL_MAP[log_level])
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(fh)
        logger.debug(f"Logging to file enabled: {log_file}")


def load_pedigree(
    ped_file: Optional[str], pedigree_name: Optional[str], sample: Optional[str]
) -> Pedigree:
    """
    Build the pedigree from a PED file or a single sample name.

    Raises
    ------
    PedParseError
        If the PED file cannot be parsed or the pedigree to use is ambiguous
    """
    if sample:
        logger.info(f"Using single-sample pedigree for {sample}")
        return Pedigree.construct_single_sample_pedigree(sample)

    contents = read_ped_file(ped_file)
    names = Pedigree.pedigree_names(contents)
    if pedigree_name is None:
        if len(names) != 1:
            raise PedParseError(
                f"PED file contains {len(names)} pedigrees ({', '.join(names)}); "
                "select one with --pedigree-name"
            )
        pedigree_name = names[0]
    pedigree = Pedigree.from_ped_file_contents(contents, pedigree_name)
    logger.info(f"Using pedigree {pedigree.name} with {pedigree.n_members} members")
    return pedigree


def read_variant_table(path: str) -> pd.DataFrame:
    """Read a tab-separated variant table, keeping every cell as a string."""
    df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False, na_values=[""])
    logger.info(f"Read {len(df)} variants with {len(df.columns)} columns from {path}")
    return df


def write_variant_table(df: pd.DataFrame, output: str) -> None:
    if output in ("stdout", "-"):
        df.to_csv(sys.stdout, sep="\t", index=False, lineterminator="\n")
    else:
        df.to_csv(output, sep="\t", index=False, lineterminator="\n")
        logger.info(f"Wrote {len(df)} variants to {output}")


def main() -> int:
    """Run main entry point for the mendelcheck CLI.

    Steps:
        1. Parse arguments.
        2. Configure logging and load config.
        3. Build the pedigree from the PED file or the single sample.
        4. Read the variant table and annotate it with compatible modes.
        5. Write the annotated table.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    args: argparse.Namespace = parse_args()
    _configure_logging(args.log_level, args.log_file)

    start_time: datetime.datetime = datetime.datetime.now()
    logger.info(f"Run started at {start_time.isoformat()}")
    logger.debug(f"CLI arguments: {args}")

    try:
        cfg: Dict[str, Any] = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1
    if args.threads is not None:
        if args.threads < 1:
            logger.error("--threads must be at least 1")
            return 1
        cfg["n_workers"] = args.threads

    try:
        pedigree = load_pedigree(args.ped, args.pedigree_name, args.sample)
        df = read_variant_table(args.input)
        result = analyze_inheritance_parallel(df, pedigree, cfg, n_workers=cfg.get("n_workers"))
        write_variant_table(result, args.output)
    except MendelCheckError as e:
        logger.error(f"Inheritance analysis failed: {e}")
        return 1
    except (FileNotFoundError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"Failed to read input: {e}")
        return 1

    logger.info(f"Run finished in {datetime.datetime.now() - start_time}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
