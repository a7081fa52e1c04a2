"""
Inheritance analyzer for variant tables.

This module turns a variant table (one row per site, one genotype column per
sample) into GenotypeCalls records, checks them per gene with the
MendelianInheritanceChecker and writes the compatible modes back as columns.

Compound heterozygous analysis needs all records of a gene at once, so the
records are grouped into batches by gene. Rows without a gene are analyzed
on their own.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ..calls import GenotypeCalls, classify_chromosome
from ..config import get_chromosome_aliases, get_non_sample_columns, load_config
from ..exceptions import IncompatiblePedigreeError, MendelCheckError
from ..genotype_utils import parse_genotype
from ..pedigree import Pedigree
from .checker import MendelianInheritanceChecker

logger = logging.getLogger(__name__)

NO_MODE = "none"

# Mode labels of one row: (coarse modes, sub-modes)
RowModes = Tuple[List[str], List[str]]


def get_sample_columns(df: pd.DataFrame, pedigree: Pedigree, cfg: Dict[str, Any]) -> List[str]:
    """
    Return the genotype columns of a variant table.

    Every column that is not a configured annotation column holds genotypes
    and must be named after a pedigree member.

    Raises
    ------
    IncompatiblePedigreeError
        If a genotype column does not belong to the pedigree
    """
    non_sample = set(get_non_sample_columns(cfg))
    sample_columns = [col for col in df.columns if col not in non_sample]
    unknown = [col for col in sample_columns if not pedigree.has_person(col)]
    if unknown:
        raise IncompatiblePedigreeError(
            f"Variant table not compatible with pedigree {pedigree.name}", unknown
        )
    missing = [name for name in pedigree.names if name not in sample_columns]
    if missing:
        logger.info(f"No genotypes for pedigree members {', '.join(missing)}; treated as no-call")
    return sample_columns


def build_genotype_calls(
    df: pd.DataFrame, sample_columns: Sequence[str], cfg: Dict[str, Any]
) -> List[GenotypeCalls]:
    """
    Build one GenotypeCalls record per row of ``df``.

    The payload of each record is the row position within ``df``.
    """
    chrom_column = cfg["chrom_column"]
    if chrom_column not in df.columns:
        raise MendelCheckError(
            f"Required column {chrom_column} not found in variant table",
            {"columns": list(df.columns)},
        )
    aliases = get_chromosome_aliases(cfg)

    records = []
    chroms = df[chrom_column].tolist()
    genotypes = df[list(sample_columns)].itertuples(index=False, name=None)
    for pos, (chrom, row) in enumerate(zip(chroms, genotypes)):
        records.append(
            GenotypeCalls(
                classify_chromosome(chrom, aliases),
                [(sample, parse_genotype(gt)) for sample, gt in zip(sample_columns, row)],
                payload=pos,
            )
        )
    return records


def group_by_gene(df: pd.DataFrame, cfg: Dict[str, Any]) -> List[Tuple[str, List[int]]]:
    """
    Group row positions into analysis batches, in order of first appearance.

    Returns
    -------
    list of (str, list of int)
        Batch label (the gene, or "" for rows without a gene) and row positions
    """
    gene_column = cfg["gene_column"]
    if gene_column not in df.columns:
        logger.warning(
            f"Column {gene_column} not found; compound heterozygous analysis disabled"
        )
        return [("", [pos]) for pos in range(len(df))]

    batches: "OrderedDict[Any, List[int]]" = OrderedDict()
    singletons: List[Tuple[str, List[int]]] = []
    for pos, gene in enumerate(df[gene_column].tolist()):
        if pd.isna(gene) or str(gene).strip() == "":
            singletons.append(("", [pos]))
        else:
            batches.setdefault(str(gene), []).append(pos)
    return list(batches.items()) + singletons


def analyze_record_batch(
    checker: MendelianInheritanceChecker, records: Sequence[GenotypeCalls]
) -> Dict[int, RowModes]:
    """
    Check the records of one batch for all modes and sub-modes of inheritance.

    Returns
    -------
    dict
        Record payload to the abbreviations of its compatible modes and sub-modes
    """
    modes: Dict[int, List[str]] = {id(record): [] for record in records}
    sub_modes: Dict[int, List[str]] = {id(record): [] for record in records}

    for mode, compatible in checker.check_mendelian_inheritance(records).items():
        if mode.abbreviation is None:
            continue
        for record in compatible:
            modes[id(record)].append(mode.abbreviation)
    for sub_mode, compatible in checker.check_mendelian_inheritance_sub(records).items():
        if sub_mode.abbreviation is None:
            continue
        for record in compatible:
            sub_modes[id(record)].append(sub_mode.abbreviation)

    return {record.payload: (modes[id(record)], sub_modes[id(record)]) for record in records}


def _prepare_analysis(
    df: pd.DataFrame, pedigree: Pedigree, cfg: Dict[str, Any]
) -> Tuple[List[GenotypeCalls], List[Tuple[str, List[int]]]]:
    sample_columns = get_sample_columns(df, pedigree, cfg)
    records = build_genotype_calls(df, sample_columns, cfg)
    batches = group_by_gene(df, cfg)
    logger.info(
        f"Starting inheritance analysis for {len(df)} variants in {len(batches)} batches "
        f"across {len(sample_columns)} samples of pedigree {pedigree.name}"
    )
    return records, batches


def _finalize_inheritance_modes(
    df: pd.DataFrame, results: Dict[int, RowModes], cfg: Dict[str, Any]
) -> pd.DataFrame:
    """Write the mode columns for all rows of ``df`` from the per-position results."""
    modes_column = cfg["output_columns"]["modes"]
    sub_modes_column = cfg["output_columns"]["sub_modes"]

    modes, sub_modes = [], []
    for pos in range(len(df)):
        row_modes, row_sub_modes = results.get(pos, ([], []))
        modes.append(";".join(row_modes) or NO_MODE)
        sub_modes.append(";".join(row_sub_modes) or NO_MODE)
    df[modes_column] = modes
    df[sub_modes_column] = sub_modes

    if len(df):
        mode_counts = df[modes_column].value_counts()
        logger.info(f"Inheritance analysis complete. Mode distribution: {mode_counts.to_dict()}")
    return df


def analyze_inheritance(
    df: pd.DataFrame, pedigree: Pedigree, cfg: Optional[Dict[str, Any]] = None
) -> pd.DataFrame:
    """
    Annotate each variant with the modes of inheritance it is compatible with.

    Parameters
    ----------
    df : pd.DataFrame
        Variant table with a chromosome column, an optional gene column and
        one genotype column per sample (e.g. "0/1", "1|1", "./.")
    pedigree : Pedigree
        Pedigree of the samples
    cfg : dict, optional
        Configuration; the packaged defaults are used when None

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with added columns (names from ``output_columns``):
        - Inheritance_Modes: e.g. "AD;AR", or "none"
        - Inheritance_SubModes: e.g. "AR_COMP_HET", or "none"

    Raises
    ------
    IncompatiblePedigreeError
        If a genotype column does not belong to the pedigree
    """
    if cfg is None:
        cfg = load_config()
    df = df.copy()
    if df.empty:
        logger.warning("Empty DataFrame provided for inheritance analysis")
        return _finalize_inheritance_modes(df, {}, cfg)

    records, batches = _prepare_analysis(df, pedigree, cfg)
    checker = MendelianInheritanceChecker(pedigree)

    results: Dict[int, RowModes] = {}
    for gene, positions in batches:
        if len(positions) > 1:
            logger.debug(f"Analyzing gene {gene} with {len(positions)} variants")
        results.update(analyze_record_batch(checker, [records[pos] for pos in positions]))

    return _finalize_inheritance_modes(df, results, cfg)
