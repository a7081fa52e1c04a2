"""
Tests for CLI module.

This file contains tests ensuring the CLI runs end to end on small variant
tables and reports errors through its exit code.
"""

import json
import logging
import subprocess
from unittest.mock import patch

import pandas as pd
import pytest

from mendelcheck.cli import create_parser, main

VARIANTS = (
    "CHROM\tPOS\tGENE\tfather\tmother\tchild\n"
    "chr1\t1000\tGENE1\t0/1\t0/0\t0/1\n"
    "chr1\t1500\tGENE1\t0/0\t0/1\t0/1\n"
    "chr2\t2000\tGENE2\t0/0\t0/0\t0/1\n"
    "chr3\t3000\t\t0/1\t0/0\t0/1\n"
)


@pytest.fixture(autouse=True)
def restore_logger():
    """Remove handlers and levels the CLI installs on the package logger."""
    cli_logger = logging.getLogger("mendelcheck")
    handlers = list(cli_logger.handlers)
    level = cli_logger.level
    yield
    for handler in cli_logger.handlers:
        if handler not in handlers:
            cli_logger.removeHandler(handler)
            handler.close()
    cli_logger.setLevel(level)


@pytest.fixture
def variants_file(tmp_path):
    path = tmp_path / "variants.tsv"
    path.write_text(VARIANTS)
    return path


def run_main(argv):
    with patch("sys.argv", ["mendelcheck"] + [str(arg) for arg in argv]):
        return main()


def read_output(path):
    return pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)


def test_cli_help():
    """Test that the CLI help message can be displayed."""
    cmd = ["python", "-m", "mendelcheck.cli", "--help"]
    result = subprocess.run(cmd, capture_output=True, text=True)
    assert result.returncode == 0
    assert "usage:" in result.stdout
    assert "--pedigree-name" in result.stdout


def test_ped_and_sample_are_exclusive():
    parser = create_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["-i", "in.tsv", "--ped", "fam.ped", "--sample", "S1"])
    with pytest.raises(SystemExit):
        parser.parse_args(["-i", "in.tsv"])


class TestMain:
    """Run the CLI on small inputs."""

    def test_trio(self, tmp_path, variants_file, trio_ped_file):
        output = tmp_path / "out.tsv"
        assert run_main(["-i", variants_file, "--ped", trio_ped_file, "-o", output]) == 0

        df = read_output(output)
        assert df["Inheritance_Modes"].tolist() == ["AR", "AR", "AD", "none"]
        assert df["Inheritance_SubModes"].tolist() == [
            "AR_COMP_HET",
            "AR_COMP_HET",
            "AD",
            "none",
        ]
        assert df["GENE"].tolist() == ["GENE1", "GENE1", "GENE2", ""]

    def test_threads(self, tmp_path, variants_file, trio_ped_file):
        output = tmp_path / "out.tsv"
        argv = ["-i", variants_file, "--ped", trio_ped_file, "-o", output, "--threads", 2]
        assert run_main(argv) == 0
        assert read_output(output)["Inheritance_Modes"].tolist()[2] == "AD"

    def test_stdout(self, variants_file, trio_ped_file, capsys):
        assert run_main(["-i", variants_file, "--ped", trio_ped_file, "-o", "-"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].endswith("Inheritance_Modes\tInheritance_SubModes")
        assert len(lines) == 5

    def test_single_sample(self, tmp_path):
        variants = tmp_path / "single.tsv"
        variants.write_text("CHROM\tGENE\tS1\n1\tGENE1\t0/1\n1\tGENE1\t0/1\nX\tGENE2\t1/1\n")
        output = tmp_path / "out.tsv"

        assert run_main(["-i", variants, "--sample", "S1", "-o", output]) == 0
        assert read_output(output)["Inheritance_Modes"].tolist() == ["AD;AR", "AD;AR", "XR;XD"]

    def test_pedigree_name_required(self, tmp_path, variants_file, trio_ped_text, caplog):
        ped = tmp_path / "two.ped"
        ped.write_text(trio_ped_text + "FAM2\tother\t0\t0\t2\t2\n")
        output = tmp_path / "out.tsv"

        assert run_main(["-i", variants_file, "--ped", ped, "-o", output]) == 1
        assert "--pedigree-name" in caplog.text
        assert not output.exists()

        argv = ["-i", variants_file, "--ped", ped, "--pedigree-name", "FAM1", "-o", output]
        assert run_main(argv) == 0
        assert output.exists()

    def test_unknown_sample_column(self, tmp_path, trio_ped_file, caplog):
        variants = tmp_path / "variants.tsv"
        variants.write_text("CHROM\tGENE\tchild\tcousin\n1\tGENE1\t0/1\t0/0\n")

        assert run_main(["-i", variants, "--ped", trio_ped_file, "-o", tmp_path / "o.tsv"]) == 1
        assert "unknown samples cousin" in caplog.text

    def test_missing_input(self, tmp_path, trio_ped_file):
        argv = ["-i", tmp_path / "missing.tsv", "--ped", trio_ped_file, "-o", tmp_path / "o.tsv"]
        assert run_main(argv) == 1

    def test_invalid_threads(self, tmp_path, variants_file, trio_ped_file):
        argv = ["-i", variants_file, "--ped", trio_ped_file, "--threads", 0]
        assert run_main(argv) == 1

    def test_config_file(self, tmp_path, variants_file, trio_ped_file):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"output_columns": {"modes": "MOI", "sub_modes": "SUB"}}))
        output = tmp_path / "out.tsv"

        argv = ["-i", variants_file, "--ped", trio_ped_file, "-c", config_file, "-o", output]
        assert run_main(argv) == 0
        assert read_output(output)["MOI"].tolist()[2] == "AD"

    def test_missing_config_file(self, tmp_path, variants_file, trio_ped_file):
        argv = ["-i", variants_file, "--ped", trio_ped_file, "-c", tmp_path / "missing.json"]
        assert run_main(argv) == 1

    def test_log_file(self, tmp_path, variants_file, trio_ped_file):
        log_file = tmp_path / "logs" / "run.log"
        argv = ["-i", variants_file, "--ped", trio_ped_file, "-o", tmp_path / "out.tsv"]
        argv += ["--log-file", log_file, "--log-level", "DEBUG"]
        assert run_main(argv) == 0
        assert "Run finished" in log_file.read_text()
