"""CLI entry point: python -m crate_migrator"""

from crate_migrator.cli import main

main(prog_name="crate-migrator")
