"""Command-line interface for Appforge.

The typer application lives in appforge.cli.app; importing it registers
every command.
"""
