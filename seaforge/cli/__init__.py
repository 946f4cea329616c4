"""Seaforge CLI — Typer-based command-line interface.

``seaforge [ARGS...]`` builds the packaged executable if needed and runs it,
forwarding every argument verbatim. Diagnostics use Rich.
"""
