"""
Terminal reporting: plain ASCII formatters used by the CLI commands.

Modules
-------
formatters : format_ranking_table() + format_safety_report() +
             format_cost_comparison(): strings for ``typer.echo()``.
"""
