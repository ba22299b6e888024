from mediaforge.cli.main import cli

cli()
