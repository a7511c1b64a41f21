from runall.harness import cli

cli()
