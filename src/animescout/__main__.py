from animescout.cli.main import run

run()
