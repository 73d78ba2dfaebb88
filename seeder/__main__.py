from seeder.main import cli

cli(prog_name="seed")
