from bldr_saucer.cli import app

app(prog_name="bldr-saucer")
