from prompt_builder_cli.app import app

app()
