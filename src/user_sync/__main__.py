from user_sync.main import cli

cli()
