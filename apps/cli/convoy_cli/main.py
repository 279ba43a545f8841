import typer
from convoy_cli.commands import config_cmd, services_cmd

app = typer.Typer(
    help="Convoy CLI",
    no_args_is_help=True,
    invoke_without_command=False,
    add_completion=False
)


@app.callback()
def callback():
    """Convoy CLI - Manage the data store, proxy and automation worker."""
    pass


app.command(name="start")(services_cmd.start)
app.command(name="stop")(services_cmd.stop)
app.command(name="restart")(services_cmd.restart)
app.command(name="status")(services_cmd.status)
app.command(name="health")(services_cmd.health)
app.command(name="logs")(services_cmd.logs)
app.command(name="config")(config_cmd.config)


def main():
    app()


if __name__ == "__main__":
    main()
