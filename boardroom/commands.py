import click

from boardroom.services.lifecycle import check_expired_deadlines


def register_commands(app):
    @app.cli.command("check-voting-deadlines")
    def check_voting_deadlines():
        """Complete every vote whose deadline has passed."""
        processed = check_expired_deadlines()
        if not processed:
            click.echo("No expired votes.")
            return
        for entry in processed:
            click.echo(f"{entry['kind']} {entry['id']}: {entry['reason']} -> {entry['status']}")
