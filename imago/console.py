"""Coloured status lines printed around a generation run."""

from pathlib import Path

import click


class Console:
    """Prints the status lines of a generation run."""

    def __init__(self, color: bool | None = None):
        # None lets click decide based on whether stdout is a terminal.
        self.color = color

    def generating(self, prompt: str) -> None:
        """Announce the prompt being generated."""
        click.echo(
            click.style("🎨 Generating:", fg="blue", bold=True) + " " + prompt,
            color=self.color,
        )

    def success(self, path: Path) -> None:
        """Report where the image was saved."""
        click.echo(
            click.style("✅ Success!", fg="green", bold=True) + " Saved to:",
            color=self.color,
        )
        click.echo("   " + click.style(str(path), fg="cyan", underline=True), color=self.color)

    def model_text(self, text: str) -> None:
        """Show text the model returned alongside the image."""
        click.echo(click.style("💬 Model response:", fg="magenta") + " " + text, color=self.color)

    def warning(self, message: str) -> None:
        """Print a non-fatal warning."""
        click.secho(f"⚠️  Warning: {message}", fg="yellow", color=self.color)

    def error(self, error: Exception) -> None:
        """Print a fatal error to stderr."""
        click.echo(
            click.style("❌ Error:", fg="red", bold=True) + " " + click.style(str(error), fg="red"),
            err=True,
            color=self.color,
        )
