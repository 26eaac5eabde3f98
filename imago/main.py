"""Command line entry point."""

import asyncio
import sys
from pathlib import Path

import click
from loguru import logger

from imago import __version__
from imago.config import settings
from imago.console import Console
from imago.errors import ImagoError, MissingApiKeyError
from imago.services.gemini import GeminiClient
from imago.services.image_handler import ImageHandler
from imago.services.session import close_session, get_session

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(verbose: bool, color: bool | None = None) -> None:
    """Configure loguru. Logs go to stderr so stdout stays for the preview."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level="INFO" if verbose else "WARNING",
        colorize=color,
    )


async def run(
    prompt: str,
    output: Path | None,
    width: int,
    height: int | None,
    no_preview: bool,
    model: str,
    api_key: str | None,
    console: Console,
) -> Path:
    """Generate, save and preview one image. Returns the saved path."""
    api_key = api_key or settings.gemini_api_key
    if not api_key:
        raise MissingApiKeyError()

    logger.info(f"Using model: {model}")

    handler = ImageHandler(width, height, enable_preview=not no_preview)
    console.generating(prompt)

    session = await get_session()
    try:
        client = GeminiClient(session, api_key, model)
        image_data, text = await client.generate_image(prompt)
    finally:
        await close_session()

    logger.info(f"Image generated: {len(image_data)} bytes")
    if text:
        console.model_text(text)

    output_path = handler.resolve_output_path(output)
    handler.save_image(image_data, output_path)
    console.success(output_path)

    if not no_preview:
        click.echo()
        try:
            handler.display_in_terminal(image_data)
        except ImagoError as e:
            console.warning(f"Could not display preview: {e}")

    return output_path


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=(
        "\b\nExamples:\n"
        '  imago "a beautiful sunset over mountains"\n'
        '  imago "cyberpunk city at night" -o ./images/\n'
        '  imago "abstract art" --width 80 --no-preview\n'
        "\n\b\nEnvironment:\n"
        "  GEMINI_API_KEY    Required. Your Google Gemini API key."
    ),
)
@click.argument("prompt")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory or file path for the generated image.",
)
@click.option(
    "-w",
    "--width",
    type=click.IntRange(min=1),
    default=settings.preview_width,
    show_default=True,
    help="Width of the preview in terminal columns.",
)
@click.option(
    "-H",
    "--height",
    type=click.IntRange(min=1),
    default=None,
    help="Height of the preview in terminal rows.",
)
@click.option("--no-preview", is_flag=True, help="Disable terminal preview after generation.")
@click.option(
    "-m",
    "--model",
    default=settings.gemini_model,
    show_default=True,
    help="Gemini model to use for image generation.",
)
@click.option(
    "-k",
    "--api-key",
    default=None,
    help="Gemini API key (overrides GEMINI_API_KEY environment variable).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.version_option(__version__, prog_name="imago")
def cli(prompt, output, width, height, no_preview, model, api_key, verbose, no_color):
    """Generate an image from PROMPT with the Gemini image API and preview it."""
    color = False if no_color else None
    configure_logging(verbose, color)
    console = Console(color)

    try:
        asyncio.run(
            run(prompt, output, width, height, no_preview, model, api_key, console)
        )
    except ImagoError as e:
        console.error(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
