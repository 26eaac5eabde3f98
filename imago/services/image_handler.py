"""Saving generated images and previewing them in the terminal."""

import base64
import io
import os
import random
import shutil
import string
import subprocess
import sys
import tempfile
from datetime import datetime
from enum import Enum
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from imago.errors import DisplayError, ImageError, OutputError

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")
KITTY_CHUNK_SIZE = 4096


class TerminalSupport(Enum):
    KITTY = "kitty"
    ITERM2 = "iterm2"
    HALF_BLOCKS = "half_blocks"


def detect_terminal_support() -> TerminalSupport:
    """Detect which inline graphics protocol the terminal speaks."""
    term = os.environ.get("TERM", "")
    term_program = os.environ.get("TERM_PROGRAM", "")

    if os.environ.get("KITTY_WINDOW_ID") or "kitty" in term or "wezterm" in term:
        return TerminalSupport.KITTY
    if term_program == "iTerm.app":
        return TerminalSupport.ITERM2
    if term_program == "WezTerm":
        return TerminalSupport.KITTY
    return TerminalSupport.HALF_BLOCKS


def random_string(length: int = 8) -> str:
    """Generate a random lowercase alphanumeric string."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


class ImageHandler:
    """Handles image saving and terminal display."""

    def __init__(self, width: int, height: int | None = None, enable_preview: bool = True):
        self.width = width
        self.height = height
        self.enable_preview = enable_preview

    @staticmethod
    def generate_filename() -> str:
        """Generate a filename with timestamp and random suffix."""
        timestamp = datetime.now().strftime("%Y%m%d%H%M")
        return f"{timestamp}_{random_string()}.png"

    def resolve_output_path(self, output: str | Path | None) -> Path:
        """
        Resolve where the image is written.

        No output means a generated filename in the working directory. A
        directory (existing, or spelled with a trailing slash) receives a
        generated filename. Any other path keeps a known image extension or
        gets ``.png``.
        """
        filename = self.generate_filename()
        if output is None:
            return Path(filename)

        raw = str(output)
        path = Path(output)
        if path.is_dir() or raw.endswith(("/", os.sep)):
            return path / filename
        if raw.lower().endswith(IMAGE_EXTENSIONS):
            return path
        return path.with_suffix(".png")

    def save_image(self, image_data: bytes, path: Path) -> None:
        """Write image bytes to path, creating parent directories."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(image_data)
        except OSError as e:
            raise OutputError(f"Failed to write {path}: {e}") from e
        logger.info(f"Saved {len(image_data)} bytes to {path}")

    def display_in_terminal(self, image_data: bytes) -> None:
        """Preview the image, preferring the ``viu`` binary when installed."""
        if not self.enable_preview:
            return

        if shutil.which("viu"):
            self._display_with_viu(image_data)
            return

        support = detect_terminal_support()
        logger.info(f"Previewing with {support.value}")
        if support is TerminalSupport.KITTY:
            self._display_kitty(image_data)
        elif support is TerminalSupport.ITERM2:
            self._display_iterm(image_data)
        else:
            self._display_half_blocks(image_data)

    def _display_with_viu(self, image_data: bytes) -> None:
        try:
            with tempfile.NamedTemporaryFile(
                prefix="imago_preview_", suffix=".png", delete=False
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(image_data)
        except OSError as e:
            raise DisplayError(f"Failed to write preview file: {e}") from e

        cmd = ["viu", "-w", str(self.width)]
        if self.height is not None:
            cmd += ["-h", str(self.height)]
        cmd.append(tmp_path)

        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise DisplayError(f"Failed to launch viu: {e}") from e
        finally:
            os.unlink(tmp_path)

        if result.returncode != 0:
            raise DisplayError("viu preview process exited with non-zero status")

    @staticmethod
    def _load(image_data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as e:
            raise ImageError(f"Failed to load image: {e}") from e
        return image

    def _display_kitty(self, image_data: bytes) -> None:
        # Kitty's direct transmission (f=100) only accepts PNG.
        buffer = io.BytesIO()
        self._load(image_data).save(buffer, format="PNG")
        payload = base64.standard_b64encode(buffer.getvalue()).decode("ascii")

        size = f"c={self.width}" + (f",r={self.height}" if self.height else "")
        chunks = [
            payload[i : i + KITTY_CHUNK_SIZE]
            for i in range(0, len(payload), KITTY_CHUNK_SIZE)
        ] or [""]
        out = []
        for index, chunk in enumerate(chunks):
            more = 1 if index < len(chunks) - 1 else 0
            control = f"a=T,f=100,{size},m={more}" if index == 0 else f"m={more}"
            out.append(f"\x1b_G{control};{chunk}\x1b\\")
        self._write("".join(out) + "\n")

    def _display_iterm(self, image_data: bytes) -> None:
        payload = base64.standard_b64encode(image_data).decode("ascii")
        args = f"inline=1;size={len(image_data)};width={self.width};preserveAspectRatio=1"
        if self.height:
            args += f";height={self.height}"
        self._write(f"\x1b]1337;File={args}:{payload}\x07\n")

    def _display_half_blocks(self, image_data: bytes) -> None:
        image = self._load(image_data).convert("RGB")
        columns = self.width
        if self.height:
            rows = self.height
        else:
            rows = max(1, round(columns * image.height / image.width / 2))
        image = image.resize((columns, rows * 2))

        pixels = image.load()
        lines = []
        for row in range(rows):
            cells = []
            for x in range(columns):
                top = pixels[x, row * 2]
                bottom = pixels[x, row * 2 + 1]
                cells.append(
                    f"\x1b[38;2;{top[0]};{top[1]};{top[2]}m"
                    f"\x1b[48;2;{bottom[0]};{bottom[1]};{bottom[2]}m▀"
                )
            lines.append("".join(cells) + "\x1b[0m")
        self._write("\n".join(lines) + "\n")

    @staticmethod
    def _write(data: str) -> None:
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError as e:
            raise DisplayError(f"Failed to write to terminal: {e}") from e
