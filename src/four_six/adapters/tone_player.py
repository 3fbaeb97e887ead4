"""Tone output adapters."""

import logging
import shlex
import subprocess
from dataclasses import dataclass

_logger = logging.getLogger(__name__)

DEFAULT_TONE_COMMAND = "play"


@dataclass
class SubprocessTonePlayer:
    """Plays sine tones through an external synth (SoX ``play`` by default)."""

    command: str = DEFAULT_TONE_COMMAND

    def build_args(self, frequency_hz: float, duration_seconds: float) -> list[str]:
        """Return the argv for a single tone."""
        return [
            *shlex.split(self.command),
            "-q",
            "-n",
            "synth",
            f"{duration_seconds:g}",
            "sine",
            f"{frequency_hz:g}",
        ]

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        """Start the synth and return without waiting for it."""
        subprocess.Popen(  # noqa: S603
            self.build_args(frequency_hz, duration_seconds),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )


@dataclass
class LoggingTonePlayer:
    """Records tones in the log instead of playing them."""

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        _logger.info("Tone: %.0f Hz for %.1f s", frequency_hz, duration_seconds)
