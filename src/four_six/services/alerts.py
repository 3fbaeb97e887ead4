"""Audible cues for pour timers."""

import logging
from dataclasses import dataclass
from typing import Protocol

from four_six.domain.timer import AlertKind

_logger = logging.getLogger(__name__)

POUR_TONE = (800.0, 0.5)
COMPLETION_TONE = (1000.0, 0.8)

_FALLBACK_MESSAGES = {
    AlertKind.POUR: "Hora de despejar!",
    AlertKind.COMPLETION: "Preparo completo!",
}


class TonePlayer(Protocol):
    """Interface for fire-and-forget tone output."""

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        """Play a sine tone without blocking the caller."""


@dataclass
class AlertService:
    """Plays timer alerts, never letting audio failures escape."""

    player: TonePlayer

    def play_pour_alert(self) -> None:
        """Short 800 Hz cue that the next pour is due."""
        self.play(AlertKind.POUR)

    def play_completion_alert(self) -> None:
        """Longer, higher 1000 Hz cue that the brew is done."""
        self.play(AlertKind.COMPLETION)

    def play(self, kind: AlertKind) -> None:
        """Play the tone for an alert kind."""
        frequency_hz, duration_seconds = (
            COMPLETION_TONE if kind is AlertKind.COMPLETION else POUR_TONE
        )
        try:
            self.player.play_tone(frequency_hz, duration_seconds)
        except Exception:  # noqa: BLE001
            _logger.warning(
                "Audio unavailable, skipping %s alert: %s",
                kind.value,
                _FALLBACK_MESSAGES[kind],
                exc_info=True,
            )
