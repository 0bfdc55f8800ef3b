"""Procedural sound cues for Snake Cashout: eat, bonus, crash and cash-out."""

from __future__ import annotations

import math
from array import array
from dataclasses import dataclass
from typing import Dict, Tuple

import pygame


@dataclass(frozen=True)
class Cue:
    """A short arpeggio: each note starts ``stagger_ms`` after the previous one."""

    notes: Tuple[float, ...]
    note_ms: int
    waveform: str = "sine"  # "sine", "square", "triangle", "saw"
    glide_to: float = 1.0  # frequency ratio reached at the end of each note
    stagger_ms: int = 0
    volume: float = 0.5


CUES: Dict[str, Cue] = {
    "eat": Cue(notes=(520,), note_ms=120, glide_to=980 / 520, volume=0.35),
    "combo": Cue(
        notes=(660, 880, 1100),
        note_ms=140,
        waveform="triangle",
        stagger_ms=60,
        volume=0.5,
    ),
    "spike": Cue(
        notes=(440,),
        note_ms=160,
        waveform="square",
        glide_to=3.0,
        volume=0.3,
    ),
    "crash": Cue(notes=(220,), note_ms=450, waveform="saw", glide_to=35 / 220, volume=0.55),
    "cashout": Cue(
        notes=(523, 659, 784, 1046),
        note_ms=180,
        stagger_ms=90,
        volume=0.4,
    ),
}


def _wave(waveform: str, phase: float) -> float:
    cycle = phase % 1.0
    if waveform == "square":
        return 1.0 if cycle < 0.5 else -1.0
    if waveform == "triangle":
        return 4.0 * abs(cycle - 0.5) - 1.0
    if waveform == "saw":
        return 2.0 * cycle - 1.0
    return math.sin(2.0 * math.pi * cycle)


class AudioEngine:
    """Mixer init plus synthesised cue playback; silent when no mixer exists."""

    def __init__(self, sample_rate: int = 22050) -> None:
        self.enabled = False
        self.muted = False
        self.sample_rate = sample_rate
        self.master_volume: float = 0.6
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self._init_audio()

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error:
            return
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]
        self.sounds = {name: self._render(cue) for name, cue in CUES.items()}
        self.enabled = True

    def _render(self, cue: Cue) -> pygame.mixer.Sound:
        """Mix the cue's notes with an exponential pitch glide and decay."""
        rate = self.sample_rate
        note_len = max(1, int(rate * cue.note_ms / 1000))
        offset = int(rate * cue.stagger_ms / 1000)
        total = note_len + offset * (len(cue.notes) - 1)
        samples = [0.0] * total

        for idx, freq in enumerate(cue.notes):
            start = idx * offset
            phase = 0.0
            for n in range(note_len):
                progress = n / note_len
                current = freq * cue.glide_to**progress
                phase += current / rate
                envelope = math.exp(-5.0 * progress)
                if n < 40:
                    envelope *= n / 40  # click-free attack
                samples[start + n] += _wave(cue.waveform, phase) * envelope

        peak = max((abs(val) for val in samples), default=1.0) or 1.0
        scale = 32767 * cue.volume * self.master_volume / peak
        waveform = array(
            "h", (int(max(-32767, min(32767, val * scale))) for val in samples)
        )
        return pygame.mixer.Sound(buffer=waveform)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def play(self, name: str) -> None:
        if not self.enabled or self.muted:
            return
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error:
            self.enabled = False
