# this_file: ogcard/base.py
"""
Base abstractions: the error taxonomy and the blend policy interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class OgcardError(RuntimeError):
    """Base class for errors raised by ogcard."""


class FontParseError(OgcardError):
    """Raised when raw bytes cannot be parsed as a usable font."""


class CardParamError(OgcardError, ValueError):
    """Raised when card parameters are missing or out of bounds."""


class BlendPolicy(ABC):
    """
    Abstract base class for coverage-to-colour compositing policies.

    A policy receives a canvas region (a writable view into the RGBA canvas),
    the matching coverage values in [0, 1] and an RGB text colour, and
    mutates the region in place.
    """

    name: str = "base"
    description: str = ""

    @abstractmethod
    def blend(
        self,
        region: np.ndarray,
        coverage: np.ndarray,
        color: tuple[int, int, int],
    ) -> None:
        """
        Blend ``color`` into ``region`` weighted by ``coverage``.

        Args:
            region: uint8 view of shape (h, w, 4)
            coverage: float32 array of shape (h, w)
            color: RGB text colour
        """

    def summary(self) -> dict[str, str]:
        """Diagnostics for the CLI."""
        return {"policy": self.name, "description": self.description}

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
