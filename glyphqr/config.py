"""Settings read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .encoder import normalize_error_correction, normalize_mask
from .errors import InvalidParameterError
from .render import CLEAR_SYMBOL, FILL_SYMBOL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    error_correction: str = "M"
    mask_pattern: int = 1
    fill_symbol: str = FILL_SYMBOL
    clear_symbol: str = CLEAR_SYMBOL
    log_level: str = "INFO"
    bot_token: Optional[str] = None


def load_settings(environ: Mapping[str, str] = os.environ) -> Settings:
    raw_mask = environ.get("QR_MASK_PATTERN", "1")
    try:
        mask = int(raw_mask)
    except ValueError:
        raise InvalidParameterError(f"QR_MASK_PATTERN must be an integer, got {raw_mask!r}") from None

    log_level = environ.get("LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise InvalidParameterError(f"Unknown LOG_LEVEL: {log_level!r}")

    return Settings(
        error_correction=normalize_error_correction(environ.get("QR_ERROR_CORRECTION", "M")),
        mask_pattern=normalize_mask(mask),
        fill_symbol=environ.get("QR_FILL_SYMBOL", FILL_SYMBOL),
        clear_symbol=environ.get("QR_CLEAR_SYMBOL", CLEAR_SYMBOL),
        log_level=log_level,
        bot_token=environ.get("BOT_TOKEN") or None,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(format=LOG_FORMAT, level=settings.log_level)
