"""Text to QR Code symbol pipeline.

    text -> segment -> version -> data codewords -> EC + interleave
         -> function patterns -> data placement and masking

Each call builds its own buffers and matrix; only the read-only tables are
shared, so concurrent calls need no locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .bitstream import encode_segment
from .errors import InvalidParameterError
from .matrix import QRMatrix, build_function_patterns
from .placement import MASK_FUNCTIONS, draw_data
from .reed_solomon import make_final_codewords
from .render import CLEAR_SYMBOL, FILL_SYMBOL, render_text
from .segments import Mode, choose_version, make_segment
from .tables import ECC_LEVELS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QRCode:
    matrix: QRMatrix
    version: int
    error_correction: str
    mask_pattern: int
    mode: Mode

    @property
    def size(self) -> int:
        return self.matrix.size


def normalize_error_correction(level: str) -> str:
    normalized = str(level).strip().upper()
    if normalized not in ECC_LEVELS:
        raise InvalidParameterError(f"Invalid error correction level: {level!r}")
    return normalized


def normalize_mask(mask: int) -> int:
    if isinstance(mask, bool) or not isinstance(mask, int) or mask not in MASK_FUNCTIONS:
        raise InvalidParameterError(f"Invalid mask pattern: {mask!r}, expected 0-7")
    return mask


def make_qr(text: str, error_correction: str = "M", mask_pattern: int = 1) -> QRCode:
    """Encode ``text`` into a finished symbol.

    Raises :class:`CapacityExceededError` when no version up to 40 can hold
    the text at ``error_correction``.
    """
    ecc_level = normalize_error_correction(error_correction)
    mask = normalize_mask(mask_pattern)

    segment = make_segment(text)
    version = choose_version(segment, ecc_level)
    logger.debug(
        "Encoding %d %s units at version %d-%s with mask %d",
        segment.char_count,
        segment.mode.name,
        version,
        ecc_level,
        mask,
    )

    data_codewords = encode_segment(segment, version, ecc_level)
    final_codewords = make_final_codewords(data_codewords, version, ecc_level)

    matrix = build_function_patterns(version, ecc_level, mask)
    draw_data(matrix, final_codewords, mask)
    # Raises if anything is still unassigned.
    matrix.rows()
    return QRCode(matrix, version, ecc_level, mask, segment.mode)


def encode(
    text: str,
    error_correction: str = "M",
    mask_pattern: int = 1,
    fill_symbol: str = FILL_SYMBOL,
    clear_symbol: str = CLEAR_SYMBOL,
) -> str:
    """Encode ``text`` and render it with one line of symbols per module row."""
    code = make_qr(text, error_correction, mask_pattern)
    return render_text(code.matrix, fill_symbol, clear_symbol)
