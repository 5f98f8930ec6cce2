"""QR data helpers."""

from __future__ import annotations

import logging
from typing import List, Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError

from .credentials import CredentialRecord

logger = logging.getLogger(__name__)

DEFAULT_ECC = "high"

_ECC_LEVELS = {
    "low": ERROR_CORRECT_L,
    "medium": ERROR_CORRECT_M,
    "quartile": ERROR_CORRECT_Q,
    "high": ERROR_CORRECT_H,
    "l": ERROR_CORRECT_L,
    "m": ERROR_CORRECT_M,
    "q": ERROR_CORRECT_Q,
    "h": ERROR_CORRECT_H,
}


class PayloadTooLongError(ValueError):
    """The payload does not fit in any QR symbol at the requested level."""


def ecc_constant(ecc: str) -> int:
    try:
        return _ECC_LEVELS[ecc.lower()]
    except KeyError as exc:
        raise ValueError(f"unknown ECC level: {ecc}") from exc


def matrix_from_text(
    text: str,
    ecc: str = DEFAULT_ECC,
    *,
    version: Optional[int] = None,
    mask: Optional[int] = None,
) -> List[List[bool]]:
    """Encode ``text`` into a matrix of booleans representing the QR code.

    The smallest symbol that holds ``text`` is chosen, starting from
    ``version`` when one is given. The returned matrix has no quiet zone;
    renderers add it.
    """
    ecl = ecc_constant(ecc)
    if version is not None and not 1 <= version <= 40:
        raise ValueError(f"version must be between 1 and 40, got {version}")
    if mask is not None and mask not in range(8):
        raise ValueError(f"mask must be between 0 and 7, got {mask}")

    qr = qrcode.QRCode(version=version, error_correction=ecl, border=0, mask_pattern=mask)
    qr.add_data(text)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        # version and mask are checked above, so a ValueError here is an overflow.
        raise PayloadTooLongError(
            f"payload of {len(text)} characters is too long for a QR code at ECC level {ecc}"
        ) from exc
    logger.debug("encoded %d characters as QR version %d (ecc=%s)", len(text), qr.version, ecc)
    return [[bool(cell) for cell in row] for row in qr.get_matrix()]


def encode(
    record: CredentialRecord,
    ecc: str = DEFAULT_ECC,
    *,
    version: Optional[int] = None,
    mask: Optional[int] = None,
) -> List[List[bool]]:
    """Format ``record`` and encode the resulting payload."""
    return matrix_from_text(record.format(), ecc, version=version, mask=mask)
