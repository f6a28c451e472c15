"""Mock two-factor enrollment. No secrets are generated or stored."""

import logging
import re

from errors import TwoFactorError

logger = logging.getLogger(__name__)

MOCK_SECRET = "JBSWY3DPEHPK3PXP"
MOCK_QR_CODE = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
MOCK_BACKUP_CODES = [
    "12345678",
    "87654321",
    "11223344",
    "44332211",
    "55667788",
    "88776655",
    "99887766",
    "66778899",
]

_CODE_RE = re.compile(r"[0-9]{6}")


def setup() -> dict:
    return {
        "success": True,
        "secret": MOCK_SECRET,
        "qrCode": MOCK_QR_CODE,
        "backupCodes": list(MOCK_BACKUP_CODES),
    }


def verify(code: object) -> dict:
    """Accept any six-digit code string."""
    if not code:
        raise TwoFactorError("Verification code is required")
    if not isinstance(code, str) or not _CODE_RE.fullmatch(code):
        raise TwoFactorError("Invalid verification code")
    return {"success": True, "message": "2FA enabled successfully"}


def disable() -> dict:
    logger.info("Disabling 2FA for user")
    return {"success": True, "message": "2FA disabled successfully"}
