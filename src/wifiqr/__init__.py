"""Wi-Fi credentials to scannable QR codes."""

from .credentials import (
    CredentialError,
    CredentialRecord,
    IncompatibleAuthPassword,
    MissingRequiredPassword,
    build_wifi_payload,
    escape,
    normalize_auth,
)
from .generator import PayloadTooLongError, encode, matrix_from_text
from .render import render_console, render_image, save_image, to_svg_string

__version__ = "0.1.0"

__all__ = [
    "CredentialError",
    "CredentialRecord",
    "IncompatibleAuthPassword",
    "MissingRequiredPassword",
    "PayloadTooLongError",
    "build_wifi_payload",
    "encode",
    "escape",
    "matrix_from_text",
    "normalize_auth",
    "render_console",
    "render_image",
    "save_image",
    "to_svg_string",
]
