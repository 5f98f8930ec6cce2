from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from flask import Flask, Response, current_app, jsonify, request, send_file

from . import generator, render
from .credentials import CredentialRecord

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


class ErrorCorrection(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"


class OutputFormat(str, Enum):
    PNG = "png"
    SVG = "svg"


def _parse_bool(payload: Mapping[str, object], key: str) -> bool:
    raw_value = payload.get(key, False)
    if isinstance(raw_value, bool):
        return raw_value
    if raw_value is None:
        return False
    text = str(raw_value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ValueError(f"{key} must be a boolean")


def _parse_int(payload: Mapping[str, object], key: str, default: int, low: int, high: int) -> int:
    raw_value = payload.get(key, default)
    if isinstance(raw_value, bool) or (isinstance(raw_value, float) and not raw_value.is_integer()):
        raise ValueError(f"{key} must be an integer")
    try:
        value = int(raw_value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer") from exc
    if not low <= value <= high:
        raise ValueError(f"{key} must be between {low} and {high}")
    return value


@dataclass
class WifiQRRequest:
    record: CredentialRecord
    error_correction: ErrorCorrection = ErrorCorrection.H
    border: int = render.DEFAULT_BORDER
    scale: int = render.DEFAULT_SCALE
    output_format: OutputFormat = OutputFormat.PNG

    @staticmethod
    def parse_record(payload: Mapping[str, object]) -> CredentialRecord:
        ssid = payload.get("ssid")
        if not isinstance(ssid, str) or not ssid:
            raise ValueError("ssid is required")
        password = payload.get("password") or ""
        auth = payload.get("auth") or ""
        if not isinstance(password, str) or not isinstance(auth, str):
            raise ValueError("password and auth must be strings")
        return CredentialRecord(
            ssid=ssid,
            password=password,
            auth=auth,
            hidden=_parse_bool(payload, "hidden"),
            quote=_parse_bool(payload, "quote"),
        )

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, object],
        max_scale: int = 40,
        max_border: int = 20,
    ) -> "WifiQRRequest":
        record = cls.parse_record(payload)

        try:
            error_correction = ErrorCorrection(str(payload.get("errorCorrection", "H")).upper())
        except ValueError as exc:
            raise ValueError("errorCorrection must be one of L, M, Q, H") from exc

        try:
            output_format = OutputFormat(str(payload.get("format", "png")).lower())
        except ValueError as exc:
            raise ValueError("format must be png or svg") from exc

        return cls(
            record=record,
            error_correction=error_correction,
            border=_parse_int(payload, "border", render.DEFAULT_BORDER, 0, max_border),
            scale=_parse_int(payload, "scale", render.DEFAULT_SCALE, 1, max_scale),
            output_format=output_format,
        )


def _request_payload() -> Dict[str, Any]:
    if request.method == "GET":
        return {key: value for key, value in request.args.items()}
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {}
    return payload


def _bad_request(exc: ValueError):
    logger.info("rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"message": str(exc)}), 400


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(MAX_SCALE=40, MAX_BORDER=20)
    app.config.from_prefixed_env("WIFIQR")
    if config:
        app.config.update(config)

    @app.post("/api/wifi")
    def wifi_payload():
        try:
            record = WifiQRRequest.parse_record(_request_payload())
            payload = record.format()
        except ValueError as exc:
            return _bad_request(exc)
        return jsonify({"payload": payload})

    @app.route("/api/wifi-qr", methods=["GET", "POST"])
    def wifi_qr():
        try:
            qr_request = WifiQRRequest.from_payload(
                _request_payload(),
                max_scale=current_app.config["MAX_SCALE"],
                max_border=current_app.config["MAX_BORDER"],
            )
            matrix = generator.encode(qr_request.record, ecc=qr_request.error_correction.value)
        except ValueError as exc:
            return _bad_request(exc)

        if qr_request.output_format is OutputFormat.SVG:
            svg = render.to_svg_string(matrix, border=qr_request.border)
            return Response(svg, mimetype="image/svg+xml")

        image = render.render_image(matrix, scale=qr_request.scale, border=qr_request.border)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        buffer.seek(0)
        return send_file(buffer, mimetype="image/png")

    return app


if __name__ == "__main__":
    create_app().run(host="127.0.0.1", port=5000, debug=True)
