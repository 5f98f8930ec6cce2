"""Command line interface for generating Wi-Fi QR codes."""

from __future__ import annotations

import argparse
import getpass
import logging
from pathlib import Path
from typing import Optional

from . import __version__
from . import generator
from . import render
from .credentials import CredentialRecord

logger = logging.getLogger("wifiqr")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wifiqr",
        description="Encode your Wi-Fi credentials as a scannable QR code",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("--ssid", required=True, help="Wi-Fi SSID")
    password_group = parser.add_mutually_exclusive_group()
    password_group.add_argument("--password", default="", help="Wi-Fi password")
    password_group.add_argument(
        "-a", "--ask", action="store_true", help="Prompt for the password without echoing it"
    )
    password_group.add_argument(
        "--ask-echo", action="store_true", help="Prompt for the password and echo the input"
    )
    parser.add_argument(
        "--encr", default="wpa2", help="Authentication type (wep, wpa, wpa2, wpa3, nopass)"
    )
    parser.add_argument("--hidden", action="store_true", help="Mark the SSID as hidden")
    parser.add_argument(
        "--quote",
        action="store_true",
        help="Wrap the SSID and password in double quotes if they could be mistaken for hex",
    )

    parser.add_argument("--scale", type=int, default=render.DEFAULT_SCALE, help="Pixels per module")
    parser.add_argument(
        "--quietzone", type=int, default=render.DEFAULT_BORDER, help="Quiet-zone width in modules"
    )
    parser.add_argument(
        "--ecc",
        choices=["low", "medium", "quartile", "high"],
        default=generator.DEFAULT_ECC,
        help="Error correction level",
    )

    output_group = parser.add_mutually_exclusive_group(required=True)
    output_group.add_argument("--imagefile", type=Path, help="Save as an image (.png, .jpg, .jpeg)")
    output_group.add_argument("--svg", action="store_true", help="Print the QR code as SVG")
    output_group.add_argument("--svgfile", type=Path, help="Save the QR code as an SVG file")
    output_group.add_argument("--console", action="store_true", help="Print the QR code to the console")

    parser.add_argument("-d", "--debug", action="store_true", help="Show debugging output")
    return parser


def resolve_password(args: argparse.Namespace) -> str:
    if args.ask:
        return getpass.getpass(f"Enter password for network `{args.ssid}` (will not echo): ")
    if args.ask_echo:
        return input(f"Enter password for network `{args.ssid}` (will echo): ").strip()
    return args.password


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.imagefile is not None and args.imagefile.suffix.lower() not in render.IMAGE_EXTENSIONS:
        parser.exit(
            1,
            f"Unsupported image extension for {args.imagefile}. "
            "Try --imagefile qr.png or --imagefile qr.jpg instead.\n",
        )

    record = CredentialRecord(
        ssid=args.ssid,
        password=resolve_password(args),
        auth=args.encr,
        hidden=args.hidden,
        quote=args.quote,
    )
    logger.debug(
        "ssid=%r password=%s auth=%r hidden=%s quote=%s",
        record.ssid,
        "<set>" if record.password else "<empty>",
        record.auth,
        record.hidden,
        record.quote,
    )

    try:
        payload = record.format()
        logger.debug("wifi string: %r", payload)
        matrix = generator.matrix_from_text(payload, ecc=args.ecc)
        if args.svg:
            print(render.to_svg_string(matrix, border=args.quietzone), end="")
        elif args.svgfile is not None:
            args.svgfile.write_text(render.to_svg_string(matrix, border=args.quietzone), encoding="utf-8")
            print(f"Saved SVG to {args.svgfile}")
        elif args.imagefile is not None:
            image = render.render_image(matrix, scale=args.scale, border=args.quietzone)
            render.save_image(image, args.imagefile)
            print(f"Saved QR code to {args.imagefile}")
        else:
            print(render.render_console(matrix, quiet_zone=args.quietzone), end="")
    except ValueError as exc:
        parser.exit(1, f"Error: {exc}\n")


if __name__ == "__main__":
    main()
