"""Command-line interface for the Stream Deck XL driver."""

import argparse
import logging
import sys

from streamdeck_xl import __version__
from streamdeck_xl._signal import interruptible
from streamdeck_xl.device import enumerate_devices, open_device
from streamdeck_xl.exceptions import (
    DeviceNotFoundError,
    InvalidArgumentError,
    StreamDeckError,
)
from streamdeck_xl.protocol import check_brightness, check_key_index, check_rgb_value

# Epilog text for main parser
MAIN_EPILOG = """\
examples:
  streamdeck-xl list                  List attached Stream Deck XL devices
  streamdeck-xl fill 0 255 0 0        Fill key 0 with red
  streamdeck-xl clear                 Clear every key
  streamdeck-xl brightness 60         Set panel brightness to 60%
  streamdeck-xl listen                Print key presses until Ctrl+C

Use -h with any command for detailed help.
"""

LISTEN_EPILOG = """\
output:
  one line per key edge, e.g. "down 5" or "up 5"

Press Ctrl+C to exit.
"""

_POLL_SECONDS = 0.5


def _device_path(args: argparse.Namespace) -> bytes | None:
    path: str | None = getattr(args, "path", None)
    return path.encode() if path is not None else None


def cmd_list(args: argparse.Namespace) -> int:
    """List attached devices."""
    devices = enumerate_devices()
    if not devices:
        print("No Stream Deck XL devices found.")
        return 1
    for dev in devices:
        path = dev.path.decode(errors="replace")
        serial = dev.serial_number or "-"
        print(f"{path}  serial={serial}  {dev.product_string}")
    return 0


def cmd_fill(args: argparse.Namespace) -> int:
    """Fill one key with a solid color."""
    try:
        check_key_index(args.key)
        for value in (args.red, args.green, args.blue):
            check_rgb_value(value)
        with open_device(_device_path(args)) as deck:
            deck.fill_color(args.key, args.red, args.green, args.blue)
        return 0

    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DeviceNotFoundError:
        print("Error: No Stream Deck XL found.", file=sys.stderr)
        return 1
    except StreamDeckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_clear(args: argparse.Namespace) -> int:
    """Clear one key, or all keys."""
    try:
        if args.key is not None:
            check_key_index(args.key)
        with open_device(_device_path(args)) as deck:
            if args.key is None:
                deck.clear_all_keys()
            else:
                deck.clear_key(args.key)
        return 0

    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DeviceNotFoundError:
        print("Error: No Stream Deck XL found.", file=sys.stderr)
        return 1
    except StreamDeckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_brightness(args: argparse.Namespace) -> int:
    """Set panel brightness."""
    try:
        check_brightness(args.percentage)
        with open_device(_device_path(args)) as deck:
            deck.set_brightness(args.percentage)
        return 0

    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DeviceNotFoundError:
        print("Error: No Stream Deck XL found.", file=sys.stderr)
        return 1
    except StreamDeckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_listen(args: argparse.Namespace) -> int:
    """Print key events until interrupted."""
    failures: list[BaseException] = []

    try:
        with interruptible() as stop, open_device(_device_path(args)) as deck:

            def on_error(err: BaseException) -> None:
                failures.append(err)
                stop.set()

            deck.on("down", lambda key: print(f"down {key}", flush=True))
            deck.on("up", lambda key: print(f"up {key}", flush=True))
            deck.on("error", on_error)

            print("Listening for key events. Press Ctrl+C to exit.")
            while not stop.wait(_POLL_SECONDS):
                pass

    except DeviceNotFoundError:
        print("Error: No Stream Deck XL found.", file=sys.stderr)
        return 1
    except StreamDeckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if failures:
        print(f"Error: {failures[0]}", file=sys.stderr)
        return 1
    return 0


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--path",
        metavar="PATH",
        default=None,
        help="HID path of the device (default: first Stream Deck XL found)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="streamdeck-xl",
        description="Stream Deck XL key display and input tools.",
        epilog=MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="commands",
        metavar="<command>",
    )

    list_parser = subparsers.add_parser("list", help="list attached devices")
    list_parser.set_defaults(func=cmd_list)

    fill_parser = subparsers.add_parser(
        "fill",
        help="fill a key with a solid color",
        description="Fill one key with a solid RGB color.",
    )
    fill_parser.add_argument("key", type=int, metavar="KEY", help="key index 0-31")
    fill_parser.add_argument("red", type=int, metavar="R", help="red 0-255")
    fill_parser.add_argument("green", type=int, metavar="G", help="green 0-255")
    fill_parser.add_argument("blue", type=int, metavar="B", help="blue 0-255")
    _add_path_argument(fill_parser)
    fill_parser.set_defaults(func=cmd_fill)

    clear_parser = subparsers.add_parser(
        "clear",
        help="clear one key or all keys",
        description="Clear a key to black. Clears every key if KEY is omitted.",
    )
    clear_parser.add_argument(
        "key", type=int, metavar="KEY", nargs="?", default=None, help="key index 0-31"
    )
    _add_path_argument(clear_parser)
    clear_parser.set_defaults(func=cmd_clear)

    brightness_parser = subparsers.add_parser(
        "brightness",
        help="set panel brightness",
        description="Set the brightness of all keys.",
    )
    brightness_parser.add_argument(
        "percentage", type=int, metavar="PERCENT", help="brightness 0-100"
    )
    _add_path_argument(brightness_parser)
    brightness_parser.set_defaults(func=cmd_brightness)

    listen_parser = subparsers.add_parser(
        "listen",
        help="print key press/release events",
        description="Print key press and release events as they arrive.",
        epilog=LISTEN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_path_argument(listen_parser)
    listen_parser.set_defaults(func=cmd_listen)

    return parser


def main() -> int:
    """Main entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
