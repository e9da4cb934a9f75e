"""Command line entry point for building a DMG from an application binary."""

import argparse
import sys

from dmgcreator.dmg import CreateParams, DmgCreator
from dmgcreator.errors import DmgCreatorError


class _Parser(argparse.ArgumentParser):
    """Argument parser that reports usage errors on stdout with exit status 1."""

    def error(self, message):
        print(message)
        raise SystemExit(1)


def build_parser():
    """Return the parser for the command's options; every option is required."""
    parser = _Parser(
        prog="createdmg",
        description="Create a macOS DMG image from an application binary.",
    )
    parser.add_argument(
        "--appName", dest="app_name", required=True, help="Application name"
    )
    parser.add_argument(
        "--appBinaryPath",
        dest="app_binary_path",
        required=True,
        help="Path to the application binary",
    )
    parser.add_argument(
        "--bundleIdentifier",
        dest="bundle_identifier",
        required=True,
        help="Bundle identifier for the application",
    )
    parser.add_argument(
        "--iconPath", dest="icon_path", required=True, help="Path to the application icon"
    )
    parser.add_argument(
        "--outputDir",
        dest="output_dir",
        required=True,
        help="Directory to save the output DMG file",
    )
    return parser


def run(args, creator=None):
    """Build the DMG described by parsed ``args`` and return its path."""
    if creator is None:
        creator = DmgCreator()
    created = creator.create(
        CreateParams(
            app_name=args.app_name,
            app_binary_path=args.app_binary_path,
            bundle_identifier=args.bundle_identifier,
            icon_path=args.icon_path,
            output_dir=args.output_dir,
        )
    )
    print("\nDMG created successfully at:", created)
    return created


def main(argv=None):
    """Parse ``argv``, build the DMG and return the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    try:
        run(args)
    except DmgCreatorError as err:
        print(err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())