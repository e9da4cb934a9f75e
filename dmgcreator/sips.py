"""Resizing an image into icon sizes with sips."""

from dmgcreator.errors import DmgCreatorError
from dmgcreator.shell import CommandError, exec_command


def generate_icons(icon_path, output_dir, *args):
    """Write ``icon_<n>x<n>.png`` into ``output_dir`` for each size in ``args``."""
    for size in args:
        out = f"{output_dir}/icon_{size}x{size}.png"
        try:
            exec_command("sips", "-z", str(size), str(size), icon_path, "--out", out)
        except CommandError as err:
            raise DmgCreatorError(f"error when generating icon with size {size}", err) from err