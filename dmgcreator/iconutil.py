"""Building an .icns file from an iconset directory with iconutil."""

from dmgcreator.errors import DmgCreatorError
from dmgcreator.shell import CommandError, exec_command


def generate_icon_set(icons_dir, output_dir):
    """Convert ``icons_dir`` into ``<output_dir>/icon.icns``."""
    output = f"{output_dir}/icon.icns"
    try:
        exec_command("iconutil", "-c", "icns", "-o", output, icons_dir)
    except CommandError as err:
        raise DmgCreatorError("error when generating icon set", err) from err