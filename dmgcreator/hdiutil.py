"""Creating, mounting, unmounting and converting disk images with hdiutil."""

import os
import time

from dmgcreator.errors import DmgCreatorError
from dmgcreator.shell import CommandError, exec_command

VOLUMES_ROOT = "/Volumes"

_RETRY_ATTEMPTS = 10
_RETRY_INITIAL_DELAY = 0.1
_RETRY_MAX_DELAY = 1.0


def _retry(check):
    """Call ``check`` until it stops raising OSError, with linear backoff."""
    last_error = None
    for attempt in range(1, _RETRY_ATTEMPTS + 1):
        try:
            check()
            return
        except OSError as err:
            last_error = err
        if attempt < _RETRY_ATTEMPTS:
            time.sleep(min(_RETRY_INITIAL_DELAY * attempt, _RETRY_MAX_DELAY))
    raise last_error


def _hdiutil(message, *args):
    try:
        exec_command("hdiutil", *args)
    except CommandError as err:
        raise DmgCreatorError(message, err) from err


def create_dmg(size, fs, vol_name, layout, output):
    """Create an empty disk image at ``output``."""
    _hdiutil(
        f"error when creating dmg with name {vol_name}",
        "create", "-size", size, "-fs", fs, "-volname", vol_name,
        "-layout", layout, "-o", output,
    )


def mount_dmg(dmg_vol_name, dmg_path):
    """Attach ``dmg_path`` and wait until it appears under /Volumes."""
    _hdiutil(f"error when attaching dmg with name {dmg_path}", "attach", dmg_path)
    volume = f"{VOLUMES_ROOT}/{dmg_vol_name}"
    try:
        _retry(lambda: os.stat(volume))
    except OSError as err:
        raise DmgCreatorError(
            f"error when waiting for volume {dmg_path} to be mounted", err
        ) from err


def unmount_dmg(vol_name):
    """Detach the volume at ``vol_name`` and wait until it is gone."""
    _hdiutil(f"error when detaching dmg with name {vol_name}", "detach", vol_name)

    def check():
        try:
            os.stat(vol_name)
        except FileNotFoundError:
            return

    try:
        _retry(check)
    except OSError as err:
        raise DmgCreatorError(
            f"error when waiting for volume {vol_name} to be unmounted", err
        ) from err


def convert_dmg(dmg_path, dmg_output_file_name):
    """Convert ``dmg_path`` to a compressed (UDZO) image."""
    _hdiutil(
        f"error when converting dmg file {dmg_path}",
        "convert", dmg_path, "-format", "UDZO", "-o", dmg_output_file_name,
    )