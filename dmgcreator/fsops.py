"""File system operations used while assembling an application bundle."""

import os
import stat

from dmgcreator.errors import DmgCreatorError
from dmgcreator.shell import CommandError, exec_command


def _run(message, cmd, *args):
    try:
        exec_command(cmd, *args)
    except CommandError as err:
        raise DmgCreatorError(message, err) from err


def copy_file(src, dst):
    """Copy the file ``src`` to ``dst``."""
    _run(f"error when copying file from [{src}] to [{dst}]", "cp", src, dst)


def copy_dir(src, dst):
    """Copy the directory ``src`` recursively to ``dst``."""
    _run(f"error when copying directory from [{src}] to [{dst}]", "cp", "-r", src, dst)


def file_exists(path):
    """Return whether ``path`` exists; raise if it is a directory."""
    try:
        info = os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as err:
        raise DmgCreatorError(f"error when checking if [{path}] exists", err) from err
    if stat.S_ISDIR(info.st_mode):
        raise DmgCreatorError(f"[{path}] is a directory, not a file")
    return True


def delete_file(path):
    """Delete the file ``path``; a missing file is not an error."""
    _run(f"error when deleting file [{path}]", "rm", "-f", path)


def delete_dir(path):
    """Delete the directory ``path`` and everything below it."""
    _run(f"error when deleting directory [{path}]", "rm", "-rf", path)


def mkdir_all(path, perm=0o777):
    """Create ``path`` along with any missing parents."""
    _run(f"error when creating directory path [{path}]", "mkdir", "-p", path)


def write_file(name, data, perm=0o777):
    """Write ``data`` to ``name``, creating or truncating it."""
    if isinstance(data, str):
        data = data.encode()
    try:
        fd = os.open(name, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
    except OSError as err:
        raise DmgCreatorError(f"error when writing to file [{name}]", err) from err


def create_symlink(src, dst):
    """Create a symbolic link at ``dst`` pointing to ``src``."""
    _run(f"error when creating symlink from [{src}] to [{dst}]", "ln", "-s", src, dst)