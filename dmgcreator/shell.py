"""Running external commands and capturing their combined output."""

import subprocess

from dmgcreator.errors import DmgCreatorError


class CommandError(DmgCreatorError):
    """A command could not be started or exited unsuccessfully."""

    def __init__(self, cmd, arguments, output, cause):
        self.cmd = cmd
        self.arguments = tuple(arguments)
        self.output = output
        joined = " ".join(self.arguments)
        super().__init__(
            f"error when executing command [{cmd}] with args [{joined}]: output: [{output}]",
            cause,
        )


def _failure_reason(returncode):
    if returncode < 0:
        return f"signal {-returncode}"
    return f"exit status {returncode}"


def exec_command(cmd, *args):
    """Run ``cmd`` with ``args`` and return its stdout and stderr combined."""
    try:
        proc = subprocess.run(
            [cmd, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as err:
        raise CommandError(cmd, args, "", err) from err
    output = (proc.stdout or b"").decode(errors="replace")
    if proc.returncode != 0:
        raise CommandError(cmd, args, output, _failure_reason(proc.returncode))
    return output