import subprocess
from unittest import mock

import pytest

from dmgcreator import hdiutil
from dmgcreator.errors import DmgCreatorError


def _completed(returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=b"")


def test_create_dmg_happy_path():
    with mock.patch("subprocess.run", return_value=_completed()) as run:
        result = hdiutil.create_dmg("1m", "HFS+", "Test", "Standard", "test.dmg")
    assert result is None
    assert run.call_count == 1
    assert run.call_args.args[0] == [
        "hdiutil", "create", "-size", "1m", "-fs", "HFS+", "-volname", "Test",
        "-layout", "Standard", "-o", "test.dmg",
    ]


def test_create_dmg_error():
    with mock.patch("subprocess.run", return_value=_completed(1)):
        with pytest.raises(DmgCreatorError) as excinfo:
            hdiutil.create_dmg("1m", "HFS+", "Test", "Standard", "test.dmg")
    assert str(excinfo.value) == (
        "error when creating dmg with name Test: error when executing command [hdiutil] "
        "with args [create -size 1m -fs HFS+ -volname Test -layout Standard -o test.dmg]: "
        "output: []: exit status 1"
    )


def test_mount_dmg_happy_path():
    with mock.patch("subprocess.run", return_value=_completed()) as run, \
            mock.patch("os.stat", return_value=mock.Mock()) as stat, \
            mock.patch("time.sleep") as sleep:
        result = hdiutil.mount_dmg("", "Test")
    assert result is None
    assert run.call_args.args[0] == ["hdiutil", "attach", "Test"]
    assert stat.call_count == 1
    assert stat.call_args.args[0] == "/Volumes/"
    assert sleep.call_count == 0


def test_mount_dmg_fail_to_attach():
    with mock.patch("subprocess.run", return_value=_completed(1)), \
            mock.patch("os.stat", return_value=mock.Mock()) as stat:
        with pytest.raises(DmgCreatorError) as excinfo:
            hdiutil.mount_dmg("", "Test")
    assert str(excinfo.value).startswith("error when attaching dmg with name Test: ")
    assert stat.call_count == 0


def test_mount_dmg_fail_to_check_mounted_volume():
    with mock.patch("subprocess.run", return_value=_completed()), \
            mock.patch("os.stat", side_effect=OSError("some error")) as stat, \
            mock.patch("time.sleep") as sleep:
        with pytest.raises(DmgCreatorError) as excinfo:
            hdiutil.mount_dmg("", "Test")
    assert str(excinfo.value) == "error when waiting for volume Test to be mounted: some error"
    assert stat.call_count == 10
    assert sleep.call_count == 9
    assert all(call.args[0] <= 1.0 for call in sleep.call_args_list)


def test_mount_dmg_succeeds_after_retries():
    results = [OSError("not yet"), OSError("not yet"), mock.Mock()]
    with mock.patch("subprocess.run", return_value=_completed()), \
            mock.patch("os.stat", side_effect=results) as stat, \
            mock.patch("time.sleep") as sleep:
        result = hdiutil.mount_dmg("Vol", "Test")
    assert result is None
    assert stat.call_count == 3
    assert sleep.call_count == 2
    assert stat.call_args.args[0] == "/Volumes/Vol"


def test_unmount_dmg_happy_path():
    with mock.patch("subprocess.run", return_value=_completed()) as run, \
            mock.patch("os.stat", side_effect=FileNotFoundError()) as stat, \
            mock.patch("time.sleep") as sleep:
        result = hdiutil.unmount_dmg("Test")
    assert result is None
    assert run.call_args.args[0] == ["hdiutil", "detach", "Test"]
    assert stat.call_count == 1
    assert stat.call_args.args[0] == "Test"
    assert sleep.call_count == 0


def test_unmount_dmg_fail_to_detach():
    with mock.patch("subprocess.run", return_value=_completed(1)):
        with pytest.raises(DmgCreatorError) as excinfo:
            hdiutil.unmount_dmg("Test")
    assert str(excinfo.value).startswith("error when detaching dmg with name Test: ")


def test_unmount_dmg_fail_to_check_unmounted_volume():
    with mock.patch("subprocess.run", return_value=_completed()), \
            mock.patch("os.stat", side_effect=OSError("some error")) as stat, \
            mock.patch("time.sleep"):
        with pytest.raises(DmgCreatorError) as excinfo:
            hdiutil.unmount_dmg("Test")
    assert str(excinfo.value) == "error when waiting for volume Test to be unmounted: some error"
    assert stat.call_count == 10


def test_convert_dmg_happy_path():
    with mock.patch("subprocess.run", return_value=_completed()) as run:
        result = hdiutil.convert_dmg("Test.dmg", "Test-converted.dmg")
    assert result is None
    assert run.call_count == 1
    assert run.call_args.args[0] == [
        "hdiutil", "convert", "Test.dmg", "-format", "UDZO", "-o", "Test-converted.dmg",
    ]


def test_convert_dmg_error():
    with mock.patch("subprocess.run", return_value=_completed(1)):
        with pytest.raises(DmgCreatorError) as excinfo:
            hdiutil.convert_dmg("Test.dmg", "Test-converted.dmg")
    assert str(excinfo.value).startswith("error when converting dmg file Test.dmg: ")