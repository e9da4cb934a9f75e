"""Building a macOS application bundle and packaging it into a DMG image."""

import contextlib
import dataclasses
import itertools
import os
import plistlib
import sys
import threading

from dmgcreator import fsops
from dmgcreator import hdiutil as hdiutil_tool
from dmgcreator import iconutil as iconutil_tool
from dmgcreator import sips as sips_tool
from dmgcreator.errors import DmgCreatorError
from dmgcreator.validate import check

CONTENTS_DIR = "Contents"
MACOS_DIR = "Contents/MacOS"
RESOURCES_DIR = "Contents/Resources"
ICONSET_DIR = "icon.iconset"
ICON_SIZES = (16, 32, 64, 128, 256, 512, 1024)
APPLICATIONS_FOLDER = "/Applications"

_SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
_SPINNER_INTERVAL = 0.3


def _required(json_name):
    return dataclasses.field(metadata={"validate": "required", "json": json_name})


@dataclasses.dataclass
class CreateParams:
    """Input for building a DMG.

    ``icon_path`` may point at a .png, .jpg, .gif or .tiff image.
    """

    app_name: str = _required("AppName")
    app_binary_path: str = _required("AppBinaryPath")
    bundle_identifier: str = _required("BundleIdentifier")
    icon_path: str = _required("IconPath")
    output_dir: str = _required("OutputDir")


def render_info_plist(app_name, bundle_identifier):
    """Return the Info.plist document for an application bundle."""
    document = {
        "CFBundleExecutable": app_name,
        "CFBundleIconFile": "icon.icns",
        "CFBundleIdentifier": bundle_identifier,
        "NSHighResolutionCapable": True,
        "LSUIElement": True,
    }
    return plistlib.dumps(document, sort_keys=False).decode("utf-8")


def _join(*parts):
    joined = os.path.join(*parts)
    return os.path.normpath(joined) if joined else joined


@contextlib.contextmanager
def _wrap(message):
    """Re-raise any error from the block with ``message`` as context."""
    try:
        yield
    except Exception as err:
        raise DmgCreatorError(message, err) from err


class _Spinner:
    """Terminal spinner shown while a step runs; silent when not on a TTY."""

    def __init__(self, message, enabled, stream=None):
        self.message = message
        self.stream = stream if stream is not None else sys.stdout
        self.active = enabled and self._is_tty()
        self._stop = threading.Event()
        self._thread = None

    def _is_tty(self):
        isatty = getattr(self.stream, "isatty", None)
        try:
            return bool(isatty and isatty())
        except (OSError, ValueError):
            return False

    def _spin(self):
        for frame in itertools.cycle(_SPINNER_FRAMES):
            self.stream.write(f"\r{frame} {self.message}")
            self.stream.flush()
            if self._stop.wait(_SPINNER_INTERVAL):
                return

    def __enter__(self):
        if self.active:
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.active:
            self._stop.set()
            self._thread.join()
            self.stream.write(f"\r\033[K✔ {self.message}\n")
            self.stream.flush()
        return False


class SystemFileOps:
    """File system operations backed by the local system."""

    def mkdir_all(self, path, perm):
        fsops.mkdir_all(path, perm)

    def copy_file(self, src, dst):
        fsops.copy_file(src, dst)

    def file_exists(self, path):
        return fsops.file_exists(path)

    def copy_dir(self, src, dst):
        fsops.copy_dir(src, dst)

    def delete_dir(self, path):
        fsops.delete_dir(path)

    def write_file(self, name, data, perm):
        fsops.write_file(name, data, perm)

    def create_symlink(self, src, dst):
        fsops.create_symlink(src, dst)


class SystemSips:
    """Icon resizing through the sips tool."""

    def generate_icons(self, icon_path, output_dir, *args):
        sips_tool.generate_icons(icon_path, output_dir, *args)


class SystemIconUtil:
    """Icon set conversion through the iconutil tool."""

    def generate_icon_set(self, icons_dir, output_dir):
        iconutil_tool.generate_icon_set(icons_dir, output_dir)


class SystemHdiutil:
    """Disk image handling through the hdiutil tool."""

    def create_dmg(self, size, fs, vol_name, layout, output):
        hdiutil_tool.create_dmg(size, fs, vol_name, layout, output)

    def mount_dmg(self, dmg_vol_name, dmg_path):
        hdiutil_tool.mount_dmg(dmg_vol_name, dmg_path)

    def unmount_dmg(self, vol_name):
        hdiutil_tool.unmount_dmg(vol_name)

    def convert_dmg(self, dmg_path, dmg_output_file_name):
        hdiutil_tool.convert_dmg(dmg_path, dmg_output_file_name)


class DmgCreator:
    """Builds an application bundle and packages it as a compressed DMG."""

    def __init__(self, fs_ops=None, sips=None, iconutil=None, hdiutil=None, show_progress=True):
        self.fs_ops = fs_ops if fs_ops is not None else SystemFileOps()
        self.sips = sips if sips is not None else SystemSips()
        self.iconutil = iconutil if iconutil is not None else SystemIconUtil()
        self.hdiutil = hdiutil if hdiutil is not None else SystemHdiutil()
        self.show_progress = show_progress

    def _progress(self, message):
        return _Spinner(message, self.show_progress)

    def create(self, params):
        """Build the DMG described by ``params`` and return its path."""
        try:
            check(params)
        except (TypeError, ValueError) as err:
            raise DmgCreatorError("error when validating input parameters", err) from err

        tmp_work_dir = _join(params.output_dir, "tmp")
        with _wrap("error when creating temp working directory"):
            self.fs_ops.mkdir_all(tmp_work_dir, 0o777)
        try:
            with _wrap("error when creating app bundle"), self._progress(
                "creating application bundle..."
            ):
                bundle_path = self.create_app_bundle(
                    params.app_name,
                    params.app_binary_path,
                    params.icon_path,
                    params.bundle_identifier,
                    tmp_work_dir,
                )
            with _wrap("error when creating app DMG"):
                return self.create_app_dmg(bundle_path, tmp_work_dir, params.output_dir)
        finally:
            with contextlib.suppress(Exception):
                self.fs_ops.delete_dir(tmp_work_dir)

    def create_app_bundle(self, app_name, app_binary_path, icon_path, bundle_identifier, output_dir):
        """Lay out ``<output_dir>/<app_name>.app`` and return its path."""
        bundle_dir_name = f"{app_name}.app"
        bundle_dir_path = _join(output_dir, bundle_dir_name)
        with _wrap("error when creating app bundle directories"):
            self.create_app_bundle_directories(bundle_dir_name, output_dir)
        with _wrap("error when creating icon set"):
            self.create_icon_set(icon_path, bundle_dir_name, output_dir)
        with _wrap("error when copying app binary"):
            self.copy_app_binary(app_binary_path, bundle_dir_path)
        with _wrap("error when creating Info.plist file"):
            self.create_info_plist_file(app_binary_path, bundle_dir_name, output_dir, bundle_identifier)
        return bundle_dir_path

    def create_app_bundle_directories(self, app_bundle_dir_name, output_dir):
        """Create the bundle, iconset, MacOS and Resources directories."""
        for path in (
            _join(output_dir, app_bundle_dir_name),
            _join(output_dir, ICONSET_DIR),
            _join(output_dir, app_bundle_dir_name, MACOS_DIR),
            _join(output_dir, app_bundle_dir_name, RESOURCES_DIR),
        ):
            with _wrap(f"error when creating directory [{path}]"):
                self.fs_ops.mkdir_all(path, 0o777)

    def create_icon_set(self, icon_path, app_bundle_dir_name, app_bundle_dir_path):
        """Render the icon sizes and convert them into the bundle's icon.icns."""
        iconset_path = _join(app_bundle_dir_path, ICONSET_DIR)
        with _wrap("error when generating icons"):
            self.sips.generate_icons(icon_path, iconset_path, *ICON_SIZES)
        resources_path = _join(app_bundle_dir_path, app_bundle_dir_name, RESOURCES_DIR)
        with _wrap("error when generating icon set"):
            self.iconutil.generate_icon_set(iconset_path, resources_path)

    def copy_app_binary(self, app_binary_path, app_bundle_dir_path):
        """Copy the executable into the bundle's MacOS directory."""
        macos_path = _join(app_bundle_dir_path, MACOS_DIR)
        with _wrap(f"error when copying file [{app_binary_path}] to [{macos_path}]"):
            self.fs_ops.copy_file(app_binary_path, macos_path)

    def create_info_plist_file(self, app_binary_path, app_bundle_dir_name, app_bundle_dir_path, bundle_identifier):
        """Write Contents/Info.plist for the bundle."""
        document = render_info_plist(os.path.basename(app_binary_path), bundle_identifier)
        plist_path = _join(app_bundle_dir_path, app_bundle_dir_name, CONTENTS_DIR, "Info.plist")
        with _wrap(f"error when writing Info.plist file to [{plist_path}]"):
            self.fs_ops.write_file(plist_path, document.encode("utf-8"), 0o777)

    def create_app_dmg(self, app_bundle_path, tmp_work_dir, output_dir):
        """Package the bundle at ``app_bundle_path`` and return the DMG path."""
        dmg_name = os.path.basename(app_bundle_path).removesuffix(".app")
        self.check_final_dmg_absent(dmg_name, output_dir)

        with _wrap("error when creating DMG template"), self._progress("creating DMG template..."):
            template_path = self.create_dmg_template(dmg_name, tmp_work_dir)
        with _wrap("error when mounting DMG template"), self._progress("mounting DMG template..."):
            mount_point = self.mount_dmg_template(dmg_name, template_path)
        with _wrap("error when setting up DMG template"), self._progress("setting up DMG template..."):
            self.setup_dmg_template(mount_point, app_bundle_path)
        with _wrap("error when unmounting DMG template"), self._progress("unmounting DMG template..."):
            self.unmount_dmg_template(mount_point)
        return self.convert_dmg(app_bundle_path, template_path, output_dir)

    def create_dmg_template(self, vol_name, output_dir):
        """Create an empty writable image and return its path."""
        template_path = _join(output_dir, f"{vol_name}-template.dmg")
        self.hdiutil.create_dmg("100m", "APFS", vol_name, "GPTSPUD", template_path)
        return template_path

    def mount_dmg_template(self, vol_name, template_path):
        """Attach the template and return its mount point."""
        self.hdiutil.mount_dmg(vol_name, template_path)
        return f"{hdiutil_tool.VOLUMES_ROOT}/{vol_name}"

    def setup_dmg_template(self, mount_point, app_bundle_path):
        """Add an Applications link and the bundle to the mounted volume."""
        with _wrap("error when creating symlink for Applications folder"):
            self.fs_ops.create_symlink(APPLICATIONS_FOLDER, mount_point)
        with _wrap(f"error when copying app bundle to mounted DMG template at [{mount_point}]"):
            self.fs_ops.copy_dir(app_bundle_path, mount_point)

    def unmount_dmg_template(self, mount_point):
        """Detach the mounted template."""
        self.hdiutil.unmount_dmg(mount_point)

    def check_final_dmg_absent(self, dmg_name, output_dir):
        """Raise if ``<output_dir>/<dmg_name>.dmg`` already exists."""
        dmg_path = _join(output_dir, f"{dmg_name}.dmg")
        with _wrap(f"error when checking if DMG file already exists at [{dmg_path}]"):
            exists = self.fs_ops.file_exists(dmg_path)
        if exists:
            raise DmgCreatorError(f"DMG file already exists: [{dmg_path}]")

    def convert_dmg(self, app_bundle_path, template_path, output_dir):
        """Compress the template into the final DMG and return its path."""
        name = os.path.basename(app_bundle_path.removesuffix(".app"))
        dmg_path = _join(output_dir, f"{name}.dmg")
        with _wrap("error when converting DMG template to final DMG"), self._progress(
            "converting DMG template to final DMG..."
        ):
            self.hdiutil.convert_dmg(template_path, dmg_path)
        return dmg_path


def create(params):
    """Build the DMG described by ``params`` using the system tools."""
    return DmgCreator().create(params)