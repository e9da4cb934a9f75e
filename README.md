# dmgcreator

Turn a macOS executable into an application bundle (`.app`) and ship it as a
compressed disk image (`.dmg`) that also holds a link to `/Applications`.

It drives the tools that come with macOS: `sips` resizes the icon, `iconutil`
builds `icon.icns`, and `hdiutil` creates, mounts, unmounts and converts the
disk image. `cp`, `mkdir`, `rm` and `ln` do the file work. It works only on
macOS.

## Installation

```
pip install .
```

## Command line

```
createdmg --appName MyApp \
          --appBinaryPath ./build/MyApp \
          --bundleIdentifier com.example.myapp \
          --iconPath ./assets/icon.png \
          --outputDir ./dist
```

Every option is required:

| Option               | Meaning                                            |
|----------------------|----------------------------------------------------|
| `--appName`          | Name of the application and of the resulting DMG   |
| `--appBinaryPath`    | Path to the application executable                 |
| `--bundleIdentifier` | Bundle identifier written to `Info.plist`          |
| `--iconPath`         | Icon image (`.png`, `.jpg`, `.gif` or `.tiff`)     |
| `--outputDir`        | Directory where the DMG is written                 |

On success the command prints `DMG created successfully at: dist/MyApp.dmg`
(paths are normalised) and exits with status 0. A missing option, an
existing `MyApp.dmg` in the output directory, or a failure in any step prints
the error on standard output and exits with status 1. `--help` prints the
usage and exits with status 0.

While it runs, the command shows a spinner for each step when standard output
is a terminal. It works in a `tmp` directory inside the output directory and
removes that directory when it finishes, whether or not it succeeded.

## What ends up in the image

- `MyApp.app/Contents/MacOS/` holding a copy of the executable
- `MyApp.app/Contents/Resources/icon.icns`, built from the icon resized to
  16, 32, 64, 128, 256, 512 and 1024 pixels
- `MyApp.app/Contents/Info.plist` naming the executable, the icon file and
  the bundle identifier, with `NSHighResolutionCapable` and `LSUIElement` set
- a symbolic link to `/Applications`

The image is first created as a 100 MB APFS volume, then converted to the
compressed `UDZO` format.

## From Python

```python
from dmgcreator.dmg import CreateParams, create

path = create(CreateParams(
    app_name="MyApp",
    app_binary_path="./build/MyApp",
    bundle_identifier="com.example.myapp",
    icon_path="./assets/icon.png",
    output_dir="./dist",
))
print(path)  # dist/MyApp.dmg
```

Every failure raises `dmgcreator.errors.DmgCreatorError`, whose message names
each step that failed from the outside in, for example
`error when creating app DMG: error when mounting DMG template: ...`.
Empty parameters are reported as
`error when validating input parameters: AppName: AppName is a required field`;
`dmgcreator.validate.get_field_errors(err)` returns the underlying
`FieldErrors` (with `fields()` mapping each field to its message), and
`is_field_errors(err)` tells whether there is one.

`dmgcreator.dmg.DmgCreator` takes its own `fs_ops`, `sips`, `iconutil` and
`hdiutil` back ends (defaulting to `SystemFileOps`, `SystemSips`,
`SystemIconUtil` and `SystemHdiutil`) and `show_progress=False` turns the
spinners off. Its individual steps, such as `create_app_bundle`,
`create_app_dmg` and `convert_dmg`, can be called on their own.
`render_info_plist(app_name, bundle_identifier)` returns the `Info.plist`
text.

The tool wrappers are usable directly as well: `dmgcreator.hdiutil`
(`create_dmg`, `mount_dmg`, `unmount_dmg`, `convert_dmg`),
`dmgcreator.sips.generate_icons`, `dmgcreator.iconutil.generate_icon_set`,
`dmgcreator.fsops` and `dmgcreator.shell.exec_command`, which raises
`CommandError` with the command's combined output when it fails.

`dmgcreator.validators` holds `not_empty`, `no_spaces` and
`optional_no_spaces`, which raise `ValueError` for blank input or input that
contains spaces.

## What it does not do

There is no graphical interface; the package is used from the command line
or from Python. It does not sign or notarise the application, and it does not
customise the DMG window (background, icon positions).

## Running the tests

```
pip install ".[test]"
pytest
```