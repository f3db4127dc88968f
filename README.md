# fehlib

Parts of an image viewer that work without a display: readable EXIF
summaries (with Nikon and Canon maker notes), layered text styles, mouse
button bindings read from a configuration file, and the arithmetic behind
zooming, panning, rotating and blurring with the pointer.

## Installation

```
pip install .
```

Pillow is the only runtime dependency; it is used to read EXIF data. To run
the test suite:

```
pip install .[test]
pytest
```

## Modules

### `fehlib.exifinfo`

- `load_exif(path)` opens an image with Pillow and returns an `ExifData`, or
  `None` when the file cannot be read or carries no EXIF data.
- `ExifData` holds entries already rendered as text, per IFD (`IFD_0`,
  `IFD_EXIF`, `IFD_GPS`), plus maker note entries as `(id, title, value)`.
  `value(ifd, tag)`, `tag_name(ifd, tag)` and `mnote(tag)` look them up.
- `exif_info(data, nikon_tags=(), canon_tags=(), nikon_formatter=None)`
  returns the multi-line summary: description, make/model/lens, exposure,
  mode, flash, capture time, the maker note tags you list for Nikon or Canon
  cameras, and GPS position. With `data=None` it returns
  `"No Exif data in file.\n"`.
- The single lines are also available: `make_model_lens`, `exposure`,
  `flash`, `mode`, `datetime_line`, `description`, `gps_coords`, as well as
  `tag_line`, `tag_content`, `mnote_tag`, `canon_mnote_tags` and
  `trim_spaces`.

### `fehlib.nikon`

Readable forms of Nikon maker note values: `active_d_lighting` (tag 34),
`picture_control` (35), `flash_exposure_compensation` (18),
`flash_control_mode` (168), `af_info` (183), and the helpers
`primary_af_point` and `flash_output`. `nikon_mnote_tags(data, tag)`
dispatches by tag and hides flash-related tags when the flash did not fire;
pass it to `exif_info` as `nikon_formatter`.

### `fehlib.style`

`Style` is a named list of `StyleBit`s, each an offset and an RGBA colour for
one copy of drawn text. `Style.add_bit(...)` appends a bit and
`Style.offset_bounds()` returns `(min_x, min_y, max_x, max_y)`, always
including the origin.

### `fehlib.bindings`

- `ButtonBindings` starts from the default bindings: button 1 pans, 2 zooms,
  3 toggles the menu, 4 and 5 go to the previous and next image, Control+1
  blurs and Control+2 rotates.
- `apply_line("zoom_in C-4")` changes one binding; lines starting with `#`
  are ignored, and `reload`, `menu`, `prev` and `next` are accepted as
  action aliases. `load(path)` applies a whole file.
- `action_for(button, state)` returns the `Action` a press triggers;
  `is_bound(action, button, state)` checks a single one.
- `parse_binding("C-S-1")` parses a specification; modifiers are `C`, `S`,
  `1` and `4`.
- `load_button_bindings(env=None)` reads `$XDG_CONFIG_HOME/feh/buttons`, or
  `$HOME/.config/feh/buttons` when `XDG_CONFIG_HOME` is unset, and falls back
  to `/etc/feh/buttons` if that file cannot be opened. With neither variable
  set, the defaults are returned unchanged. `config_paths(env)` lists the
  files it would try.

### `fehlib.interaction`

`ViewState` and `Mode` describe an image in a window. `drag_zoom`,
`zoom_around_point`, `step_zoom`, `exceeds_jitter`, `rotation_angle`,
`blur_radius` and `menu_slide` compute the new zoom, offsets, angle, filter
radius and menu movement for pointer events.

## Examples

```python
from fehlib.exifinfo import exif_info, load_exif
from fehlib.nikon import nikon_mnote_tags

data = load_exif("photo.jpg")
print(exif_info(data, nikon_tags=(34, 35, 168, 183),
                nikon_formatter=nikon_mnote_tags), end="")
```

```python
from fehlib.bindings import load_button_bindings

bindings = load_button_bindings()
print(bindings.action_for(1, 0))  # Action.PAN unless the configuration changes it
```

## What this package does not do

It has no window, no image rendering and no command to run. It does not
gather, sort or save lists of image files, and it does not read or write PNG
text chunks. The interaction functions only compute values; applying them to
a display is up to the caller.