# upspring

The non-graphical core of a 3D model editor for the Spring RTS engine.
It has no dependencies outside the standard library and needs Python 3.10
or later.

## Modules

- **`upspring.cfgparser`**: reads and writes the editor's brace-delimited
  configuration format (`name = value`, nested `{ ... }` lists, quoted
  literals, bare identifiers, numbers, and `file "other.cfg"` includes).
- **`upspring.animation`**: keyframe animation of object attributes, with
  float and Euler-angle controllers and cubic Hermite spline weights.
- **`upspring.trackview`**: the model behind an animation track editor:
  fitting the view to the curves, turning curves into pixel coordinates,
  picking keys, and panning and zooming with the mouse.
- **`upspring.launcher`**: command-line parsing for opening a model or
  running a script.
- **`upspring.filesearch`**: `find_files(path, predicate, recursive)` lists
  the regular files in a directory (and optionally its subdirectories) that
  pass a predicate.
- **`upspring.ptrvec`**: `PtrVec`, a container that adds and removes items
  in constant time; each item keeps its position in an `index` attribute,
  and removal moves the last item into the freed place.

## Configuration files

```python
from upspring.cfgparser import loads, dumps

cfg = loads('width = 640\nheight = 480\nname = "main view"\n', "views.cfg")

cfg.get_numeric("width", 0.0)      # 640.0
cfg.get_int("height", 0)           # 480
cfg.get_literal("name", None)      # "main view"

cfg.add_numeric("zoom", 1.5)
print(dumps(cfg))
```

Lookups ignore case. A missing name, or a value of the wrong kind, gives
back the default. Text that cannot be parsed raises `ConfigError`.
`load_file(path)` and `save_file(cfg, path)` work on files, and a
`file "other.cfg"` value is loaded relative to the file that contains it.
Custom value types can be registered with `add_value_class`.

## Keyframe animation

```python
from upspring.animation import AnimationInfo, float_controller

class Thing:
    height = 0.0

info = AnimationInfo()
info.add_property(float_controller(), "height", "height")

thing = Thing()
thing.height = 0.0
info.insert_key_frames(thing, 0.0)
thing.height = 10.0
info.insert_key_frames(thing, 2.0)

info.evaluate(thing, 1.0)
thing.height                       # 5.0, halfway between the two keys
```

A key is only added where the attribute's current value differs from what
the existing keys already give at that time, or where the time lies outside
the keyed range. Values before the first key or after the last one hold
steady. `AnimProperty.evaluate` returns an `Evaluation` of the value and the
index of the key at or before the time, which can be passed back in to
speed up a sweep through time.

## Track view

```python
from upspring.trackview import TrackView, MouseButton

view = TrackView(400, 300)
obj = view.add_object("arm", info)
obj.props[0].display = True

view.auto_fit_time()
view.auto_fit_view()
curve = view.curve_points(obj.props[0])   # pixel points and key markers

view.press(10, 10, MouseButton.RIGHT)     # right-drag zooms
view.drag(30, 10)
view.release(30, 10)
```

A press and release at the same spot selects the keys near it.

## Command line

```python
from upspring.launcher import parse_command_line, script_arguments

opts = parse_command_line(["upspring", "--run", "build.lua", "--", "out.s3o"])
opts.script                                    # "build.lua"
script_arguments(opts.script, opts.remaining)  # ["build.lua", "out.s3o"]
```

`resolve_script(script, app_path)` looks the script up as given and then
relative to the application directory, raising `LaunchError` if neither
exists. Without `--run`, the first free argument becomes `model_file`.

## What the package does not do

There is no editor window, no rendering, no script interpreter and no
installed command: `upspring.launcher` only works out what the command line
asks for and leaves starting the editor or running the script to the
caller. Reading and writing model files and texture atlases is not part of
the package.

## Running the tests

Install the `test` extra and run pytest from the project directory.