# spheremap

spheremap opens a 1280×720 resizable window with an OpenGL 3.3 context. It
draws a red quad on a sky-blue background. Input handling runs on a fixed
60 ticks-per-second loop, and a frame is drawn on every pass of the loop in
which at least one tick fell due. Press **Escape** or close the window to quit.

## Installation

```
pip install .
```

The package needs `pyglet` and a graphics driver that supports OpenGL 3.3.

## Running

```
sphere-map
```

The command exits with status 0 once the window is closed. It exits with -1
if the window or its graphics could not be set up.

While it runs, the program writes diagnostic lines to standard output. Each
line starts with the file name, line number and function it came from, as in
``window.py(123) `Window.run`: ...``. The lines include OpenGL debug
messages, shader and program info logs, and the frame and tick counts for any
second in which either missed the target of 60.

## Using it as a library

```python
from spheremap.window import Window

with Window(1280, 720, "sphere-map") as window:
    window.run()      # blocks until the window is asked to close
```

`Window` raises `spheremap.window.WindowError` when the window cannot be
opened or its graphics cannot be set up. `Window.close()` asks the loop to
stop, and `Window.deinit()` releases the graphics and destroys the window.
Leaving the `with` block calls `deinit()`.

There are also smaller building blocks:

- `spheremap.gltools`: `load_shader(shader_type, source)` compiles one GLSL
  stage. `load_program(vertex_shader, geometry_shader, fragment_shader)`
  compiles the stages that are not `None` and links them. Both raise
  `ShaderError` when that fails. `enable_gl_debug_output()` routes OpenGL
  debug messages to the log. `debug_type_name`, `debug_severity_name`,
  `debug_source_name` and `shader_type_name` turn GL enum values into names,
  or `"UNKNOWN"`.
- `spheremap.graphics.Graphics`: owns the shader program, vertex array and
  buffer for the quad, and needs a current GL 3.3 context. It provides
  `render()`, `resize(width, height)` and `close()`, and can be used as a
  context manager.
- `spheremap.window.TickClock`: the fixed-step timing used by the loop.
  `TickClock(start_time, ticks_per_second)` is fed timestamps through
  `advance(current_time)`. It returns a `TickResult` with the number of
  ticks due, whether to draw a frame, and, once a second, the
  `(frames, ticks)` counts for that second.
- `spheremap.window.KeyEvent`: a queued key press or release. Its
  `requests_close` property is true for a press of Escape.
- `spheremap.logger.log(*args)`: the location-prefixed logger.
  `get_filename(filepath)` strips directories from `/` or `\` separated
  paths.

## Tests

```
pip install ".[test]"
pytest
```