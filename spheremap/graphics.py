"""Renders a single coloured quad with a minimal shader program."""

from __future__ import annotations

import itertools
from array import array

from pyglet import gl

from spheremap.gltools import ShaderError, enable_gl_debug_output, load_program
from spheremap.logger import log

QUAD_DATA: tuple[tuple[float, float, float], ...] = (
    (-0.5, -0.5, 0.0),
    (-0.5, 0.5, 0.0),
    (0.5, -0.5, 0.0),
    (0.5, 0.5, 0.0),
)

CLEAR_COLOUR = (0.0, 0.5, 1.0, 1.0)

SHADER_VERT = """
#version 330 core

layout(location = 0) in vec3 position_in;

void main() {
	gl_Position = vec4(position_in, 1.0f);
}
"""

SHADER_FRAG = """
#version 330 core

out vec4 colour_out;

void main() {
	colour_out = vec4(1.0f, 0.0f, 0.0f, 1.0f);
}
"""

_FLOAT_SIZE = array("f").itemsize


class Graphics:
    """GL state for drawing the quad; needs a current GL 3.3 context."""

    def __init__(self) -> None:
        enable_gl_debug_output()
        gl.glClearColor(*CLEAR_COLOUR)

        try:
            self.program = load_program(SHADER_VERT, None, SHADER_FRAG)
        except ShaderError:
            log("Failed to load shaders.")
            raise

        vao = gl.GLuint(0)
        gl.glGenVertexArrays(1, vao)
        self.vao = vao.value
        gl.glBindVertexArray(self.vao)

        vbo = gl.GLuint(0)
        gl.glGenBuffers(1, vbo)
        self.vbo = vbo.value
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)

        gl.glVertexAttribPointer(0, 3, gl.GL_FLOAT, gl.GL_FALSE, 3 * _FLOAT_SIZE, None)
        gl.glEnableVertexAttribArray(0)

        self.program.use()

        data = array("f", itertools.chain.from_iterable(QUAD_DATA)).tobytes()
        gl.glBufferData(gl.GL_ARRAY_BUFFER, len(data), data, gl.GL_STATIC_DRAW)

        self.viewport: tuple[int, int] | None = None
        self._closed = False
        log("Successfully initialised graphics.")

    def close(self) -> None:
        """Release the program, vertex array and buffer."""
        if self._closed:
            return
        self.program.delete()
        gl.glDeleteVertexArrays(1, gl.GLuint(self.vao))
        gl.glDeleteBuffers(1, gl.GLuint(self.vbo))
        self._closed = True
        log("Successfully deinitialised graphics.")

    def render(self) -> None:
        """Clear the frame and draw the quad."""
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)
        gl.glDrawArrays(gl.GL_TRIANGLE_STRIP, 0, 4)

    def resize(self, width: int, height: int) -> None:
        """Fit the viewport to a framebuffer of the given size."""
        gl.glViewport(0, 0, width, height)
        self.viewport = (width, height)

    def __enter__(self) -> Graphics:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()