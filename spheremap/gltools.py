"""Shader compilation, program linking and GL debug-message reporting."""

from __future__ import annotations

import enum
import itertools
from typing import Any, Callable

from pyglet import gl
from pyglet.graphics.shader import Shader, ShaderException, ShaderProgram

from spheremap.logger import log

GL_DEBUG_OUTPUT = 0x92E0
GL_INFO_LOG_LENGTH = 0x8B84

_DEBUG_ID = 0xDEB06
_debug_callback = None


class DebugType(enum.IntEnum):
    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268
    PUSH_GROUP = 0x8269
    POP_GROUP = 0x826A


class DebugSeverity(enum.IntEnum):
    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B


class DebugSource(enum.IntEnum):
    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B


class ShaderType(enum.IntEnum):
    FRAGMENT = 0x8B30
    VERTEX = 0x8B31
    GEOMETRY = 0x8DD9


class ShaderError(RuntimeError):
    """A shader failed to compile or a program failed to link."""


def _enum_name(kind: type[enum.IntEnum], value: int) -> str:
    try:
        return kind(value).name
    except ValueError:
        return "UNKNOWN"


def debug_type_name(debug_type: int) -> str:
    return _enum_name(DebugType, debug_type)


def debug_severity_name(severity: int) -> str:
    return _enum_name(DebugSeverity, severity)


def debug_source_name(source: int) -> str:
    return _enum_name(DebugSource, source)


def shader_type_name(shader_type: int) -> str:
    return _enum_name(ShaderType, shader_type)


def _read_message(message: Any, length: int) -> str:
    """Read a GL message of the given length, or up to its NUL when negative."""
    if not message:
        return ""
    if length >= 0:
        raw = bytes(message[:length])
    else:
        chunks = (message[i : i + 1] for i in itertools.count())
        raw = b"".join(itertools.takewhile(lambda c: c not in (b"", b"\0"), chunks))
    return raw.decode(errors="replace")


def _on_debug_message(source, debug_type, message_id, severity, length, message, user_param):
    if user_param != _DEBUG_ID:
        log("Unexpected user_param: ", user_param, " (was set as ", _DEBUG_ID, ").")
    log(
        "[", debug_type_name(debug_type), "][", debug_severity_name(severity),
        "][", debug_source_name(source), "] id = ", message_id,
        ", length = ", length, ":\n\n", _read_message(message, length), "\n",
    )


def enable_gl_debug_output() -> None:
    """Route GL debug messages to the log."""
    global _debug_callback
    gl.glEnable(GL_DEBUG_OUTPUT)
    _debug_callback = gl.GLDEBUGPROC(_on_debug_message)
    gl.glDebugMessageCallback(_debug_callback, _DEBUG_ID)


def _report_info_log(label: str, query: Callable, read: Callable, object_id: int) -> None:
    length = gl.GLint(0)
    query(object_id, GL_INFO_LOG_LENGTH, length)
    if length.value <= 0:
        return
    buffer = (gl.GLchar * length.value)()
    read(object_id, length.value, None, buffer)
    text = buffer.value.decode(errors="replace")
    log(label, " info log (length ", length.value, "):\n\n", text, "\n")


def load_shader(shader_type: int, source: str) -> Shader:
    """Compile a shader stage; raise ShaderError on failure."""
    type_name = shader_type_name(shader_type)
    try:
        shader = Shader(source, type_name.lower())
    except ShaderException as error:
        log(type_name, " shader info log:\n\n", error, "\n")
        log(type_name, " shader compilation failed.")
        raise ShaderError(f"{type_name} shader compilation failed") from error
    _report_info_log(f"{type_name} shader", gl.glGetShaderiv, gl.glGetShaderInfoLog, shader.id)
    return shader


def load_program(
    vertex_shader: str | None,
    geometry_shader: str | None,
    fragment_shader: str | None,
) -> ShaderProgram:
    """Compile the given shader stages and link them into a program."""
    stages = (
        (ShaderType.VERTEX, vertex_shader),
        (ShaderType.GEOMETRY, geometry_shader),
        (ShaderType.FRAGMENT, fragment_shader),
    )
    shaders: list[Shader] = []
    failures: list[str] = []
    for shader_type, source in stages:
        if source is None:
            continue
        try:
            shaders.append(load_shader(shader_type, source))
        except ShaderError as error:
            failures.append(str(error))
    try:
        if failures:
            raise ShaderError("; ".join(failures))
        try:
            program = ShaderProgram(*shaders)
        except ShaderException as error:
            log("Program info log:\n\n", error, "\n")
            log("Program linking failed.")
            raise ShaderError("Program linking failed") from error
        _report_info_log("Program", gl.glGetProgramiv, gl.glGetProgramInfoLog, program.id)
    finally:
        for shader in shaders:
            shader.delete()
    return program