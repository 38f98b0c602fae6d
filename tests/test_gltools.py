import itertools
from unittest import mock

import pyglet

pyglet.options["shadow_window"] = False

import pytest  # noqa: E402
from pyglet import gl as real_gl  # noqa: E402
from pyglet.graphics.shader import ShaderException  # noqa: E402

from spheremap import gltools  # noqa: E402
from spheremap.gltools import (  # noqa: E402
    DebugSeverity,
    DebugSource,
    DebugType,
    ShaderError,
    ShaderType,
    debug_severity_name,
    debug_source_name,
    debug_type_name,
    enable_gl_debug_output,
    load_program,
    load_shader,
    shader_type_name,
)


class FakeShaderObject:
    def __init__(self, shader_id, source, stage):
        self.id = shader_id
        self.source = source
        self.stage = stage
        self.deleted = False

    def delete(self):
        self.deleted = True


class FakeProgramObject:
    def __init__(self, program_id, shaders):
        self.id = program_id
        self.shaders = shaders


class FakeShaders:
    """Stands in for the shader classes; sources containing 'broken' fail."""

    def __init__(self, fail_link=False):
        self.fail_link = fail_link
        self.shaders = []
        self.programs = []
        self._ids = itertools.count(100)

    def shader(self, source, stage):
        if "broken" in source:
            raise ShaderException("Shader compilation failed.\nsyntax problem")
        created = FakeShaderObject(next(self._ids), source, stage)
        self.shaders.append(created)
        return created

    def program(self, *shaders):
        if self.fail_link:
            raise ShaderException("Program linking failed.\nlink problem")
        created = FakeProgramObject(42, list(shaders))
        self.programs.append(created)
        return created


class FakeGL:
    GLint = real_gl.GLint
    GLchar = real_gl.GLchar

    def __init__(self):
        self.shader_logs = {}
        self.program_logs = {}
        self.enabled = []
        self.debug_callback = None
        self.debug_user_param = None

    @staticmethod
    def _length(text, ref):
        ref.value = len(text) + 1 if text else 0

    def glGetShaderiv(self, shader_id, pname, ref):
        self._length(self.shader_logs.get(shader_id, b""), ref)

    def glGetShaderInfoLog(self, shader_id, size, length, buffer):
        buffer.value = self.shader_logs[shader_id][: size - 1]

    def glGetProgramiv(self, program_id, pname, ref):
        self._length(self.program_logs.get(program_id, b""), ref)

    def glGetProgramInfoLog(self, program_id, size, length, buffer):
        buffer.value = self.program_logs[program_id][: size - 1]

    def glEnable(self, capability):
        self.enabled.append(capability)

    def GLDEBUGPROC(self, function):
        return function

    def glDebugMessageCallback(self, callback, user_param):
        self.debug_callback = callback
        self.debug_user_param = user_param


VERTEX_SOURCE = "void main() { gl_Position = vec4(0.0); }"
FRAGMENT_SOURCE = "out vec4 c; void main() { c = vec4(1.0); }"


def _patched(fake_gl, shaders):
    return (
        mock.patch.object(gltools, "gl", fake_gl),
        mock.patch.object(gltools, "Shader", shaders.shader),
        mock.patch.object(gltools, "ShaderProgram", shaders.program),
    )


@pytest.fixture
def fake_gl():
    return FakeGL()


@pytest.fixture
def shaders(fake_gl):
    fake_shaders = FakeShaders()
    first, second, third = _patched(fake_gl, fake_shaders)
    with first, second, third:
        yield fake_shaders


@pytest.mark.parametrize("kind", list(DebugType))
def test_debug_type_names(kind):
    assert debug_type_name(kind) == kind.name
    assert debug_type_name(int(kind)) == kind.name


@pytest.mark.parametrize("kind", list(DebugSeverity))
def test_debug_severity_names(kind):
    assert debug_severity_name(int(kind)) == kind.name


@pytest.mark.parametrize("kind", list(DebugSource))
def test_debug_source_names(kind):
    assert debug_source_name(int(kind)) == kind.name


def test_named_values():
    assert debug_type_name(DebugType.ERROR) == "ERROR"
    assert debug_severity_name(DebugSeverity.NOTIFICATION) == "NOTIFICATION"
    assert debug_source_name(DebugSource.SHADER_COMPILER) == "SHADER_COMPILER"
    assert shader_type_name(ShaderType.VERTEX) == "VERTEX"
    assert shader_type_name(ShaderType.GEOMETRY) == "GEOMETRY"
    assert shader_type_name(ShaderType.FRAGMENT) == "FRAGMENT"


@pytest.mark.parametrize(
    "function", [debug_type_name, debug_severity_name, debug_source_name, shader_type_name]
)
def test_unknown_values(function):
    assert function(0) == "UNKNOWN"
    assert function(-1) == "UNKNOWN"


def test_load_shader_success(shaders, capsys):
    shader = load_shader(ShaderType.VERTEX, VERTEX_SOURCE)
    assert shader.source == VERTEX_SOURCE
    assert shader.stage == "vertex"
    assert shader.deleted is False
    assert "info log" not in capsys.readouterr().out


def test_load_shader_reports_info_log(fake_gl, shaders, capsys):
    fake_gl.shader_logs[100] = b"minor warning"
    shader = load_shader(ShaderType.GEOMETRY, VERTEX_SOURCE)
    assert shader.stage == "geometry"
    out = capsys.readouterr().out
    assert "GEOMETRY shader info log (length 14)" in out
    assert "minor warning" in out


def test_load_shader_failure(shaders, capsys):
    with pytest.raises(ShaderError):
        load_shader(ShaderType.FRAGMENT, "broken")
    out = capsys.readouterr().out
    assert "FRAGMENT shader compilation failed." in out
    assert "syntax problem" in out


def test_load_program_links_given_stages(shaders):
    program = load_program(VERTEX_SOURCE, None, FRAGMENT_SOURCE)
    assert program.id == 42
    assert [s.stage for s in program.shaders] == ["vertex", "fragment"]
    assert [s.source for s in program.shaders] == [VERTEX_SOURCE, FRAGMENT_SOURCE]
    assert all(s.deleted for s in program.shaders)


def test_load_program_reports_info_log(fake_gl, shaders, capsys):
    fake_gl.program_logs[42] = b"linked with notes"
    program = load_program(VERTEX_SOURCE, None, FRAGMENT_SOURCE)
    assert program.id == 42
    out = capsys.readouterr().out
    assert "Program info log (length 18)" in out
    assert "linked with notes" in out


def test_load_program_compile_failure(shaders):
    with pytest.raises(ShaderError):
        load_program(VERTEX_SOURCE, None, "broken")
    assert shaders.programs == []
    assert [s.deleted for s in shaders.shaders] == [True]


def test_load_program_link_failure(fake_gl, capsys):
    fake_shaders = FakeShaders(fail_link=True)
    first, second, third = _patched(fake_gl, fake_shaders)
    with first, second, third, pytest.raises(ShaderError):
        load_program(VERTEX_SOURCE, None, FRAGMENT_SOURCE)
    assert [s.deleted for s in fake_shaders.shaders] == [True, True]
    out = capsys.readouterr().out
    assert "Program linking failed." in out
    assert "link problem" in out


def test_debug_output_reports_messages(fake_gl, shaders, capsys):
    enable_gl_debug_output()
    assert fake_gl.enabled == [gltools.GL_DEBUG_OUTPUT]
    text = b"buffer warning"
    fake_gl.debug_callback(
        DebugSource.API, DebugType.ERROR, 7, DebugSeverity.HIGH,
        len(text), text, fake_gl.debug_user_param,
    )
    out = capsys.readouterr().out
    assert "[ERROR][HIGH][API] id = 7" in out
    assert "buffer warning" in out
    assert "Unexpected user_param" not in out


def test_debug_output_flags_foreign_user_param(fake_gl, shaders, capsys):
    enable_gl_debug_output()
    fake_gl.debug_callback(
        DebugSource.OTHER, DebugType.OTHER, 1, DebugSeverity.LOW, -1, b"note\0tail", None
    )
    out = capsys.readouterr().out
    assert "Unexpected user_param" in out
    assert "note" in out
    assert "tail" not in out