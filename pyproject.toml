[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spheremap"
version = "0.1.0"
description = "A small OpenGL window that renders a quad on a fixed-rate tick loop."
requires-python = ">=3.10"
keywords = ["opengl", "rendering", "shaders", "pyglet", "game-loop"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sphere-map = "spheremap.main:main"

[tool.hatch.build.targets.wheel]
packages = ["spheremap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
