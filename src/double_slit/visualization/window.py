"""glfw window that presents the simulation's visible surface.

The frame itself is rasterized on the CPU by the Renderer; this module
only uploads the finished pixels into a texture and draws one quad per
display refresh.
"""

from __future__ import annotations

import ctypes
import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

try:
    import glfw
    from OpenGL.GL import (
        GL_ARRAY_BUFFER,
        GL_CLAMP_TO_EDGE,
        GL_COLOR_BUFFER_BIT,
        GL_FALSE,
        GL_FLOAT,
        GL_FRAGMENT_SHADER,
        GL_LINEAR,
        GL_RGB,
        GL_RGB8,
        GL_STATIC_DRAW,
        GL_TEXTURE0,
        GL_TEXTURE_2D,
        GL_TEXTURE_MAG_FILTER,
        GL_TEXTURE_MIN_FILTER,
        GL_TEXTURE_WRAP_S,
        GL_TEXTURE_WRAP_T,
        GL_TRIANGLE_STRIP,
        GL_UNPACK_ALIGNMENT,
        GL_UNSIGNED_BYTE,
        GL_VERTEX_SHADER,
        glActiveTexture,
        glAttachShader,
        glBindBuffer,
        glBindTexture,
        glBindVertexArray,
        glBufferData,
        glClear,
        glClearColor,
        glCompileShader,
        glCreateProgram,
        glCreateShader,
        glDeleteProgram,
        glDeleteShader,
        glDeleteTextures,
        glDrawArrays,
        glEnableVertexAttribArray,
        glGenBuffers,
        glGenTextures,
        glGenVertexArrays,
        glGetProgramInfoLog,
        glGetShaderInfoLog,
        glGetUniformLocation,
        glLinkProgram,
        glPixelStorei,
        glShaderSource,
        glTexImage2D,
        glTexParameteri,
        glTexSubImage2D,
        glUniform1i,
        glUniformMatrix4fv,
        glUseProgram,
        glVertexAttribPointer,
        glViewport,
    )

    HAS_GL = True
except ImportError:
    HAS_GL = False

import pyrr

from double_slit.utils.constants import SCREEN_MAX_DISTANCE, WAVELENGTH_MAX_NM, WAVELENGTH_MIN_NM
from double_slit.utils.types import SimulationParams

if TYPE_CHECKING:
    from double_slit.simulation import DoubleSlitSimulation

logger = logging.getLogger(__name__)

WAVELENGTH_STEP_NM = 10.0
SCREEN_DISTANCE_STEP = 10.0
MIN_SCREEN_DISTANCE = 400.0
MAX_PARTICLE_SPEED = 10.0


def frame_projection(width: int, height: int) -> NDArray[np.float32]:
    """Orthographic projection with (0, 0) at the top-left pixel."""
    return pyrr.matrix44.create_orthogonal_projection(
        0.0, float(width), float(height), 0.0, -1.0, 1.0, dtype=np.float32
    )


def quad_vertices(width: int, height: int) -> NDArray[np.float32]:
    """Triangle-strip quad covering the frame: [x, y, u, v] per vertex."""
    return np.array(
        [
            [0.0, 0.0, 0.0, 0.0],
            [width, 0.0, 1.0, 0.0],
            [0.0, height, 0.0, 1.0],
            [width, height, 1.0, 1.0],
        ],
        dtype=np.float32,
    )


def _compile_shader(source: str, shader_type: int) -> int:
    """Compile a GLSL shader from source."""
    shader = glCreateShader(shader_type)
    glShaderSource(shader, source)
    glCompileShader(shader)
    info_log = glGetShaderInfoLog(shader)
    if info_log:
        raise RuntimeError(f"Shader compile error: {info_log.decode()}")
    return shader


def _create_program(vertex_src: str, fragment_src: str) -> int:
    """Create a shader program from vertex and fragment sources."""
    vs = _compile_shader(vertex_src, GL_VERTEX_SHADER)
    fs = _compile_shader(fragment_src, GL_FRAGMENT_SHADER)
    program = glCreateProgram()
    glAttachShader(program, vs)
    glAttachShader(program, fs)
    glLinkProgram(program)
    info_log = glGetProgramInfoLog(program)
    if info_log:
        raise RuntimeError(f"Program link error: {info_log.decode()}")
    glDeleteShader(vs)
    glDeleteShader(fs)
    return program


class SimulationWindow:
    """Desktop window for the double-slit simulation.

    Keyboard controls:
        SPACE       -- pause/resume particle flight
        M           -- toggle wave/particle mode
        R           -- clear the detection screen
        UP/DOWN     -- wavelength +/- 10 nm
        LEFT/RIGHT  -- screen distance -/+ 10
        +/-         -- particle speed
        ESC         -- close window
    """

    def __init__(self, simulation: DoubleSlitSimulation) -> None:
        if not HAS_GL:
            raise ImportError("PyOpenGL and glfw required for the simulation window")

        self.simulation = simulation
        self.width = simulation.renderer.width
        self.height = simulation.renderer.height

        # GL handles
        self.window = None
        self.program: int = 0
        self.vao: int = 0
        self.vbo: int = 0
        self.texture: int = 0

    def initialize(self) -> None:
        """Set up glfw window, OpenGL context and the frame texture."""
        if not glfw.init():
            raise RuntimeError("Failed to initialize GLFW")

        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)
        glfw.window_hint(glfw.RESIZABLE, glfw.FALSE)

        self.window = glfw.create_window(
            self.width, self.height, "Double-Slit Simulation", None, None
        )
        if not self.window:
            glfw.terminate()
            raise RuntimeError("Failed to create GLFW window")

        glfw.make_context_current(self.window)
        glfw.swap_interval(1)  # one frame per display refresh
        glfw.set_key_callback(self.window, self._key_callback)

        fb_width, fb_height = glfw.get_framebuffer_size(self.window)
        glViewport(0, 0, fb_width, fb_height)
        glClearColor(0.0, 0.0, 0.0, 1.0)

        self._compile_shaders()
        self._setup_quad()
        self._setup_texture()
        logger.info("Window opened (%dx%d)", self.width, self.height)

    def _compile_shaders(self) -> None:
        from double_slit.visualization.shaders import (
            FRAME_FRAGMENT_SHADER,
            FRAME_VERTEX_SHADER,
        )

        self.program = _create_program(FRAME_VERTEX_SHADER, FRAME_FRAGMENT_SHADER)

    def _setup_quad(self) -> None:
        vertices = quad_vertices(self.width, self.height)

        self.vao = glGenVertexArrays(1)
        self.vbo = glGenBuffers(1)
        glBindVertexArray(self.vao)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
        glBufferData(GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL_STATIC_DRAW)

        stride = 4 * 4  # 4 floats * 4 bytes
        # position
        glVertexAttribPointer(0, 2, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(0))
        glEnableVertexAttribArray(0)
        # tex_coord
        glVertexAttribPointer(1, 2, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(8))
        glEnableVertexAttribArray(1)

        glBindVertexArray(0)

    def _setup_texture(self) -> None:
        self.texture = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, self.texture)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_CLAMP_TO_EDGE)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_CLAMP_TO_EDGE)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(
            GL_TEXTURE_2D, 0, GL_RGB8, self.width, self.height, 0,
            GL_RGB, GL_UNSIGNED_BYTE, None,
        )

    def present_frame(self) -> None:
        """Upload the visible surface and draw it."""
        pixels = np.ascontiguousarray(self.simulation.surface.to_rgb8())

        glClear(GL_COLOR_BUFFER_BIT)
        glUseProgram(self.program)
        glUniformMatrix4fv(
            glGetUniformLocation(self.program, "projection"),
            1, GL_FALSE, frame_projection(self.width, self.height),
        )
        glActiveTexture(GL_TEXTURE0)
        glBindTexture(GL_TEXTURE_2D, self.texture)
        glTexSubImage2D(
            GL_TEXTURE_2D, 0, 0, 0, self.width, self.height,
            GL_RGB, GL_UNSIGNED_BYTE, pixels,
        )
        glUniform1i(glGetUniformLocation(self.program, "frame"), 0)

        glBindVertexArray(self.vao)
        glDrawArrays(GL_TRIANGLE_STRIP, 0, 4)
        glBindVertexArray(0)
        glfw.swap_buffers(self.window)

    def run(self) -> None:
        """Main loop: one simulation frame per refresh until the window closes."""
        self.initialize()
        self.simulation.start()

        try:
            while not glfw.window_should_close(self.window):
                glfw.poll_events()
                self.simulation.scheduler.run_pending(glfw.get_time() * 1000.0)
                self.present_frame()
        finally:
            self._cleanup()

    def _adjust_params(self, **changes: float) -> None:
        current = self.simulation.params
        values = {
            "wavelength": current.wavelength,
            "slit_width": current.slit_width,
            "slit_distance": current.slit_distance,
            "screen_distance": current.screen_distance,
        }
        values.update(changes)
        values["wavelength"] = min(max(values["wavelength"], WAVELENGTH_MIN_NM), WAVELENGTH_MAX_NM)
        values["screen_distance"] = min(
            max(values["screen_distance"], MIN_SCREEN_DISTANCE), SCREEN_MAX_DISTANCE
        )
        self.simulation.set_params(SimulationParams(**values))

    def _key_callback(self, window, key, scancode, action, mods) -> None:  # type: ignore[no-untyped-def]
        """Handle keyboard input."""
        if action not in (glfw.PRESS, glfw.REPEAT):
            return

        sim = self.simulation
        params = sim.params
        if key == glfw.KEY_ESCAPE:
            glfw.set_window_should_close(window, True)
        elif key == glfw.KEY_SPACE:
            sim.toggle_pause()
        elif key == glfw.KEY_M:
            sim.toggle_mode()
        elif key == glfw.KEY_R:
            sim.clear_screen()
        elif key == glfw.KEY_UP:
            self._adjust_params(wavelength=params.wavelength + WAVELENGTH_STEP_NM)
        elif key == glfw.KEY_DOWN:
            self._adjust_params(wavelength=params.wavelength - WAVELENGTH_STEP_NM)
        elif key == glfw.KEY_RIGHT:
            self._adjust_params(screen_distance=params.screen_distance + SCREEN_DISTANCE_STEP)
        elif key == glfw.KEY_LEFT:
            self._adjust_params(screen_distance=params.screen_distance - SCREEN_DISTANCE_STEP)
        elif key == glfw.KEY_EQUAL:  # +
            sim.set_particle_speed(min(sim.config.particle_speed + 1, MAX_PARTICLE_SPEED))
        elif key == glfw.KEY_MINUS:
            sim.set_particle_speed(max(sim.config.particle_speed - 1, 1.0))

    def _cleanup(self) -> None:
        """Cancel the pending frame, free GL objects, terminate glfw."""
        self.simulation.stop()
        if self.texture:
            glDeleteTextures([self.texture])
        if self.program:
            glDeleteProgram(self.program)
        glfw.terminate()
        logger.info("Window closed")
