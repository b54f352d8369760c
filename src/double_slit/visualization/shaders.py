"""GLSL sources for presenting the CPU-rendered frame as a textured quad."""

FRAME_VERTEX_SHADER = """
#version 330 core
layout (location = 0) in vec2 position;
layout (location = 1) in vec2 tex_coord;

uniform mat4 projection;

out vec2 v_tex_coord;

void main() {
    gl_Position = projection * vec4(position, 0.0, 1.0);
    v_tex_coord = tex_coord;
}
"""

FRAME_FRAGMENT_SHADER = """
#version 330 core
in vec2 v_tex_coord;

uniform sampler2D frame;

out vec4 frag_color;

void main() {
    frag_color = vec4(texture(frame, v_tex_coord).rgb, 1.0);
}
"""
