"""
random_art/shader.py - GLSL templates for real-time rendering of a tree
"""
from .ast_nodes import ASTNode

PLACEHOLDER = "#REPLACE_ME#"

FRAGMENT_SHADER_TEMPLATE = """
#version 330
in vec2 fragTexCoord;
out vec4 finalColor;
uniform float time;

vec4 map_color(vec3 rgb) {
    return vec4((rgb + 1.0) / 2.0, 1.0);
}

// pow() is undefined for a negative base, so raise to the 8th by squaring
float well_fn(float x) {
    float w = 1.0 - 2.0 / (1.0 + x * x);
    w = w * w;
    w = w * w;
    return w * w;
}

vec3 well_fn(vec3 v) {
    return vec3(well_fn(v.x), well_fn(v.y), well_fn(v.z));
}

float tent_fn(float x) {
    return 1.0 - 2.0 * abs(x);
}

vec3 tent_fn(vec3 v) {
    return vec3(tent_fn(v.x), tent_fn(v.y), tent_fn(v.z));
}

void main() {
    float x = fragTexCoord.x * 2.0 - 1.0;
    float y = fragTexCoord.y * 2.0 - 1.0;
    float t = sin(time);
    finalColor = map_color(#REPLACE_ME#);
}
"""

VERTEX_SHADER = """
#version 330 core

in vec3 position;
in vec2 texcoord;

out vec2 fragTexCoord;

void main() {
    gl_Position = vec4(position, 1);
    fragTexCoord = texcoord;
}
"""

def build_fragment_shader(root: ASTNode, template: str = FRAGMENT_SHADER_TEMPLATE) -> str:
    """Substitute the tree's GLSL expression into a fragment shader template"""
    if PLACEHOLDER not in template:
        raise ValueError(f"Shader template has no {PLACEHOLDER} placeholder")
    return template.replace(PLACEHOLDER, root.to_glsl())
