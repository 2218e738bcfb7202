# どこで: `src/polygallery/interactive/gl/shader_sources.py`。
# 何を: 各 shape が使う GLSL 330 core のシェーダソースを定義する。
# なぜ: shape 定義からソース文字列を切り離し、シェーダ差し替えを局所化するため。

from __future__ import annotations

# Cube / Icosahedron（頂点色付き、vec4 入力）。
COLOR_VERTEX_SHADER = """
#version 330 core

in vec4 aVertexPosition;
in vec4 aVertexColor;

uniform mat4 uModelViewMatrix;
uniform mat4 uProjectionMatrix;

out vec4 vColor;

void main() {
    gl_Position = uProjectionMatrix * uModelViewMatrix * aVertexPosition;
    vColor = aVertexColor;
}
"""

COLOR_FRAGMENT_SHADER = """
#version 330 core

in vec4 vColor;
out vec4 outColor;

void main() {
    outColor = vColor;
}
"""

# Sierpinski（vec3 位置と RGB 色）。
SIERPINSKI_VERTEX_SHADER = """
#version 330 core

in vec3 aVertexPosition;
in vec3 aVertexColor;

uniform mat4 uModelViewMatrix;
uniform mat4 uProjectionMatrix;

out vec3 vColor;

void main() {
    gl_Position = uProjectionMatrix * uModelViewMatrix * vec4(aVertexPosition, 1.0);
    vColor = aVertexColor;
}
"""

SIERPINSKI_FRAGMENT_SHADER = """
#version 330 core

in vec3 vColor;
out vec4 outColor;

void main() {
    outColor = vec4(vColor, 1.0);
}
"""

# Tesseract（白いワイヤーフレーム）。
WIREFRAME_VERTEX_SHADER = """
#version 330 core

in vec4 aVertexPosition;

uniform mat4 uModelViewMatrix;
uniform mat4 uProjectionMatrix;

void main() {
    gl_Position = uProjectionMatrix * uModelViewMatrix * aVertexPosition;
}
"""

WIREFRAME_FRAGMENT_SHADER = """
#version 330 core

out vec4 outColor;

void main() {
    outColor = vec4(1.0, 1.0, 1.0, 1.0);
}
"""

# Textured Cube（albedo / roughness / normal の 3 テクスチャと平行光源 1 つ）。
TEXTURED_VERTEX_SHADER = """
#version 330 core

in vec3 a_position;
in vec2 a_texcoord;
in vec3 a_normal;

uniform mat4 u_modelMatrix;
uniform mat4 u_viewMatrix;
uniform mat4 u_projectionMatrix;

out vec2 v_texcoord;
out vec3 v_normal;
out vec3 v_position;

void main() {
    v_texcoord = a_texcoord;
    v_normal = mat3(transpose(inverse(u_modelMatrix))) * a_normal;
    v_position = vec3(u_modelMatrix * vec4(a_position, 1.0));
    gl_Position = u_projectionMatrix * u_viewMatrix * u_modelMatrix * vec4(a_position, 1.0);
}
"""

TEXTURED_FRAGMENT_SHADER = """
#version 330 core

in vec2 v_texcoord;
in vec3 v_normal;
in vec3 v_position;

uniform sampler2D u_albedoMap;
uniform sampler2D u_roughnessMap;
uniform sampler2D u_normalMap;

uniform vec3 u_lightDirection;
uniform vec3 u_viewPosition;

out vec4 fragColor;

void main() {
    vec3 albedo = texture(u_albedoMap, v_texcoord).rgb;
    float roughness = texture(u_roughnessMap, v_texcoord).r;
    vec3 normal = normalize(texture(u_normalMap, v_texcoord).rgb * 2.0 - 1.0);

    // 接空間 -> ワールド空間。上面/底面では +y と平行になるので補助軸を +z に替える。
    vec3 N = normalize(v_normal);
    vec3 helper = abs(N.y) > 0.99 ? vec3(0.0, 0.0, 1.0) : vec3(0.0, 1.0, 0.0);
    vec3 T = normalize(cross(N, helper));
    vec3 B = cross(N, T);
    normal = normalize(mat3(T, B, N) * normal);

    vec3 lightDir = normalize(-u_lightDirection);
    vec3 viewDir = normalize(u_viewPosition - v_position);
    vec3 halfwayDir = normalize(lightDir + viewDir);

    vec3 diffuse = max(dot(normal, lightDir), 0.0) * albedo;
    float spec = pow(max(dot(normal, halfwayDir), 0.0), 32.0);
    vec3 specular = vec3(0.2) * spec * (1.0 - roughness);
    vec3 ambient = 0.1 * albedo;

    fragColor = vec4(ambient + diffuse + specular, 1.0);
}
"""

__all__ = [
    "COLOR_FRAGMENT_SHADER",
    "COLOR_VERTEX_SHADER",
    "SIERPINSKI_FRAGMENT_SHADER",
    "SIERPINSKI_VERTEX_SHADER",
    "TEXTURED_FRAGMENT_SHADER",
    "TEXTURED_VERTEX_SHADER",
    "WIREFRAME_FRAGMENT_SHADER",
    "WIREFRAME_VERTEX_SHADER",
]
