import ctypes
import logging
import sys

import numpy as np
from OpenGL.GL import *
from OpenGL.GL.shaders import compileProgram, compileShader
from OpenGL.GLUT import *
from pyrr import Matrix44, Vector3

logger = logging.getLogger(__name__)

VERTEX_SHADER = '''
#version 330
layout(location = 0) in vec3 position;
layout(location = 1) in vec3 normal;
uniform mat4 model;
uniform mat4 view;
uniform mat4 projection;
out vec3 vNormal;
out vec3 vPos;
void main(){
    vNormal = mat3(transpose(inverse(model))) * normal;
    vPos = vec3(model * vec4(position,1.0));
    gl_Position = projection * view * model * vec4(position,1.0);
}
'''

FRAGMENT_SHADER = '''
#version 330
in vec3 vNormal;
in vec3 vPos;
out vec4 outColor;
uniform vec3 lightPos;
uniform vec3 objectColor;
void main(){
    vec3 ambient = 0.3 * objectColor;
    vec3 norm = normalize(vNormal);
    vec3 lightDir = normalize(lightPos - vPos);
    float diff = max(dot(norm, lightDir), 0.0);
    vec3 diffuse = diff * objectColor;
    outColor = vec4(ambient + diffuse, 1.0);
}
'''

# Full-screen quad for the camera frame
BACKGROUND_VERTEX_SHADER = '''
#version 330
layout(location = 0) in vec2 position;
layout(location = 1) in vec2 uv;
out vec2 vUv;
void main(){
    vUv = uv;
    gl_Position = vec4(position, 0.0, 1.0);
}
'''

BACKGROUND_FRAGMENT_SHADER = '''
#version 330
in vec2 vUv;
out vec4 outColor;
uniform sampler2D frame;
void main(){
    outColor = texture(frame, vUv);
}
'''

# x, y, u, v; v flipped since image rows run top to bottom
BACKGROUND_QUAD = np.array([
    -1.0, -1.0, 0.0, 1.0,
    1.0, -1.0, 1.0, 1.0,
    1.0, 1.0, 1.0, 0.0,
    -1.0, -1.0, 0.0, 1.0,
    1.0, 1.0, 1.0, 0.0,
    -1.0, 1.0, 0.0, 0.0,
], dtype=np.float32)


class GpuMesh:
    def __init__(self, mesh):
        self.vertex_count = mesh.vertex_count
        self.vao = glGenVertexArrays(1)
        self.vbo = glGenBuffers(1)
        glBindVertexArray(self.vao)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
        glBufferData(GL_ARRAY_BUFFER, mesh.vertex_data.nbytes, mesh.vertex_data, GL_STATIC_DRAW)
        # positions
        glEnableVertexAttribArray(0)
        glVertexAttribPointer(0, 3, GL_FLOAT, GL_FALSE, 24, ctypes.c_void_p(0))
        # normals
        glEnableVertexAttribArray(1)
        glVertexAttribPointer(1, 3, GL_FLOAT, GL_FALSE, 24, ctypes.c_void_p(12))
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glBindVertexArray(0)


class OpenGLRenderer:
    """Draws the camera frame and every visible bound model on top of it."""
    def __init__(self, width=800, height=600, fov=75.0, near=0.1, far=1000.0, camera_distance=2.0):
        self.width = width
        self.height = height
        self.view_matrix = Matrix44.look_at(Vector3([0.0, 0.0, camera_distance]),
                                            Vector3([0.0, 0.0, 0.0]),
                                            Vector3([0.0, 1.0, 0.0]))
        self.projection = Matrix44.perspective_projection(fov, width / float(height), near, far)
        self.camera_distance = camera_distance
        self.frame = None
        self.setup_gl()

    @classmethod
    def from_config(cls, render_cfg):
        return cls(width=render_cfg.width, height=render_cfg.height, fov=render_cfg.fov,
                   near=render_cfg.near, far=render_cfg.far,
                   camera_distance=render_cfg.camera_distance)

    def setup_gl(self):
        glutInit(sys.argv)
        glutInitDisplayMode(GLUT_DOUBLE | GLUT_RGBA | GLUT_DEPTH)
        glutInitWindowSize(self.width, self.height)
        glutInitWindowPosition(100, 100)
        self.window = glutCreateWindow(b"Hand Overlay")
        glEnable(GL_DEPTH_TEST)
        self.program = compileProgram(compileShader(VERTEX_SHADER, GL_VERTEX_SHADER),
                                      compileShader(FRAGMENT_SHADER, GL_FRAGMENT_SHADER))
        self.bg_program = compileProgram(compileShader(BACKGROUND_VERTEX_SHADER, GL_VERTEX_SHADER),
                                         compileShader(BACKGROUND_FRAGMENT_SHADER, GL_FRAGMENT_SHADER))
        self._setup_background()
        logger.info("OpenGL %s", glGetString(GL_VERSION).decode(errors="replace"))

    def _setup_background(self):
        self.bg_vao = glGenVertexArrays(1)
        self.bg_vbo = glGenBuffers(1)
        glBindVertexArray(self.bg_vao)
        glBindBuffer(GL_ARRAY_BUFFER, self.bg_vbo)
        glBufferData(GL_ARRAY_BUFFER, BACKGROUND_QUAD.nbytes, BACKGROUND_QUAD, GL_STATIC_DRAW)
        glEnableVertexAttribArray(0)
        glVertexAttribPointer(0, 2, GL_FLOAT, GL_FALSE, 16, ctypes.c_void_p(0))
        glEnableVertexAttribArray(1)
        glVertexAttribPointer(1, 2, GL_FLOAT, GL_FALSE, 16, ctypes.c_void_p(8))
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glBindVertexArray(0)
        self.bg_texture = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, self.bg_texture)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glBindTexture(GL_TEXTURE_2D, 0)

    def set_frame(self, frame_bgr):
        self.frame = frame_bgr

    def _draw_background(self):
        if self.frame is None:
            return
        h, w = self.frame.shape[:2]
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glBindTexture(GL_TEXTURE_2D, self.bg_texture)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGB, w, h, 0, GL_BGR, GL_UNSIGNED_BYTE,
                     np.ascontiguousarray(self.frame))
        glDisable(GL_DEPTH_TEST)
        glUseProgram(self.bg_program)
        glUniform1i(glGetUniformLocation(self.bg_program, 'frame'), 0)
        glBindVertexArray(self.bg_vao)
        glDrawArrays(GL_TRIANGLES, 0, 6)
        glBindVertexArray(0)
        glBindTexture(GL_TEXTURE_2D, 0)
        glEnable(GL_DEPTH_TEST)

    def _draw_model(self, model):
        if model.gpu is None:
            model.gpu = GpuMesh(model.mesh)
        glUniformMatrix4fv(glGetUniformLocation(self.program, 'model'), 1, GL_FALSE,
                           model.model_matrix().astype('float32'))
        glUniform3f(glGetUniformLocation(self.program, 'objectColor'), *model.color)
        glBindVertexArray(model.gpu.vao)
        glDrawArrays(GL_TRIANGLES, 0, model.gpu.vertex_count)
        glBindVertexArray(0)

    def display(self, registry):
        glClearColor(0.0, 0.0, 0.0, 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._draw_background()
        glUseProgram(self.program)
        glUniformMatrix4fv(glGetUniformLocation(self.program, 'view'), 1, GL_FALSE, self.view_matrix.astype('float32'))
        glUniformMatrix4fv(glGetUniformLocation(self.program, 'projection'), 1, GL_FALSE, self.projection.astype('float32'))
        glUniform3f(glGetUniformLocation(self.program, 'lightPos'), 2.0, 4.0, self.camera_distance + 2.0)
        for binding in registry:
            if binding.visible:
                self._draw_model(binding.model)
        glUseProgram(0)
        glutSwapBuffers()
