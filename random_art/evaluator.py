# ==========================================
# random_art/evaluator.py
# ==========================================
import numpy as np
from typing import List, Optional, Tuple
from PIL import Image

from .ast_nodes import ASTNode
from .vec3 import Vector3

Domain = Tuple[float, float, float, float]

# File renders sample the unit square; the shader uses [-1, 1] instead
UNIT_DOMAIN: Domain = (0.0, 1.0, 0.0, 1.0)
CENTERED_DOMAIN: Domain = (-1.0, 1.0, -1.0, 1.0)

class Evaluator:
    """Handles evaluation and rendering of expression trees on the CPU"""

    def __init__(self, domain: Domain = UNIT_DOMAIN):
        self.domain = domain

    def create_coordinate_grids(self, size: Tuple[int, int],
                                domain: Optional[Domain] = None) -> Tuple[np.ndarray, np.ndarray]:
        """Create coordinate grids; pixel i maps to min + i / res * (max - min)"""
        height, width = size
        min_x, max_x, min_y, max_y = domain or self.domain
        x = min_x + (np.arange(width) / width) * (max_x - min_x)
        y = min_y + (np.arange(height) / height) * (max_y - min_y)
        X, Y = np.meshgrid(x, y)
        return X, Y

    def evaluate_grid(self, root: ASTNode, size: Tuple[int, int] = (256, 256),
                      t: float = 0.0, domain: Optional[Domain] = None) -> np.ndarray:
        """Evaluate the tree over a whole grid, returning a (height, width, 3) array"""
        X, Y = self.create_coordinate_grids(size, domain)
        color = root.evaluate(X, Y, t)
        # Channels that do not depend on x or y come back as scalars
        channels = [np.broadcast_to(np.asarray(c, dtype=np.float64), X.shape) for c in color]
        return np.stack(channels, axis=-1)

    def render_pixels(self, root: ASTNode, width: int, height: int, t: float = 0.0,
                      domain: Optional[Domain] = None) -> List[Vector3]:
        """Row-major list of per-pixel colors"""
        grid = self.evaluate_grid(root, (height, width), t, domain)
        return [Vector3(float(r), float(g), float(b)) for r, g, b in grid.reshape(-1, 3)]

    def to_uint8(self, rgb: np.ndarray, remap: bool = False) -> np.ndarray:
        """Map float colors to bytes; remap applies (c + 1) / 2 as the shader does"""
        if remap:
            rgb = (rgb + 1.0) / 2.0
        rgb = np.nan_to_num(rgb, nan=0.0, posinf=1.0, neginf=0.0)
        return (np.clip(rgb, 0.0, 1.0) * 255).astype(np.uint8)

    def render_image(self, root: ASTNode, size: Tuple[int, int] = (800, 800),
                     t: float = 0.0, filename: str = None, remap: bool = False,
                     domain: Optional[Domain] = None) -> Image.Image:
        """Render tree as an image"""
        rgb = self.evaluate_grid(root, size, t, domain)
        img = Image.fromarray(self.to_uint8(rgb, remap))
        if filename:
            img.save(filename)
        return img

    def create_animation_frames(self, root: ASTNode, num_frames: int = 30,
                                size: Tuple[int, int] = (256, 256),
                                remap: bool = False) -> List[Image.Image]:
        """Render frames over one period of t = sin(phase), matching the live shader"""
        frames = []
        phases = np.linspace(0.0, 2 * np.pi, num_frames, endpoint=False)
        for phase in phases:
            frames.append(self.render_image(root, size, float(np.sin(phase)), remap=remap))
        return frames
