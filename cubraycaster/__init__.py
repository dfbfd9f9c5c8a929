"""Grid-based first-person raycaster for .cub scenes with XPM wall textures."""

__version__ = "0.1.0"