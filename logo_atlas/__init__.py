"""Logo Atlas Maker: arrange PNG images into a fixed-grid sprite atlas."""

__version__ = "1.0.0"
