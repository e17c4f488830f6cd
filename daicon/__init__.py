"""Convert a folder of SVG icons into a Flutter icon font and Dart class."""

__version__ = "1.0.0"
