"""Gradio browser UI for Era Blender."""
