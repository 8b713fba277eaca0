"""Rendering pipeline: result text to blocks, blocks to rich renderables."""
