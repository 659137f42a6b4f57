"""Input table loading and validation."""

from .frames_api import Frames, load_frames, read_table

__all__ = ['Frames', 'load_frames', 'read_table']
