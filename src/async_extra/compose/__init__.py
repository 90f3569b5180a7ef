"""Composition utilities: Pipeline builder and pipe()."""

from async_extra.compose.pipeline import Pipeline, pipe

__all__ = ['Pipeline', 'pipe']
