"""Run logging for loader and CLI activity."""

from .logger import RunLogger

__all__ = ["RunLogger"]
