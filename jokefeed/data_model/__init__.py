"""Shared data model primitives."""

from jokefeed.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
