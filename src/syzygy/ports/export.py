# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for eclipse model export.

Adapters implement this to hand the derived model to consumers (map and
globe renderers, notebooks) in various formats (JSON, GeoJSON).
"""
from typing import Protocol, runtime_checkable

from syzygy.domain.model import EclipseModel


@runtime_checkable
class ModelExporter(Protocol):
    """Port for exporting a derived eclipse model to file."""

    def export(self, model: EclipseModel, path: str) -> int:
        """
        Export an eclipse model to a file.

        Args:
            model: Derived EclipseModel.
            path: Output file path.

        Returns:
            Number of records (features or top-level entries) written.
        """
        ...
