# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for eclipse model export.

Adapters implement these to write the derived model in different file
formats for external renderers.
"""
from syzygy.ports.export import ModelExporter

__all__ = ["ModelExporter"]
