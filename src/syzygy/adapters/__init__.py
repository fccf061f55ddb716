# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Export adapters for eclipse models.

All file I/O lives here; the domain layer stays pure.
"""
from syzygy.adapters.json_exporter import JsonModelExporter, model_to_dict
from syzygy.adapters.geojson_exporter import GeoJsonModelExporter

__all__ = ["JsonModelExporter", "GeoJsonModelExporter", "model_to_dict"]
