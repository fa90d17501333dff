"""
Export of ranked review records.

Modules:
    record_exporter - JSON / CSV writers
"""

from .record_exporter import (
    EXPORT_FORMATS,
    FIELDNAMES,
    export_csv,
    export_json,
    export_records,
    record_to_row,
)

__all__ = [
    'EXPORT_FORMATS',
    'FIELDNAMES',
    'export_csv',
    'export_json',
    'export_records',
    'record_to_row',
]
