"""
甘特图模块
"""

from .model import Chart, ChartBar, ChartBarType, ChartColumn, ChartLine, ChartError, UnknownBarTypeError
from .registry import BAR_TYPE_TABLE, RegistryError, register_bar_types, validate_registry
from .creator import DetailedChartCreator, create_chart, create_common_chart_items
from .exporter import export_chart, export_excel, export_json, render_png

__all__ = [
    'Chart', 'ChartBar', 'ChartBarType', 'ChartColumn', 'ChartLine',
    'ChartError', 'UnknownBarTypeError',
    'BAR_TYPE_TABLE', 'RegistryError', 'register_bar_types', 'validate_registry',
    'DetailedChartCreator', 'create_chart', 'create_common_chart_items',
    'export_chart', 'export_excel', 'export_json', 'render_png',
]
