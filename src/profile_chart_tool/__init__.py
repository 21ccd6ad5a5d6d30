"""
Profile Chart Tool Package
"""

from .models import Task, TaskCategory, ProfileInfo
from .parser import parse_profile, load_profile
from .critical_path import CriticalPathAnalyzer, CriticalPath, CriticalPathEntry
from .chart import Chart, DetailedChartCreator, create_chart, export_chart

__all__ = [
    'Task',
    'TaskCategory',
    'ProfileInfo',
    'parse_profile',
    'load_profile',
    'CriticalPathAnalyzer',
    'CriticalPath',
    'CriticalPathEntry',
    'Chart',
    'DetailedChartCreator',
    'create_chart',
    'export_chart'
]
