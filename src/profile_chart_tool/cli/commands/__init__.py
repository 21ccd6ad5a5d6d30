"""
CLI命令模块
"""

from .chart import ChartCommand
from .critical_path import CriticalPathCommand

__all__ = ['ChartCommand', 'CriticalPathCommand']
